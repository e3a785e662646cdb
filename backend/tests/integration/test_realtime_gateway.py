import pytest
from starlette.websockets import WebSocketDisconnect


def _token(headers):
    return headers["Authorization"].split(" ", 1)[1]


def _join(ws, conversation_id):
    ws.send_json({"event": "conversation:join", "data": {"conversationId": conversation_id}})
    return ws.receive_json()


class TestHandshake:
    def test_header_token(self, client, test_student, auth_headers_student):
        with client.websocket_connect("/ws", headers=auth_headers_student) as ws:
            frame = ws.receive_json()
        assert frame == {"event": "connected", "data": {"userId": test_student.id, "role": "STUDENT"}}

    def test_first_frame_token(self, client, test_teacher, auth_headers_teacher):
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"auth": {"token": _token(auth_headers_teacher)}})
            frame = ws.receive_json()
        assert frame["event"] == "connected"
        assert frame["data"]["userId"] == test_teacher.id

    def test_invalid_token_closes_socket(self, client):
        with client.websocket_connect("/ws", headers={"Authorization": "Bearer nope"}) as ws:
            error = ws.receive_json()
            assert error["event"] == "socket:error"
            assert error["data"]["code"] == 401
            assert error["data"]["type"] == "UNAUTHORIZED"
            with pytest.raises(WebSocketDisconnect) as exc_info:
                ws.receive_json()
        assert exc_info.value.code == 4401


class TestEvents:
    def test_ping_and_bad_frames(self, client, auth_headers_student):
        with client.websocket_connect("/ws", headers=auth_headers_student) as ws:
            ws.receive_json()
            ws.send_json({"event": "ping", "data": {"n": 1}})
            assert ws.receive_json() == {"event": "pong", "data": {"n": 1}}

            ws.send_text("{not json")
            assert ws.receive_json()["data"]["code"] == 400

            ws.send_json({"event": "lesson:book", "data": {}})
            unknown = ws.receive_json()
            assert unknown["event"] == "socket:error"
            assert unknown["data"]["type"] == "VALIDATION_ERROR"

    def test_join_gates(self, client, accepted_request, auth_headers_student, auth_headers_student_2):
        _, conversation = accepted_request
        with client.websocket_connect("/ws", headers=auth_headers_student_2) as ws:
            ws.receive_json()
            denied = _join(ws, conversation.id)
            assert denied["event"] == "socket:error"
            assert denied["data"]["code"] == 403
            missing = _join(ws, "unknown")
            assert missing["data"]["code"] == 404

        with client.websocket_connect("/ws", headers=auth_headers_student) as ws:
            ws.receive_json()
            assert _join(ws, conversation.id) == {
                "event": "conversation:joined",
                "data": {"conversationId": conversation.id},
            }

    def test_send_requires_join(self, client, accepted_request, auth_headers_student):
        _, conversation = accepted_request
        with client.websocket_connect("/ws", headers=auth_headers_student) as ws:
            ws.receive_json()
            ws.send_json(
                {"event": "message:send", "data": {"conversationId": conversation.id, "content": "Hi"}}
            )
            error = ws.receive_json()
        assert error["event"] == "socket:error"
        assert error["data"]["code"] == 403

    def test_socket_message_reaches_room(
        self, client, accepted_request, test_student, auth_headers_student, auth_headers_teacher
    ):
        _, conversation = accepted_request
        with client.websocket_connect("/ws", headers=auth_headers_teacher) as teacher_ws:
            teacher_ws.receive_json()
            _join(teacher_ws, conversation.id)
            with client.websocket_connect("/ws", headers=auth_headers_student) as student_ws:
                student_ws.receive_json()
                _join(student_ws, conversation.id)
                student_ws.send_json(
                    {
                        "event": "message:send",
                        "data": {"conversationId": conversation.id, "content": "  See you soon  "},
                    }
                )

                incoming = teacher_ws.receive_json()
                assert incoming["event"] == "message:new"
                message = incoming["data"]["message"]
                assert message["content"] == "See you soon"
                assert message["senderUserId"] == test_student.id

                echoed = student_ws.receive_json()
                assert echoed["event"] == "message:new"
                ack = student_ws.receive_json()
                assert ack == {
                    "event": "message:sent",
                    "data": {"conversationId": conversation.id, "messageId": message["id"]},
                }

        history = client.get(f"/conversations/{conversation.id}/messages", headers=auth_headers_teacher)
        assert history.json()["total"] == 1


    def test_send_on_cancelled_request_is_a_conflict(
        self, client, accepted_request, auth_headers_student, auth_headers_teacher
    ):
        request, conversation = accepted_request
        with client.websocket_connect("/ws", headers=auth_headers_student) as ws:
            ws.receive_json()
            _join(ws, conversation.id)
            assert client.delete(f"/requests/{request.id}", headers=auth_headers_teacher).status_code == 204

            ws.send_json(
                {"event": "message:send", "data": {"conversationId": conversation.id, "content": "Hello?"}}
            )
            error = ws.receive_json()

            ws.send_json({"event": "ping", "data": {}})
            assert ws.receive_json()["event"] == "pong"

        assert error["event"] == "socket:error"
        assert error["data"]["code"] == 409
        assert error["data"]["type"] == "CONFLICT"

    def test_send_rejects_overlong_content(self, client, accepted_request, auth_headers_student):
        _, conversation = accepted_request
        with client.websocket_connect("/ws", headers=auth_headers_student) as ws:
            ws.receive_json()
            _join(ws, conversation.id)
            ws.send_json(
                {
                    "event": "message:send",
                    "data": {"conversationId": conversation.id, "content": "x" * 2001},
                }
            )
            error = ws.receive_json()

        assert error["event"] == "socket:error"
        assert error["data"]["code"] == 400
        assert error["data"]["type"] == "VALIDATION_ERROR"
        history = client.get(f"/conversations/{conversation.id}/messages", headers=auth_headers_student)
        assert history.json()["total"] == 0

class TestHttpFanOut:
    def test_http_message_is_pushed(self, client, accepted_request, auth_headers_student, auth_headers_teacher):
        _, conversation = accepted_request
        with client.websocket_connect("/ws", headers=auth_headers_teacher) as ws:
            ws.receive_json()
            _join(ws, conversation.id)
            sent = client.post(
                f"/conversations/{conversation.id}/messages",
                json={"content": "Sent over HTTP"},
                headers=auth_headers_student,
            )
            assert sent.status_code == 201
            frame = ws.receive_json()
        assert frame["event"] == "message:new"
        assert frame["data"]["message"]["id"] == sent.json()["id"]

    def test_contact_request_notifies_teacher(
        self, client, test_student, test_teacher, auth_headers_student, auth_headers_teacher
    ):
        with client.websocket_connect("/ws", headers=auth_headers_teacher) as ws:
            ws.receive_json()
            created = client.post(
                "/requests",
                json={"teacherUserId": test_teacher.id, "message": "Physics help"},
                headers=auth_headers_student,
            ).json()["contactRequest"]
            created_frame = ws.receive_json()

            client.patch(
                f"/requests/{created['id']}", json={"status": "REJECTED"}, headers=auth_headers_teacher
            )
            status_frame = ws.receive_json()

        assert created_frame["event"] == "contactRequest:created"
        assert created_frame["data"]["contactRequest"]["id"] == created["id"]
        assert created_frame["data"]["contactRequest"]["studentUserId"] == test_student.id
        assert status_frame["event"] == "contactRequest:statusUpdated"
