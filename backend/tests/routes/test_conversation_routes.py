def test_send_and_list_messages(client, accepted_request, test_student, auth_headers_student, auth_headers_teacher):
    _, conversation = accepted_request

    sent = client.post(
        f"/conversations/{conversation.id}/messages",
        json={"content": "  Hello!  "},
        headers=auth_headers_student,
    )
    assert sent.status_code == 201
    message = sent.json()
    assert message["content"] == "Hello!"
    assert message["senderUserId"] == test_student.id
    assert message["conversationId"] == conversation.id

    listing = client.get(
        f"/conversations/{conversation.id}/messages",
        params={"page": 1, "pageSize": 10},
        headers=auth_headers_teacher,
    )
    assert listing.status_code == 200
    body = listing.json()
    assert (body["page"], body["pageSize"], body["total"]) == (1, 10, 1)
    assert body["messages"][0]["id"] == message["id"]


def test_message_validation(client, accepted_request, auth_headers_student):
    _, conversation = accepted_request
    url = f"/conversations/{conversation.id}/messages"

    assert client.post(url, json={"content": "   "}, headers=auth_headers_student).status_code == 400
    assert client.post(url, json={}, headers=auth_headers_student).status_code == 400
    too_long = client.post(url, json={"content": "x" * 2001}, headers=auth_headers_student)
    assert too_long.status_code == 400
    assert client.post(url, json={"content": "x" * 2000}, headers=auth_headers_student).status_code == 201


def test_conversation_gates(client, accepted_request, auth_headers_student, auth_headers_student_2, auth_headers_teacher):
    request, conversation = accepted_request

    missing = client.post(
        "/conversations/unknown/messages", json={"content": "hi"}, headers=auth_headers_student
    )
    assert missing.status_code == 404

    outsider = client.get(f"/conversations/{conversation.id}/messages", headers=auth_headers_student_2)
    assert outsider.status_code == 403

    client.delete(f"/requests/{request.id}", headers=auth_headers_teacher)
    inactive = client.post(
        f"/conversations/{conversation.id}/messages", json={"content": "hi"}, headers=auth_headers_student
    )
    assert inactive.status_code == 409


def test_inbox(client, accepted_request, test_teacher, auth_headers_student, auth_headers_student_2):
    _, conversation = accepted_request
    client.post(
        f"/conversations/{conversation.id}/messages", json={"content": "Ping"}, headers=auth_headers_student
    )

    inbox = client.get("/conversations", headers=auth_headers_student).json()
    assert inbox["limit"] == 50
    assert inbox["offset"] == 0
    item = inbox["conversations"][0]
    assert item["id"] == conversation.id
    assert item["partner"]["id"] == test_teacher.id
    assert item["lastMessage"]["content"] == "Ping"
    assert item["isActive"] is True

    assert client.get("/conversations", headers=auth_headers_student_2).json()["conversations"] == []
    clamped = client.get("/conversations", params={"limit": 1000}, headers=auth_headers_student).json()
    assert clamped["limit"] == 100
