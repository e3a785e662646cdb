"""
End-to-end flows across the HTTP surface: from registration to a reviewed
lesson, and the effect of cancelling an accepted request.
"""


def _register(client, email, role, name="Ada"):
    response = client.post(
        "/auth/register",
        json={"name": name, "surname": "Tester", "email": email, "password": "SecretPass1", "role": role},
    )
    assert response.status_code == 201
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


def test_student_finds_teacher_and_books_a_lesson(client, subjects, future_start):
    teacher, teacher_headers = _register(client, "teacher@example.com", "TEACHER", name="Alan")
    student, student_headers = _register(client, "student@example.com", "STUDENT")

    client.patch(
        "/teachers/me",
        json={"city": "Nantes", "hourlyRate": 35, "bio": "Algebra tutor"},
        headers=teacher_headers,
    )
    client.put(
        "/teachers/me/subjects",
        json={"subjectIds": [subjects["Mathematics"].id]},
        headers=teacher_headers,
    )

    found = client.get(
        "/teachers", params={"city": "Nantes", "subjectId": subjects["Mathematics"].id}
    ).json()
    assert [item["id"] for item in found["items"]] == [teacher["id"]]

    request = client.post(
        "/requests",
        json={"teacherUserId": teacher["id"], "message": "Help with algebra?"},
        headers=student_headers,
    ).json()["contactRequest"]
    inbox = client.get("/requests/me", headers=teacher_headers).json()["contactRequests"]
    assert [r["id"] for r in inbox] == [request["id"]]

    accepted = client.patch(
        f"/requests/{request['id']}", json={"status": "ACCEPTED"}, headers=teacher_headers
    ).json()
    conversation_id = accepted["conversation"]["id"]

    for headers, content in ((student_headers, "Hi!"), (teacher_headers, "Hello, when suits you?")):
        sent = client.post(
            f"/conversations/{conversation_id}/messages", json={"content": content}, headers=headers
        )
        assert sent.status_code == 201
    thread = client.get(f"/conversations/{conversation_id}/messages", headers=student_headers).json()
    assert [m["content"] for m in thread["messages"]] == ["Hello, when suits you?", "Hi!"]

    lesson = client.post(
        "/lessons",
        json={
            "teacherUserId": teacher["id"],
            "studentUserId": student["id"],
            "subjectId": subjects["Mathematics"].id,
            "startAt": future_start.isoformat(),
            "durationMin": 90,
        },
        headers=teacher_headers,
    ).json()["lesson"]
    client.patch(f"/lessons/{lesson['id']}/status", json={"status": "CONFIRMED"}, headers=teacher_headers)
    confirmed = client.patch(
        f"/lessons/{lesson['id']}/status", json={"status": "CONFIRMED"}, headers=student_headers
    ).json()["lesson"]
    assert confirmed["statusForTeacher"] == confirmed["statusForStudent"] == "CONFIRMED"

    own = client.get(f"/teachers/{teacher['id']}/lessons", headers=teacher_headers).json()
    assert own["total"] == 1

    client.post(
        "/reviews",
        json={"teacherUserId": teacher["id"], "rating": 4, "comment": "Clear explanations"},
        headers=student_headers,
    )
    profile = client.get(f"/teachers/{teacher['id']}", headers=student_headers).json()["profile"]
    assert profile["ratingAvg"] == 4.0
    assert profile["reviewsCount"] == 1
    assert profile["subjects"][0]["name"] == "Mathematics"


def test_cancelling_accepted_request_closes_conversation(
    client, accepted_request, auth_headers_student, auth_headers_teacher
):
    request, conversation = accepted_request
    assert client.delete(f"/requests/{request.id}", headers=auth_headers_student).status_code == 204

    item = client.get("/conversations", headers=auth_headers_teacher).json()["conversations"][0]
    assert item["id"] == conversation.id
    assert item["isActive"] is False
    assert item["contactRequest"] is None

    blocked = client.post(
        f"/conversations/{conversation.id}/messages", json={"content": "Still there?"}, headers=auth_headers_teacher
    )
    assert blocked.status_code == 409
    assert blocked.json()["code"] == "CONFLICT"
