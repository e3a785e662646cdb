def _review(client, headers, teacher_id, rating=5, comment="Excellent"):
    return client.post(
        "/reviews",
        json={"teacherUserId": teacher_id, "rating": rating, "comment": comment},
        headers=headers,
    )


def test_review_lifecycle_updates_profile_rating(
    client, test_teacher, auth_headers_student, auth_headers_student_2, auth_headers_teacher
):
    first = _review(client, auth_headers_student, test_teacher.id, rating=5)
    assert first.status_code == 201
    review = first.json()["review"]
    assert review["teacherUserId"] == test_teacher.id
    assert review["comment"] == "Excellent"

    _review(client, auth_headers_student_2, test_teacher.id, rating=2)
    profile = client.get(f"/teachers/{test_teacher.id}", headers=auth_headers_teacher).json()["profile"]
    assert profile["ratingAvg"] == 3.5
    assert profile["reviewsCount"] == 2

    patched = client.patch(f"/reviews/{review['id']}", json={"rating": 3}, headers=auth_headers_student)
    assert patched.status_code == 200
    assert patched.json()["review"]["comment"] == "Excellent"
    profile = client.get(f"/teachers/{test_teacher.id}", headers=auth_headers_teacher).json()["profile"]
    assert profile["ratingAvg"] == 2.5

    assert client.delete(f"/reviews/{review['id']}", headers=auth_headers_student).status_code == 204
    profile = client.get(f"/teachers/{test_teacher.id}", headers=auth_headers_teacher).json()["profile"]
    assert profile["reviewsCount"] == 1
    assert profile["ratingAvg"] == 2.0


def test_review_rules(client, test_teacher, auth_headers_student, auth_headers_student_2, auth_headers_teacher_2):
    assert _review(client, auth_headers_teacher_2, test_teacher.id).status_code == 403
    assert _review(client, auth_headers_student, test_teacher.id, rating=0).status_code == 400
    assert _review(client, auth_headers_student, test_teacher.id, comment="x" * 1001).status_code == 400

    review_id = _review(client, auth_headers_student, test_teacher.id).json()["review"]["id"]
    assert _review(client, auth_headers_student, test_teacher.id).status_code == 409

    other = client.patch(f"/reviews/{review_id}", json={"rating": 1}, headers=auth_headers_student_2)
    assert other.status_code == 403
    empty = client.patch(f"/reviews/{review_id}", json={}, headers=auth_headers_student)
    assert empty.status_code == 400


def test_review_listings(client, test_teacher, auth_headers_student, auth_headers_student_2):
    _review(client, auth_headers_student, test_teacher.id)
    _review(client, auth_headers_student_2, test_teacher.id, rating=4)

    public = client.get(f"/reviews/teacher/{test_teacher.id}", params={"pageSize": 1})
    assert public.status_code == 200
    body = public.json()
    assert (body["page"], body["pageSize"], body["total"], len(body["items"])) == (1, 1, 2, 1)

    mine = client.get("/reviews/me", headers=auth_headers_student).json()
    assert mine["total"] == 1

    assert client.get("/reviews/teacher/unknown").status_code == 404


def test_get_review_requires_auth(client, test_teacher, auth_headers_student):
    review_id = _review(client, auth_headers_student, test_teacher.id).json()["review"]["id"]
    assert client.get(f"/reviews/{review_id}").status_code == 401
    assert client.get(f"/reviews/{review_id}", headers=auth_headers_student).status_code == 200
    assert client.get("/reviews/unknown", headers=auth_headers_student).status_code == 404
