def test_student_profile(client, test_student, auth_headers_student, auth_headers_teacher):
    updated = client.patch(
        "/students/me",
        json={"city": "Lyon", "level": "UNIVERSITY", "track": "Engineering"},
        headers=auth_headers_student,
    )
    assert updated.status_code == 200
    profile = updated.json()["profile"]
    assert (profile["city"], profile["level"], profile["track"]) == ("Lyon", "UNIVERSITY", "Engineering")

    assert client.get("/students/me", headers=auth_headers_student).json()["profile"]["city"] == "Lyon"
    public = client.get(f"/students/{test_student.id}")
    assert public.status_code == 200
    assert public.json()["profile"]["userId"] == test_student.id

    assert client.get("/students/me", headers=auth_headers_teacher).status_code == 404
    bad_level = client.patch("/students/me", json={"level": "PHD"}, headers=auth_headers_student)
    assert bad_level.status_code == 400


def test_subject_catalogue(client, subjects):
    response = client.get("/subjects")
    assert response.status_code == 200
    names = [s["name"] for s in response.json()["subjects"]]
    assert names == sorted(subjects)


def test_health_and_metrics(client):
    assert client.get("/health").json() == {"status": "ok"}
    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "tutorlink_realtime_connections" in metrics.text
