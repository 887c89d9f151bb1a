"""Account endpoint tests."""

import json


def test_register_returns_public_user(client):
    """Registration echoes the user without the password."""
    response = client.post(
        "/api/register",
        json={"name": "Ana", "studentId": "S2000", "password": "pw"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["user"]["name"] == "Ana"
    assert body["user"]["studentId"] == "S2000"
    assert len(body["user"]["id"]) == 21
    assert "password" not in body["user"]


def test_register_stores_password_in_plaintext(client, settings):
    client.post("/api/register", json={"name": "Ana", "studentId": "S2000", "password": "pw"})
    data = json.loads(settings.data_file.read_text())
    assert data["users"][0]["password"] == "pw"


def test_register_missing_fields(client):
    """Any missing or empty field is rejected with 400."""
    for body in (
        {"studentId": "S1", "password": "pw"},
        {"name": "Ana", "password": "pw"},
        {"name": "Ana", "studentId": "S1"},
        {"name": "", "studentId": "S1", "password": "pw"},
    ):
        response = client.post("/api/register", json=body)
        assert response.status_code == 400
        assert response.json() == {"ok": False, "msg": "Missing fields"}


def test_register_duplicate_student_id(client, registered_user):
    """A second registration with the same student id always fails."""
    response = client.post(
        "/api/register",
        json={"name": "Someone Else", "studentId": registered_user["studentId"], "password": "other"},
    )
    assert response.status_code == 409
    assert response.json()["msg"] == "Student ID already used"


def test_login(client, registered_user):
    response = client.post(
        "/api/login",
        json={"studentId": registered_user["studentId"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    assert response.json()["user"]["name"] == registered_user["name"]
    assert "password" not in response.json()["user"]


def test_login_wrong_password(client, registered_user):
    response = client.post(
        "/api/login",
        json={"studentId": registered_user["studentId"], "password": "HUNTER2"},
    )
    assert response.status_code == 401
    assert response.json() == {"ok": False, "msg": "Invalid credentials"}


def test_login_unknown_student(client, registered_user):
    response = client.post("/api/login", json={"studentId": "S9999", "password": "hunter2"})
    assert response.status_code == 401


def test_login_missing_password(client, registered_user):
    response = client.post("/api/login", json={"studentId": registered_user["studentId"]})
    assert response.status_code == 401


def test_get_user(client, registered_user):
    response = client.get(f"/api/users/{registered_user['studentId']}")
    assert response.status_code == 200
    assert response.json()["user"]["studentId"] == registered_user["studentId"]
    assert "password" not in response.json()["user"]


def test_get_user_not_found(client):
    response = client.get("/api/users/nobody")
    assert response.status_code == 404
    assert response.json() == {"ok": False, "msg": "Not found"}


def test_register_with_form_body(client):
    """Form-encoded registration works like JSON."""
    response = client.post(
        "/api/register",
        data={"name": "Ana", "studentId": "S3000", "password": "pw"},
    )
    assert response.status_code == 200
    assert response.json()["user"]["studentId"] == "S3000"


def test_login_with_form_body(client, registered_user):
    response = client.post(
        "/api/login",
        data={"studentId": registered_user["studentId"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    assert response.json()["user"]["name"] == registered_user["name"]


def test_register_empty_body(client):
    """No body at all is reported as missing fields."""
    response = client.post("/api/register")
    assert response.status_code == 400
    assert response.json() == {"ok": False, "msg": "Missing fields"}


def test_login_empty_body(client, registered_user):
    assert client.post("/api/login").status_code == 401


def test_register_invalid_json(client):
    response = client.post(
        "/api/register",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"ok": False, "msg": "Invalid JSON body"}
