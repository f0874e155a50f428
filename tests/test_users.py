def test_create_and_get_user(client, user):
    assert user["username"] == "john_doe"
    assert user["email"] == "john@example.com"
    assert user["fullName"] == "John Doe"
    assert user["isActive"] is True
    assert user["createdAt"] == user["updatedAt"]

    resp = client.get("/user/JOHN")
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == user["id"]


def test_create_does_not_need_token(client):
    resp = client.post("/user", json={"username": "jane", "email": "jane@example.com", "fullName": "Jane"})
    assert resp.status_code == 201
    assert resp.json()["message"] == "User created successfully"


def test_missing_required_fields(client):
    resp = client.post("/user", json={"bio": "hello"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation Error"
    assert sorted(body["details"]) == ["email is required", "fullName is required", "username is required"]


def test_username_rules(client):
    too_short = client.post("/user", json={"username": "ab", "email": "ab@example.com", "fullName": "A B"})
    assert too_short.status_code == 400
    assert "Username must be at least 3 characters long" in too_short.json()["details"]

    bad_chars = client.post("/user", json={"username": "bad-name!", "email": "b@example.com", "fullName": "Bad"})
    assert bad_chars.status_code == 400

    too_long = client.post("/user", json={"username": "a" * 21, "email": "c@example.com", "fullName": "Long"})
    assert too_long.status_code == 400


def test_invalid_email_and_long_bio(client):
    resp = client.post("/user", json={
        "username": "valid_name",
        "email": "not-an-email",
        "fullName": "X",
        "bio": "b" * 501,
    })
    assert resp.status_code == 400
    details = resp.json()["details"]
    assert len(details) == 3
    assert any(d.startswith("email:") for d in details)
    assert "Full name must be at least 2 characters long" in details
    assert "Bio cannot exceed 500 characters" in details


def test_duplicate_username(client, user):
    resp = client.post("/user", json={"username": "john_doe", "email": "other@example.com", "fullName": "Other"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Duplicate Entry"


def test_duplicate_email(client, user):
    resp = client.post("/user", json={"username": "johnny", "email": "john@example.com", "fullName": "Johnny"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Duplicate Entry"


def test_list_users(client, user):
    resp = client.get("/user")
    body = resp.json()
    assert body["count"] == 1
    assert body["data"][0]["username"] == "john_doe"


def test_update_user(client, user):
    resp = client.put("/user/john_doe", json={"username": "hijack", "bio": "Full-stack developer"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["username"] == "john_doe"
    assert data["bio"] == "Full-stack developer"


def test_update_rejects_invalid_fields(client, user):
    resp = client.put("/user/john_doe", json={"profilePicture": "ftp://example.com/me.png"})
    assert resp.status_code == 400
    assert resp.json()["details"] == ["Invalid URL format"]


def test_delete_user(client, user):
    assert client.delete("/user/john_doe").status_code == 200
    assert client.get("/user/john_doe").status_code == 404
    assert client.put("/user/john_doe", json={"bio": "back"}).status_code == 404
    assert client.delete("/user/john_doe").status_code == 404


def test_soft_deleted_username_stays_taken(client, user):
    assert client.delete("/user/john_doe").status_code == 200
    resp = client.post("/user", json={"username": "john_doe", "email": "new@example.com", "fullName": "New John"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Duplicate Entry"


def test_update_and_delete_need_exact_username(client, user):
    assert client.put("/user/John_Doe", json={"bio": "changed"}).status_code == 404
    assert client.delete("/user/JOHN_DOE").status_code == 404
    assert client.delete("/user/john").status_code == 404
    assert client.get("/user/john_doe").status_code == 200
