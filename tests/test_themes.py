import pytest

THEME = {
    "themeName": "Modern Dark",
    "primaryColor": "#FF5733",
    "secondaryColor": "#333",
    "fontFamily": "Roboto",
}


@pytest.fixture
def theme(client, auth_header):
    resp = client.post("/theme", json=THEME, headers=auth_header)
    assert resp.status_code == 201
    return resp.json()["data"]


def test_create_requires_token(client):
    resp = client.post("/theme", json=THEME)
    assert resp.status_code == 401
    assert resp.json()["error"] == "Authentication required"


def test_create_then_get(client, theme):
    for field, value in THEME.items():
        assert theme[field] == value
    assert theme["isActive"] is True
    assert theme["createdAt"] == theme["updatedAt"]

    resp = client.get("/theme/Modern Dark")
    assert resp.status_code == 200
    fetched = resp.json()["data"]
    assert fetched["id"] == theme["id"]
    for field, value in THEME.items():
        assert fetched[field] == value


def test_get_is_case_insensitive_substring(client, theme):
    resp = client.get("/theme/modern")
    assert resp.status_code == 200
    assert resp.json()["data"]["themeName"] == "Modern Dark"


def test_get_treats_key_literally(client, theme):
    assert client.get("/theme/Mod.rn").status_code == 404


def test_get_unknown_theme(client):
    resp = client.get("/theme/Nope")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Not Found", "message": "Theme not found"}


def test_list_newest_first(client, auth_header, theme):
    second = {**THEME, "themeName": "Light Breeze", "fontFamily": "Open Sans"}
    assert client.post("/theme", json=second, headers=auth_header).status_code == 201

    resp = client.get("/theme")
    body = resp.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert [t["themeName"] for t in body["data"]] == ["Light Breeze", "Modern Dark"]


def test_validation_reports_every_violation(client, auth_header):
    resp = client.post("/theme", headers=auth_header, json={
        "themeName": "Bad",
        "primaryColor": "red",
        "secondaryColor": "#12345",
        "fontFamily": "Comic Sans",
    })
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Validation Error"
    assert body["details"].count("Invalid color format") == 2
    assert any(d.startswith("Font family must be one of") for d in body["details"])


def test_missing_fields(client, auth_header):
    resp = client.post("/theme", headers=auth_header, json={"themeName": "Only Name"})
    assert resp.status_code == 400
    details = resp.json()["details"]
    assert "primaryColor is required" in details
    assert "secondaryColor is required" in details
    assert "fontFamily is required" in details


def test_font_family_is_case_sensitive(client, auth_header):
    resp = client.post("/theme", headers=auth_header, json={**THEME, "fontFamily": "roboto"})
    assert resp.status_code == 400


def test_update_requires_token(client, theme):
    resp = client.put("/theme/Modern Dark", json={"primaryColor": "#000000"})
    assert resp.status_code == 401


def test_update_ignores_name_change(client, auth_header, theme):
    resp = client.put("/theme/Modern Dark", headers=auth_header, json={
        "themeName": "Renamed",
        "primaryColor": "#000000",
    })
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["themeName"] == "Modern Dark"
    assert data["primaryColor"] == "#000000"
    assert data["secondaryColor"] == THEME["secondaryColor"]
    assert data["updatedAt"] >= data["createdAt"]
    assert client.get("/theme/Renamed").status_code == 404


def test_update_validates_present_fields(client, auth_header, theme):
    resp = client.put("/theme/Modern Dark", headers=auth_header, json={"secondaryColor": "blue"})
    assert resp.status_code == 400
    assert resp.json()["details"] == ["Invalid color format"]


def test_update_unknown_theme(client, auth_header):
    resp = client.put("/theme/Ghost", headers=auth_header, json={"primaryColor": "#000"})
    assert resp.status_code == 404


def test_soft_delete(client, db, theme):
    resp = client.delete("/theme/Modern Dark")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Theme deleted successfully"}

    assert client.get("/theme/Modern Dark").status_code == 404
    assert client.get("/theme").json()["count"] == 0
    assert client.delete("/theme/Modern Dark").status_code == 404

    stored = db["theme"].find_one({"themeName": "Modern Dark"})
    assert stored is not None
    assert stored["isActive"] is False


def test_recreate_after_soft_delete_is_duplicate(client, auth_header, theme):
    assert client.delete("/theme/Modern Dark").status_code == 200
    resp = client.post("/theme", json=THEME, headers=auth_header)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Duplicate Entry"


def test_update_and_delete_need_exact_name(client, auth_header, theme):
    assert client.put("/theme/modern dark", headers=auth_header, json={"primaryColor": "#000"}).status_code == 404
    assert client.put("/theme/Modern", headers=auth_header, json={"primaryColor": "#000"}).status_code == 404
    assert client.delete("/theme/MODERN DARK").status_code == 404
    assert client.get("/theme/Modern Dark").json()["data"]["primaryColor"] == THEME["primaryColor"]
