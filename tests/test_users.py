from tests.utils import auth, image_file, promote_to_admin, register, signup


def test_profile_hides_password(client):
    token, user_id = signup(client)
    for method in (client.get, client.post):
        resp = method("/profile", headers=auth(token))
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["id"] == user_id
        assert "password" not in data
        assert "avatar_ref" not in data


def test_update_profile(client):
    token, _ = signup(client)
    resp = client.patch("/profile", headers=auth(token), json={"name": "Alice B", "email": "alice.b@mail.com"})
    assert resp.status_code == 200
    assert resp.json()["data"]["email"] == "alice.b@mail.com"


def test_update_profile_keeps_own_email_but_rejects_taken_one(client):
    token, _ = signup(client)
    register(client, email="bob@mail.com", name="Bob")
    same = client.patch("/profile", headers=auth(token), json={"name": "Alice", "email": "alice@mail.com"})
    assert same.status_code == 200
    taken = client.patch("/profile", headers=auth(token), json={"name": "Alice", "email": "bob@mail.com"})
    assert taken.status_code == 409


def test_change_password(client):
    token, _ = signup(client, password="first-pass")
    same = client.put("/change_password", headers=auth(token), json={"password": "first-pass", "confirmPassword": "first-pass"})
    assert same.status_code == 400
    assert same.json()["message"] == "New password cannot be the same"

    resp = client.put("/change_password", headers=auth(token), json={"password": "second-pass", "confirmPassword": "second-pass"})
    assert resp.status_code == 200
    assert client.post("/login", json={"email": "alice@mail.com", "password": "second-pass"}).status_code == 200


def test_change_avatar_replaces_old_blob(client, store):
    token, user_id = signup(client)
    first = client.put("/change_avatar", headers=auth(token), files=image_file("me.png"))
    assert first.status_code == 200
    first_url = first.json()["data"]["avatar"]
    first_key = first_url.removeprefix("https://assets.test/")
    assert first_key.startswith(f"avatars/{user_id}/")

    second = client.put("/change_avatar", headers=auth(token), files=image_file("me2.png", color=(0, 0, 255)))
    assert second.status_code == 200
    assert second.json()["data"]["avatar"] != first_url
    assert store.deleted == [first_key]
    assert first_key not in store.objects


def test_failed_avatar_upload_keeps_old_avatar(client, store):
    token, _ = signup(client)
    first = client.put("/change_avatar", headers=auth(token), files=image_file())
    url = first.json()["data"]["avatar"]

    store.fail_uploads = True
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app, raise_server_exceptions=False) as c:
        failed = c.put("/change_avatar", headers=auth(token), files=image_file())
    assert failed.status_code == 500
    assert store.deleted == []
    assert client.get("/profile", headers=auth(token)).json()["data"]["avatar"] == url


def test_public_profile(client):
    _, user_id = signup(client)
    resp = client.get(f"/users/public/{user_id}")
    assert resp.status_code == 200
    assert set(resp.json()["data"]) == {"id", "name", "avatar"}
    assert client.get("/users/public/missing").status_code == 404


def test_statistics_count_own_content(client):
    token, _ = signup(client)
    other, _ = signup(client, email="bob@mail.com", name="Bob")
    client.post("/skills", headers=auth(token), data={"name": "Python"}, files=image_file())
    client.post("/skills", headers=auth(other), data={"name": "Go"}, files=image_file())
    client.post("/certificates", headers=auth(token), data={"name": "AWS"}, files=image_file())

    resp = client.get("/mystatistics", headers=auth(token))
    assert resp.json()["data"] == {
        "posts_count": 0,
        "projects_count": 0,
        "skills_count": 1,
        "certificates_count": 1,
    }


def test_admin_routes_require_admin_role(client):
    token, user_id = signup(client)
    assert client.get("/users", headers=auth(token)).status_code == 401
    assert client.get(f"/users/{user_id}", headers=auth(token)).status_code == 401

    promote_to_admin(user_id)
    resp = client.get("/users", headers=auth(token))
    assert resp.status_code == 200
    assert [u["id"] for u in resp.json()["data"]] == [user_id]
    assert client.get(f"/users/{user_id}", headers=auth(token)).status_code == 200
    assert client.get("/users/missing", headers=auth(token)).status_code == 404


def test_admin_creates_user_with_role(client):
    token, user_id = signup(client)
    promote_to_admin(user_id)
    resp = client.post(
        "/users",
        headers=auth(token),
        json={"name": "Eve", "email": "eve@mail.com", "password": "pw", "confirmPassword": "pw", "role": "admin"},
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["role"] == "admin"
