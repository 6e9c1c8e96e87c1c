import json

from fastapi.testclient import TestClient

from main import app
from tests.utils import auth, image_file, signup


def _skill(client, token, name):
    resp = client.post("/skills", headers=auth(token), data={"name": name}, files=image_file())
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["id"]


def _create_project(client, token, skills, title="Portfolio site"):
    return client.post(
        "/projects",
        headers=auth(token),
        data={"title": title, "description": "My site", "skills": json.dumps(skills)},
        files=image_file("cover.png"),
    )


def _project_ids_of(client, skill_id):
    return client.get(f"/public/skills/{skill_id}").json()["data"]["projects"]


def test_create_project_links_skills(client, store):
    token, user_id = signup(client)
    s1, s2 = _skill(client, token, "Python"), _skill(client, token, "SQL")

    resp = _create_project(client, token, [s1, s2])
    assert resp.status_code == 201
    project = resp.json()["data"]
    assert sorted(project["skill_ids"]) == sorted([s1, s2])
    assert project["author_id"] == user_id
    assert project["image"].startswith(f"https://assets.test/projects/{user_id}/")

    for skill_id in (s1, s2):
        assert [p["id"] for p in _project_ids_of(client, skill_id)] == [project["id"]]


def test_update_project_applies_skill_difference(client):
    token, _ = signup(client)
    s1, s2, s3 = (_skill(client, token, n) for n in ("s1", "s2", "s3"))
    project_id = _create_project(client, token, [s1, s2]).json()["data"]["id"]

    resp = client.patch(
        f"/projects/{project_id}",
        headers=auth(token),
        data={"title": "Portfolio site", "description": "My site", "skills": json.dumps([s2, s3])},
    )
    assert resp.status_code == 200
    assert sorted(resp.json()["data"]["skill_ids"]) == sorted([s2, s3])

    assert _project_ids_of(client, s1) == []
    assert [p["id"] for p in _project_ids_of(client, s2)] == [project_id]
    assert [p["id"] for p in _project_ids_of(client, s3)] == [project_id]


def test_create_project_with_unknown_skill_uploads_nothing(client, store):
    token, _ = signup(client)
    resp = _create_project(client, token, ["missing-skill"])
    assert resp.status_code == 400
    assert not any(k.startswith("projects/") for k in store.objects)


def test_create_project_requires_every_field(client):
    token, _ = signup(client)
    resp = client.post(
        "/projects",
        headers=auth(token),
        data={"title": "t", "description": "d", "skills": "[]"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "All fields are required"


def test_update_with_file_uploads_new_before_deleting_old(client, store):
    token, _ = signup(client)
    created = _create_project(client, token, []).json()["data"]
    old_key = created["image"].removeprefix("https://assets.test/")

    resp = client.patch(
        f"/projects/{created['id']}",
        headers=auth(token),
        data={"title": "New title", "description": "d", "skills": "[]"},
        files=image_file("new.png", color=(1, 2, 3)),
    )
    assert resp.status_code == 200
    new_key = resp.json()["data"]["image"].removeprefix("https://assets.test/")
    assert new_key != old_key
    assert new_key in store.objects
    assert store.deleted == [old_key]


def test_failed_upload_on_update_keeps_old_image(client, store):
    token, _ = signup(client)
    created = _create_project(client, token, []).json()["data"]
    store.fail_uploads = True

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.patch(
            f"/projects/{created['id']}",
            headers=auth(token),
            data={"title": "t", "description": "d", "skills": "[]"},
            files=image_file(),
        )
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Server Error"}
    assert store.deleted == []
    current = client.get(f"/projects/{created['id']}", headers=auth(token)).json()["data"]
    assert current["image"] == created["image"]


def test_delete_project_removes_record_blob_and_links(client, store):
    token, _ = signup(client)
    s1 = _skill(client, token, "Python")
    created = _create_project(client, token, [s1]).json()["data"]

    resp = client.delete(f"/projects/{created['id']}", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == created["id"]
    assert created["image"].removeprefix("https://assets.test/") in store.deleted
    assert client.get(f"/public/projects/{created['id']}").status_code == 404
    assert _project_ids_of(client, s1) == []


def test_delete_survives_blob_store_failure(client, store):
    token, _ = signup(client)
    created = _create_project(client, token, []).json()["data"]
    store.fail_deletes = True
    resp = client.delete(f"/projects/{created['id']}", headers=auth(token))
    assert resp.status_code == 200
    assert client.get(f"/public/projects/{created['id']}").status_code == 404


def test_non_owner_gets_unauthorized(client):
    owner, _ = signup(client)
    intruder, _ = signup(client, email="mallory@mail.com", name="Mallory")
    project_id = _create_project(client, owner, []).json()["data"]["id"]
    form = {"title": "hijacked", "description": "d", "skills": "[]"}

    assert client.patch(f"/projects/{project_id}", headers=auth(intruder), data=form).status_code == 401
    assert client.delete(f"/projects/{project_id}", headers=auth(intruder)).status_code == 401
    assert client.get(f"/projects/{project_id}", headers=auth(intruder)).status_code == 401
    assert client.delete("/projects/missing", headers=auth(intruder)).status_code == 404


def test_private_listings_only_show_own_projects(client):
    alice, _ = signup(client)
    bob, _ = signup(client, email="bob@mail.com", name="Bob")
    _create_project(client, alice, [], title="A")
    _create_project(client, bob, [], title="B")

    for path in ("/projects", "/myprojects"):
        titles = [p["title"] for p in client.get(path, headers=auth(alice)).json()["data"]]
        assert titles == ["A"]


def test_public_listing_embeds_author_and_skills(client):
    token, user_id = signup(client)
    s1 = _skill(client, token, "Python")
    _create_project(client, token, [s1])

    resp = client.get("/public/projects")
    assert resp.status_code == 200
    project = resp.json()["data"][0]
    assert project["author"] == {"id": user_id, "name": "Alice", "avatar": None}
    assert project["skills"][0]["name"] == "Python"
    assert "email" not in project["author"]


def test_public_listing_paginates(client):
    token, _ = signup(client)
    for i in range(3):
        _create_project(client, token, [], title=f"P{i}")
    page = client.get("/public/projects", params={"skip": 1, "limit": 1}).json()["data"]
    assert len(page) == 1
