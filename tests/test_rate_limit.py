def test_requests_over_the_limit_are_rejected(client):
    for _ in range(60):
        assert client.get("/").status_code == 200

    resp = client.get("/")
    assert resp.status_code == 429
    assert resp.json() == {"success": False, "message": "Too many requests, please try again later."}


def test_limit_is_shared_across_routes(client):
    for _ in range(30):
        assert client.get("/").status_code == 200
    for _ in range(30):
        assert client.get("/public/projects").status_code == 200

    assert client.get("/public/skills").status_code == 429
    assert client.get("/").status_code == 429
