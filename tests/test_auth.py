import time

import jwt

from core.config import settings
from tests.utils import auth, login, register, signup


def test_register_then_login(client):
    user = register(client)
    assert user["email"] == "alice@mail.com"
    assert user["role"] == "user"
    assert "password" not in user

    resp = client.post("/login", json={"email": "alice@mail.com", "password": "s3cret-pass"})
    body = resp.json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["data"]["user"]["id"] == user["id"]
    assert body["data"]["token"]


def test_register_rejects_duplicate_email(client):
    register(client)
    resp = client.post(
        "/register",
        json={"name": "Other", "email": "alice@mail.com", "password": "x", "confirmPassword": "x"},
    )
    assert resp.status_code == 409
    assert resp.json() == {"success": False, "message": "Email already exists"}


def test_register_rejects_password_mismatch(client):
    resp = client.post(
        "/register",
        json={"name": "Bob", "email": "bob@mail.com", "password": "one", "confirmPassword": "two"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Passwords do not match"


def test_register_requires_all_fields(client):
    resp = client.post("/register", json={"name": "Bob", "email": "bob@mail.com", "password": "one"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "All fields are required"


def test_login_failures_share_one_message(client):
    register(client)
    wrong_password = client.post("/login", json={"email": "alice@mail.com", "password": "nope"})
    unknown_email = client.post("/login", json={"email": "nobody@mail.com", "password": "s3cret-pass"})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "success": False,
        "message": "Email or password is incorrect",
    }


def test_missing_token_is_401(client):
    resp = client.post("/verify_token")
    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_non_bearer_header_is_401(client):
    token, _ = signup(client)
    resp = client.post("/verify_token", headers={"Authorization": f"Token {token}"})
    assert resp.status_code == 401


def test_invalid_token_is_403(client):
    resp = client.post("/verify_token", headers=auth("not-a-jwt"))
    assert resp.status_code == 403
    assert resp.json() == {"success": False, "message": "Forbidden"}


def test_expired_token_is_403(client):
    _, user_id = signup(client)
    past = int(time.time()) - 5
    token = jwt.encode({"userId": user_id, "exp": past}, settings.ACCESS_TOKEN_SECRET, algorithm="HS256")
    assert client.post("/verify_token", headers=auth(token)).status_code == 403


def test_verify_token_returns_caller(client):
    token, user_id = signup(client)
    resp = client.post("/verify_token", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == user_id


def test_logout_revokes_only_that_token(client, revocations):
    token, _ = signup(client)
    other = login(client)

    resp = client.post("/logout", headers=auth(token))
    assert resp.status_code == 200
    assert revocations.is_revoked(token)

    again = client.post("/verify_token", headers=auth(token))
    assert again.status_code == 401
    assert client.post("/verify_token", headers=auth(other)).status_code == 200


def test_revocation_is_checked_before_signature(client, revocations):
    revocations.revoke("not-a-jwt", None)
    resp = client.post("/verify_token", headers=auth("not-a-jwt"))
    assert resp.status_code == 401


def test_token_for_deleted_user_is_404(client):
    from core.database import SessionLocal
    from models.user import User

    token, user_id = signup(client)
    db = SessionLocal()
    try:
        db.query(User).filter(User.id == user_id).delete()
        db.commit()
    finally:
        db.close()
    resp = client.post("/verify_token", headers=auth(token))
    assert resp.status_code == 404


def test_mixed_case_domain_logs_in_with_the_registered_spelling(client, mailer):
    register(client, email="Alice@Mail.COM")
    resp = client.post("/login", json={"email": "Alice@Mail.COM", "password": "s3cret-pass"})
    assert resp.status_code == 200
    assert resp.json()["data"]["user"]["email"] == "Alice@mail.com"

    forgot = client.post("/forgot_password", json={"email": "Alice@Mail.COM"})
    assert forgot.status_code == 200
    assert mailer.sent[-1]["to"] == "Alice@mail.com"


def test_malformed_login_email_gets_generic_failure(client):
    register(client)
    resp = client.post("/login", json={"email": "not-an-email", "password": "s3cret-pass"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Email or password is incorrect"


def test_password_longer_than_bcrypt_limit_is_rejected(client):
    long_ascii = "x" * 87
    long_utf8 = "é" * 40  # 80 bytes
    for password in (long_ascii, long_utf8):
        resp = client.post(
            "/register",
            json={"name": "Bob", "email": "bob@mail.com", "password": password, "confirmPassword": password},
        )
        assert resp.status_code == 400
        assert resp.json()["success"] is False


def test_password_at_bcrypt_limit_is_accepted(client):
    password = "p" * 72
    register(client, password=password)
    assert login(client, password=password)


def test_change_password_rejects_overlong_password(client):
    token, _ = signup(client)
    password = "y" * 100
    resp = client.put("/change_password", headers=auth(token), json={"password": password, "confirmPassword": password})
    assert resp.status_code == 400
