import io

from PIL import Image

from core.database import SessionLocal
from core.storage import AssetStore
from models.user import Role, User


class FakeAssetStore(AssetStore):
    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.fail_uploads = False
        self.fail_deletes = False

    def upload(self, key, data, content_type, filename=None):
        if self.fail_uploads:
            raise RuntimeError("storage unavailable")
        self.objects[key] = (data, content_type)
        return f"https://assets.test/{key}"

    def delete(self, key):
        if self.fail_deletes:
            raise RuntimeError("storage unavailable")
        self.deleted.append(key)
        self.objects.pop(key, None)


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.fail_for = set()

    def send(self, to, subject, html):
        if to in self.fail_for:
            raise ConnectionError(f"cannot deliver to {to}")
        self.sent.append({"to": to, "subject": subject, "html": html})


def png_bytes(color=(200, 30, 30), size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def image_file(name="image.png", color=(200, 30, 30)):
    return {"file": (name, png_bytes(color), "image/png")}


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, email="alice@mail.com", password="s3cret-pass", name="Alice"):
    resp = client.post(
        "/register",
        json={"name": name, "email": email, "password": password, "confirmPassword": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def login(client, email="alice@mail.com", password="s3cret-pass") -> str:
    resp = client.post("/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]["token"]


def signup(client, email="alice@mail.com", password="s3cret-pass", name="Alice"):
    """Register and log in; returns (token, user id)."""
    user = register(client, email=email, password=password, name=name)
    return login(client, email=email, password=password), user["id"]


def promote_to_admin(user_id: str) -> None:
    db = SessionLocal()
    try:
        db.query(User).filter(User.id == user_id).update({User.role: Role.admin})
        db.commit()
    finally:
        db.close()
