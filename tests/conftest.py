import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="portfolio-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["MEDIA_DIR"] = os.path.join(_TMP, "media")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT"] = "60/minute"
os.environ["RATE_LIMIT_ENABLED"] = "true"
os.environ["CONTACT_INBOX"] = "owner@portfolio.dev"

import pytest
from fastapi.testclient import TestClient

from core.database import Base, engine
from core.mailer import get_mailer
from core.ratelimit import limiter
from core.revocation import InMemoryRevocationStore, get_revocation_store
from core.storage import get_asset_store
from main import app
from tests.utils import FakeAssetStore, FakeMailer


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    limiter.reset()
    yield


@pytest.fixture
def store():
    return FakeAssetStore()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def revocations():
    return InMemoryRevocationStore()


@pytest.fixture
def client(store, mailer, revocations):
    app.dependency_overrides[get_asset_store] = lambda: store
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_revocation_store] = lambda: revocations
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
