import hashlib
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import lru_cache

from sqlalchemy.orm import sessionmaker

from core.config import settings
from core.database import SessionLocal
from crud import revoked_token_crud

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TokenRevocationStore(ABC):
    """Deny-list of access tokens invalidated before their natural expiry."""

    @abstractmethod
    def revoke(self, token: str, expires_at: datetime | None) -> None:
        ...

    @abstractmethod
    def is_revoked(self, token: str) -> bool:
        ...


class InMemoryRevocationStore(TokenRevocationStore):
    """Process-local store; forgotten on restart.

    Entries are dropped once the token itself has expired, since an expired
    token fails verification anyway.
    """

    def __init__(self):
        self._tokens: dict[str, datetime | None] = {}
        self._lock = threading.Lock()

    def revoke(self, token, expires_at):
        with self._lock:
            self._prune()
            self._tokens[token] = _aware(expires_at) if expires_at else None

    def is_revoked(self, token):
        with self._lock:
            return token in self._tokens

    def __len__(self):
        with self._lock:
            return len(self._tokens)

    def _prune(self):
        now = _now()
        expired = [t for t, exp in self._tokens.items() if exp is not None and exp <= now]
        for t in expired:
            del self._tokens[t]


class DatabaseRevocationStore(TokenRevocationStore):
    """Store backed by the ``revoked_tokens`` table; survives restarts and is
    shared by every worker pointed at the same database."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @staticmethod
    def _digest(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def revoke(self, token, expires_at):
        db = self._session_factory()
        try:
            revoked_token_crud.delete_expired(db, _now())
            revoked_token_crud.add_revoked_token(db, self._digest(token), expires_at)
        finally:
            db.close()

    def is_revoked(self, token):
        db = self._session_factory()
        try:
            return revoked_token_crud.get_revoked_token(db, self._digest(token)) is not None
        finally:
            db.close()


@lru_cache
def get_revocation_store() -> TokenRevocationStore:
    backend = settings.TOKEN_REVOCATION_BACKEND.lower()
    if backend == "database":
        logger.info("Token revocation backed by the database")
        return DatabaseRevocationStore(SessionLocal)
    if backend != "memory":
        raise ValueError(f"Unknown TOKEN_REVOCATION_BACKEND: {settings.TOKEN_REVOCATION_BACKEND}")
    logger.info("Token revocation kept in memory")
    return InMemoryRevocationStore()
