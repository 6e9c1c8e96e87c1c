import secrets
import time
import uuid
from datetime import datetime, timezone

import bcrypt
import jwt

from core.config import settings

ALGORITHM = "HS256"
# bcrypt ignores (4.x) or rejects (5.x) anything past this
MAX_PASSWORD_BYTES = 72


class InvalidTokenError(Exception):
    pass


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash stored for this user
        return False


def create_access_token(user_id: str) -> tuple[str, datetime]:
    """Sign an access token for ``user_id``.

    Returns the token and its expiry. ``jti`` keeps two tokens issued in the
    same second distinct, so revoking one never revokes the other.
    """
    iat = int(time.time())
    exp = iat + settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    payload = {
        "userId": user_id,
        "iat": iat,
        "exp": exp,
        "jti": uuid.uuid4().hex,
    }
    token = jwt.encode(payload, settings.ACCESS_TOKEN_SECRET, algorithm=ALGORITHM)
    return token, datetime.fromtimestamp(exp, tz=timezone.utc)


def decode_access_token(token: str) -> str:
    """Return the user id carried by ``token`` or raise InvalidTokenError."""
    try:
        payload = jwt.decode(token, settings.ACCESS_TOKEN_SECRET, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenError("Token carries no user id")
    return user_id


def token_expiry(token: str) -> datetime | None:
    """Expiry of a token without verifying it; None when unreadable."""
    try:
        payload = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
    except jwt.PyJWTError:
        return None
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)


def generate_reset_code(user_id: str) -> str:
    # Random part carries the entropy; user id and ms timestamp make it unique
    return f"{secrets.token_hex(32)}{user_id}{int(time.time() * 1000)}"
