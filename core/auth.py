import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import ForbiddenError, NotFoundError, UnauthenticatedError, UnauthorizedError
from core.revocation import TokenRevocationStore, get_revocation_store
from core.security import InvalidTokenError, decode_access_token
from crud.user_crud import get_user
from models.user import Role

logger = logging.getLogger(__name__)


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    token = _extract_bearer_token(authorization)
    if not token:
        raise UnauthenticatedError()
    return token


def get_current_user_id(
    token: str = Depends(get_bearer_token),
    revoked: TokenRevocationStore = Depends(get_revocation_store),
) -> str:
    # Revocation is checked before the signature
    if revoked.is_revoked(token):
        raise UnauthenticatedError()
    try:
        return decode_access_token(token)
    except InvalidTokenError as exc:
        logger.info("Rejected access token: %s", exc)
        raise ForbiddenError() from exc


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def require_role(role: Role):
    """Dependency factory: authenticated caller whose stored role is ``role``."""

    def checker(
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db),
    ):
        user = get_user(db, user_id)
        if not user or user.role != role:
            raise UnauthorizedError()
        return user

    return checker


require_admin = require_role(Role.admin)


def ensure_owner(resource, user_id: str, label: str):
    """Return ``resource`` when ``user_id`` authored it.

    Missing resources are 404, resources authored by someone else are 401.
    """
    if resource is None:
        raise NotFoundError(f"{label} not found")
    if resource.author_id != user_id:
        raise UnauthorizedError()
    return resource
