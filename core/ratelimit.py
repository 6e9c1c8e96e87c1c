from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import settings

# One per-IP window shared by every route, enforced by SlowAPIMiddleware
limiter = Limiter(
    key_func=get_remote_address,
    application_limits=[settings.RATE_LIMIT],
    enabled=settings.RATE_LIMIT_ENABLED,
)
