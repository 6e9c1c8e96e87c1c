import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi.middleware import SlowAPIMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from core.config import settings
from core.database import Base, engine
from core.errors import register_exception_handlers
from core.logging_config import setup_logging
from core.ratelimit import limiter
from models import user, password_reset, revoked_token, project, skill, post, certificate, contact  # noqa: F401
from routers import auth_router, user_router
from routers import project_router, skill_router, post_router, certificate_router, contact_router
from schemas.envelope import envelope

setup_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Portfolio Backend API")

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Respect X-Forwarded-For/Proto when behind a proxy, so rate limits key on the real client
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(project_router.router)
app.include_router(skill_router.router)
app.include_router(post_router.router)
app.include_router(certificate_router.router)
app.include_router(contact_router.router)

# Local asset store media mount
if settings.STORAGE_BACKEND.lower() == "local":
    os.makedirs(settings.MEDIA_DIR, exist_ok=True)
    app.mount(
        settings.MEDIA_URL_PATH,
        StaticFiles(directory=settings.MEDIA_DIR),
        name="media",
    )

logger.info("Portfolio backend ready (storage=%s)", settings.STORAGE_BACKEND)


@app.get("/")
def root():
    return envelope("Portfolio Backend API Ready")
