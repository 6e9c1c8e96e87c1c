import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_bearer_token, get_current_user, get_current_user_id
from core.config import settings
from core.database import get_db
from core.errors import ConflictError, NotFoundError, UnauthenticatedError, ValidationError
from core.forms import require_fields
from core.mailer import Mailer, get_mailer, reset_password_email
from core.revocation import TokenRevocationStore, get_revocation_store
from core.security import create_access_token, generate_reset_code, token_expiry, verify_password
from crud.password_reset_crud import create_reset_code, get_by_code, redeem_reset_code
from crud.user_crud import create_user, email_taken, get_user_by_email
from models.password_reset import ResetCodeStatus
from schemas.envelope import Envelope, envelope
from schemas.user_schema import (
    ForgotPasswordRequest,
    LoginData,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UserCreate,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])

INVALID_CREDENTIALS = "Email or password is incorrect"


@router.post("/register", response_model=Envelope[UserResponse], status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    if payload.password != payload.confirm_password:
        raise ValidationError("Passwords do not match")
    if email_taken(db, payload.email):
        raise ConflictError("Email already exists")
    user = create_user(db, UserCreate(name=payload.name, email=payload.email, password=payload.password))
    logger.info("Registered user %s", user.id)
    return envelope("User created successfully", UserResponse.model_validate(user))


@router.post("/login", response_model=Envelope[LoginData])
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email + password for a bearer token.
    Unknown email and wrong password get the same answer.
    """
    user = get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.password):
        logger.info("Failed login for %s", payload.email)
        raise UnauthenticatedError(INVALID_CREDENTIALS)

    token, expires_at = create_access_token(user.id)
    data = LoginData(token=token, expires_at=expires_at, user=UserResponse.model_validate(user))
    return envelope("Login successful", data)


@router.post("/logout", response_model=Envelope[None])
def logout(
    user_id: str = Depends(get_current_user_id),
    token: str = Depends(get_bearer_token),
    revoked: TokenRevocationStore = Depends(get_revocation_store),
):
    revoked.revoke(token, token_expiry(token))
    logger.info("Revoked token for user %s", user_id)
    return envelope("Logout successful")


@router.post("/verify_token", response_model=Envelope[UserResponse])
def verify_token(current_user=Depends(get_current_user)):
    return envelope("Verified token", UserResponse.model_validate(current_user))


@router.post("/forgot_password", response_model=Envelope[None])
def forgot_password(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    user = get_user_by_email(db, payload.email)
    if not user:
        raise NotFoundError("User not found")

    record = create_reset_code(db, user, generate_reset_code(user.id))
    link = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password/{record.code}"
    subject, html = reset_password_email(link)
    mailer.send(user.email, subject, html)
    return envelope("Please check your email, reset password link has been sent to your email")


@router.post("/reset_password/{token}", response_model=Envelope[None])
def reset_password(token: str, payload: ResetPasswordRequest | None = None, db: Session = Depends(get_db)):
    record = get_by_code(db, token)
    if not record:
        raise NotFoundError("Token not found")
    if record.status == ResetCodeStatus.used:
        raise ConflictError("Token already used")
    payload = payload or ResetPasswordRequest()
    require_fields(payload.password, payload.confirm_password)
    if payload.password != payload.confirm_password:
        raise ValidationError("Passwords do not match")

    redeem_reset_code(db, record, payload.password)
    logger.info("Password reset for user %s", record.user_id)
    return envelope("Password changed")
