from datetime import datetime
from typing import Annotated
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, EmailStr, Field
from core.security import MAX_PASSWORD_BYTES
from models.user import Role


def canonical_email(value: str) -> str:
    """Same normalization EmailStr applies on register; unparseable input is kept as is."""
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError:
        return value


def check_password_length(value: str | None) -> str | None:
    if value is not None and len(value.encode()) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


Password = Annotated[str, Field(min_length=1), AfterValidator(check_password_length)]
# Login and forgot-password look users up by this form
LookupEmail = Annotated[str, Field(min_length=1), AfterValidator(canonical_email)]


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: Password


class RegisterRequest(UserCreate):
    confirm_password: str = Field(min_length=1, alias="confirmPassword")

    model_config = {"populate_by_name": True}


class AdminUserCreate(RegisterRequest):
    role: Role = Role.user


class LoginRequest(BaseModel):
    # Not EmailStr: a malformed email gets the same answer as an unknown one
    email: LookupEmail
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr


class PasswordChange(BaseModel):
    password: Password
    confirm_password: str = Field(min_length=1, alias="confirmPassword")

    model_config = {"populate_by_name": True}


class ForgotPasswordRequest(BaseModel):
    email: LookupEmail


class ResetPasswordRequest(BaseModel):
    # Optional here: the code is checked before the fields are
    password: Annotated[str | None, AfterValidator(check_password_length)] = None
    confirm_password: str | None = Field(None, alias="confirmPassword")

    model_config = {"populate_by_name": True}


class UserPublic(BaseModel):
    id: str
    name: str
    avatar: str | None = None

    model_config = {"from_attributes": True}


class UserResponse(UserPublic):
    email: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LoginData(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


class StatisticsResponse(BaseModel):
    posts_count: int
    projects_count: int
    skills_count: int
    certificates_count: int
