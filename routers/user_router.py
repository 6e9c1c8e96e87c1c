import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from core.assets import discard_asset, discard_on_error, store_upload
from core.auth import get_current_user, require_admin
from core.database import get_db
from core.errors import ConflictError, NotFoundError, ValidationError
from core.security import verify_password
from core.storage import AssetStore, get_asset_store
from crud.user_crud import (
    count_authored,
    create_user,
    email_taken,
    get_user,
    list_users,
    set_avatar,
    set_password,
    update_profile,
)
from schemas.envelope import Envelope, envelope
from schemas.user_schema import (
    AdminUserCreate,
    PasswordChange,
    ProfileUpdate,
    StatisticsResponse,
    UserCreate,
    UserPublic,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.get("/profile", response_model=Envelope[UserResponse])
@router.post("/profile", response_model=Envelope[UserResponse])
def profile(current_user=Depends(get_current_user)):
    return envelope("Profile found", UserResponse.model_validate(current_user))


@router.patch("/profile", response_model=Envelope[UserResponse])
def edit_profile(payload: ProfileUpdate, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    if email_taken(db, payload.email, exclude_user_id=current_user.id):
        raise ConflictError("Email already exists")
    user = update_profile(db, current_user, payload)
    return envelope("Profile updated successfully", UserResponse.model_validate(user))


@router.put("/change_password", response_model=Envelope[UserResponse])
def change_password(payload: PasswordChange, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    if payload.password != payload.confirm_password:
        raise ValidationError("Passwords do not match")
    if verify_password(payload.password, current_user.password):
        raise ValidationError("New password cannot be the same")
    user = set_password(db, current_user, payload.password)
    return envelope("Password changed successfully", UserResponse.model_validate(user))


@router.put("/change_avatar", response_model=Envelope[UserResponse])
def change_avatar(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    current_user=Depends(get_current_user),
):
    old_ref = current_user.avatar_ref
    asset = store_upload(store, file, "avatars", current_user.id)
    with discard_on_error(store, asset):
        user = set_avatar(db, current_user, asset.url, asset.key)
    discard_asset(store, old_ref)
    return envelope("Avatar changed successfully", UserResponse.model_validate(user))


@router.get("/mystatistics", response_model=Envelope[StatisticsResponse])
def my_statistics(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    counts = count_authored(db, current_user.id)
    return envelope("My statistics", StatisticsResponse(**counts))


@router.get("/users/public/{user_id}", response_model=Envelope[UserPublic])
def public_profile(user_id: str, db: Session = Depends(get_db)):
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return envelope("User found", UserPublic.model_validate(user))


# only admin

@router.get("/users", response_model=Envelope[list[UserResponse]])
def all_users(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db), admin=Depends(require_admin)):
    users = list_users(db, skip=skip, limit=limit)
    return envelope("All Users", [UserResponse.model_validate(u) for u in users])


@router.get("/users/{user_id}", response_model=Envelope[UserResponse])
def user_by_id(user_id: str, db: Session = Depends(get_db), admin=Depends(require_admin)):
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return envelope("User Found", UserResponse.model_validate(user))


@router.post("/users", response_model=Envelope[UserResponse], status_code=201)
def admin_create_user(payload: AdminUserCreate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    if payload.password != payload.confirm_password:
        raise ValidationError("Passwords do not match")
    if email_taken(db, payload.email):
        raise ConflictError("Email already exists")
    user = create_user(
        db,
        UserCreate(name=payload.name, email=payload.email, password=payload.password),
        role=payload.role,
    )
    logger.info("Admin %s created user %s with role %s", admin.id, user.id, user.role.value)
    return envelope("User Created", UserResponse.model_validate(user))
