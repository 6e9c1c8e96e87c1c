import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from core.assets import discard_asset, discard_on_error, store_upload
from core.auth import ensure_owner, get_current_user_id, require_admin
from core.database import get_db
from core.errors import NotFoundError
from core.forms import require_fields
from core.storage import AssetStore, get_asset_store
from crud.skill_crud import create_skill, delete_skill, get_skill, list_skills, update_skill
from schemas.envelope import Envelope, envelope
from schemas.skill_schema import SkillAdminView, SkillPublic, SkillPublicDetail, SkillResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Skills"])


# only admin

@router.get("/skills", response_model=Envelope[list[SkillAdminView]])
def list_all(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db), admin=Depends(require_admin)):
    skills = list_skills(db, skip=skip, limit=limit)
    return envelope("All Skills", [SkillAdminView.model_validate(s) for s in skills])


@router.get("/skills/{skill_id}", response_model=Envelope[SkillAdminView])
def read_one(skill_id: str, db: Session = Depends(get_db), admin=Depends(require_admin)):
    skill = get_skill(db, skill_id)
    if not skill:
        raise NotFoundError("Skill not found")
    return envelope("Skill Found", SkillAdminView.model_validate(skill))


@router.post("/skills", response_model=Envelope[SkillResponse], status_code=201)
def create(
    name: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    require_fields(name, file)
    asset = store_upload(store, file, "skills", user_id)
    with discard_on_error(store, asset):
        skill = create_skill(db, name=name, author_id=user_id, image=asset.url, image_ref=asset.key)
    return envelope("Skill Created", SkillResponse.model_validate(skill))


@router.patch("/skills/{skill_id}", response_model=Envelope[SkillResponse])
def update(
    skill_id: str,
    name: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    skill = ensure_owner(get_skill(db, skill_id), user_id, "Skill")
    if file is None:
        skill = update_skill(db, skill, name=name)
        return envelope("Skill Updated", SkillResponse.model_validate(skill))

    old_ref = skill.image_ref
    asset = store_upload(store, file, "skills", user_id)
    with discard_on_error(store, asset):
        skill = update_skill(db, skill, name=name, image=asset.url, image_ref=asset.key)
    discard_asset(store, old_ref)
    return envelope("Skill Updated", SkillResponse.model_validate(skill))


@router.delete("/skills/{skill_id}", response_model=Envelope[SkillResponse])
def delete(
    skill_id: str,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    skill = ensure_owner(get_skill(db, skill_id), user_id, "Skill")
    deleted = SkillResponse.model_validate(skill)
    image_ref = skill.image_ref
    delete_skill(db, skill)
    discard_asset(store, image_ref)
    return envelope("Skill Deleted", deleted)


@router.get("/myskills", response_model=Envelope[list[SkillPublic]])
def my_skills(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    skills = list_skills(db, author_id=user_id, skip=skip, limit=limit)
    return envelope("My Skills", [SkillPublic.model_validate(s) for s in skills])


# public

@router.get("/public/skills", response_model=Envelope[list[SkillPublic]])
def list_public(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db)):
    skills = list_skills(db, skip=skip, limit=limit)
    return envelope("All Skills", [SkillPublic.model_validate(s) for s in skills])


@router.get("/public/skills/{skill_id}", response_model=Envelope[SkillPublicDetail])
def read_public(skill_id: str, db: Session = Depends(get_db)):
    skill = get_skill(db, skill_id)
    if not skill:
        raise NotFoundError("Skill not found")
    return envelope("Skill Found", SkillPublicDetail.model_validate(skill))
