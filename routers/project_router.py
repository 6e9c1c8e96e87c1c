import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from core.assets import discard_asset, discard_on_error, store_upload
from core.auth import ensure_owner, get_current_user_id
from core.database import get_db
from core.errors import NotFoundError, ValidationError
from core.forms import parse_string_list, require_fields
from core.storage import AssetStore, get_asset_store
from crud.project_crud import (
    create_project,
    delete_project,
    get_project,
    get_skills_by_ids,
    list_projects,
    update_project,
)
from schemas.envelope import Envelope, envelope
from schemas.project_schema import ProjectCreate, ProjectPublic, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"])


def _resolve_skills(db: Session, skill_ids: list[str]):
    skills = get_skills_by_ids(db, skill_ids)
    if skills is None:
        raise ValidationError("Unknown skill id")
    return skills


@router.post("/projects", response_model=Envelope[ProjectResponse], status_code=201)
def create(
    title: str | None = Form(None),
    description: str | None = Form(None),
    skills: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    require_fields(title, description, skills, file)
    payload = ProjectCreate(title=title, description=description, skill_ids=parse_string_list(skills, "skills"))
    skill_rows = _resolve_skills(db, payload.skill_ids)

    asset = store_upload(store, file, "projects", user_id)
    with discard_on_error(store, asset):
        proj = create_project(db, payload, user_id, skill_rows, image=asset.url, image_ref=asset.key)
    logger.info("Project %s created with %d skills", proj.id, len(skill_rows))
    return envelope("Project created successfully", ProjectResponse.model_validate(proj))


@router.get("/projects", response_model=Envelope[list[ProjectResponse]])
def list_mine(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    projects = list_projects(db, author_id=user_id, skip=skip, limit=limit)
    return envelope("Projects", [ProjectResponse.model_validate(p) for p in projects])


@router.get("/myprojects", response_model=Envelope[list[ProjectResponse]])
def my_projects(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    projects = list_projects(db, author_id=user_id, skip=skip, limit=limit)
    return envelope("My Projects", [ProjectResponse.model_validate(p) for p in projects])


@router.get("/projects/{project_id}", response_model=Envelope[ProjectResponse])
def read_one(project_id: str, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    proj = ensure_owner(get_project(db, project_id), user_id, "Project")
    return envelope("Project", ProjectResponse.model_validate(proj))


@router.patch("/projects/{project_id}", response_model=Envelope[ProjectResponse])
def update(
    project_id: str,
    title: str | None = Form(None),
    description: str | None = Form(None),
    skills: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    proj = ensure_owner(get_project(db, project_id), user_id, "Project")
    require_fields(title, description, skills)
    payload = ProjectUpdate(title=title, description=description, skill_ids=parse_string_list(skills, "skills"))
    skill_rows = _resolve_skills(db, payload.skill_ids)

    if file is None:
        proj = update_project(db, proj, payload, skill_rows)
        return envelope("Project updated successfully", ProjectResponse.model_validate(proj))

    # New image goes up first; the old one is removed only once the record points away from it
    old_ref = proj.image_ref
    asset = store_upload(store, file, "projects", user_id)
    with discard_on_error(store, asset):
        proj = update_project(db, proj, payload, skill_rows, image=asset.url, image_ref=asset.key)
    discard_asset(store, old_ref)
    return envelope("Project updated successfully", ProjectResponse.model_validate(proj))


@router.delete("/projects/{project_id}", response_model=Envelope[ProjectResponse])
def delete(
    project_id: str,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    proj = ensure_owner(get_project(db, project_id), user_id, "Project")
    deleted = ProjectResponse.model_validate(proj)
    image_ref = proj.image_ref
    # Record first, blob second: a crash in between leaks a blob instead of breaking a read
    delete_project(db, proj)
    discard_asset(store, image_ref)
    logger.info("Project %s deleted", project_id)
    return envelope("Project deleted successfully", deleted)


# public

@router.get("/public/projects", response_model=Envelope[list[ProjectPublic]])
def list_public(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db)):
    projects = list_projects(db, skip=skip, limit=limit)
    return envelope("Projects", [ProjectPublic.model_validate(p) for p in projects])


@router.get("/public/projects/{project_id}", response_model=Envelope[ProjectPublic])
def read_public(project_id: str, db: Session = Depends(get_db)):
    proj = get_project(db, project_id)
    if not proj:
        raise NotFoundError("Project not found")
    return envelope("Project", ProjectPublic.model_validate(proj))
