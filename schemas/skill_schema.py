from datetime import datetime
from pydantic import BaseModel
from schemas.summary_schema import ProjectSummary
from schemas.user_schema import UserPublic, UserResponse


class SkillResponse(BaseModel):
    id: str
    name: str
    image: str | None = None
    author_id: str
    project_ids: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class SkillAdminView(SkillResponse):
    author: UserResponse


class SkillPublic(BaseModel):
    id: str
    name: str
    image: str | None = None
    author_id: str
    author: UserPublic

    model_config = {"from_attributes": True}


class SkillPublicDetail(SkillPublic):
    projects: list[ProjectSummary] = []
