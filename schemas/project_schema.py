from datetime import datetime
from pydantic import BaseModel
from schemas.summary_schema import SkillSummary
from schemas.user_schema import UserPublic


class ProjectCreate(BaseModel):
    """Parsed multipart payload. Author is inferred from auth."""
    title: str
    description: str
    skill_ids: list[str]


class ProjectUpdate(ProjectCreate):
    pass


class ProjectResponse(BaseModel):
    id: str
    title: str
    description: str
    image: str | None = None
    author_id: str
    skill_ids: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ProjectPublic(BaseModel):
    id: str
    title: str
    description: str
    image: str | None = None
    author_id: str
    author: UserPublic
    skills: list[SkillSummary] = []

    model_config = {"from_attributes": True}
