from pydantic import BaseModel


class SkillSummary(BaseModel):
    id: str
    name: str
    image: str | None = None

    model_config = {"from_attributes": True}


class ProjectSummary(BaseModel):
    id: str
    title: str
    image: str | None = None

    model_config = {"from_attributes": True}
