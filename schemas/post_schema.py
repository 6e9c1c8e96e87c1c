from datetime import datetime
from pydantic import BaseModel
from schemas.user_schema import UserPublic


class PostCreate(BaseModel):
    title: str
    content: str
    tags: list[str]


class PostUpdate(PostCreate):
    pass


class PostResponse(BaseModel):
    id: str
    title: str
    slug: str
    content: str
    tags: list[str] = []
    image: str | None = None
    author_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class PostDetail(PostResponse):
    author: UserPublic
