from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class ContactBase(BaseModel):
    email: str | None = None
    linkedin: str | None = None
    github: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    facebook: str | None = None


class ContactCreate(ContactBase):
    pass


class ContactUpdate(BaseModel):
    email: str = Field(min_length=1)
    linkedin: str = Field(min_length=1)
    github: str = Field(min_length=1)
    twitter: str = Field(min_length=1)
    instagram: str = Field(min_length=1)
    facebook: str = Field(min_length=1)


class ContactResponse(ContactBase):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class SendEmailRequest(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1)
    body: str = Field(min_length=1)
