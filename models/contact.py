import uuid
from sqlalchemy import Column, String
from models.base import Base, TimestampMixin


class Contact(Base, TimestampMixin):
    __tablename__ = "contacts"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=True)
    linkedin = Column(String(512), nullable=True)
    github = Column(String(512), nullable=True)
    twitter = Column(String(512), nullable=True)
    instagram = Column(String(512), nullable=True)
    facebook = Column(String(512), nullable=True)
