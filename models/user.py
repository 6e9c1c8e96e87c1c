import enum
import uuid
from sqlalchemy import Column, String, Enum
from models.base import Base, TimestampMixin


class Role(str, enum.Enum):
    user = "user"
    admin = "admin"


class User(Base, TimestampMixin):
    __tablename__ = "user"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(Enum(Role, name="user_role"), default=Role.user, nullable=False)
    avatar = Column(String(1024), nullable=True)
    avatar_ref = Column(String(512), nullable=True)
