import uuid
from sqlalchemy import Column, String, Text, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin


class Post(Base, TimestampMixin):
    __tablename__ = "posts"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    author_id = Column(String(64), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    image = Column(String(1024), nullable=True)
    image_ref = Column(String(512), nullable=True)

    author = relationship("User")

Index("idx_posts_author_id_created_at", Post.author_id, Post.created_at.desc())
