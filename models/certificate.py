import uuid
from sqlalchemy import Column, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin


class Certificate(Base, TimestampMixin):
    __tablename__ = "certificates"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    author_id = Column(String(64), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    image = Column(String(1024), nullable=True)
    image_ref = Column(String(512), nullable=True)

    author = relationship("User")

Index("idx_certificates_author_id_created_at", Certificate.author_id, Certificate.created_at.desc())
