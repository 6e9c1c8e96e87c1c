import uuid
from sqlalchemy import Column, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin
from models.project import project_skills


class Skill(Base, TimestampMixin):
    __tablename__ = "skills"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    author_id = Column(String(64), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    image = Column(String(1024), nullable=True)
    image_ref = Column(String(512), nullable=True)

    author = relationship("User")
    projects = relationship("Project", secondary=project_skills, back_populates="skills")

    @property
    def project_ids(self) -> list[str]:
        return [p.id for p in self.projects]

Index("idx_skills_author_id_created_at", Skill.author_id, Skill.created_at.desc())
