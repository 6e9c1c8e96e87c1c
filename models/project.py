import uuid
from sqlalchemy import Column, String, Text, ForeignKey, Index, Table
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin

project_skills = Table(
    "project_skills",
    Base.metadata,
    Column("project_id", String(64), ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", String(64), ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)


class Project(Base, TimestampMixin):
    __tablename__ = "projects"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    author_id = Column(String(64), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(1024), nullable=True)
    image_ref = Column(String(512), nullable=True)

    author = relationship("User")
    skills = relationship("Skill", secondary=project_skills, back_populates="projects")

    @property
    def skill_ids(self) -> list[str]:
        return [s.id for s in self.skills]

Index("idx_projects_author_id_created_at", Project.author_id, Project.created_at.desc())
