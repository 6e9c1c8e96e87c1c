from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc
from models.project import Project
from models.skill import Skill
from schemas.project_schema import ProjectCreate, ProjectUpdate


def get_project(db: Session, project_id: str):
    return db.query(Project).filter(Project.id == project_id).first()


def list_projects(db: Session, author_id: str | None = None, skip: int = 0, limit: int = 100):
    q = db.query(Project).options(selectinload(Project.skills), selectinload(Project.author))
    if author_id:
        q = q.filter(Project.author_id == author_id)
    return q.order_by(desc(Project.created_at)).offset(skip).limit(limit).all()


def get_skills_by_ids(db: Session, skill_ids: list[str]) -> list[Skill] | None:
    """Load every skill in ``skill_ids``; returns None when any id is unknown."""
    wanted = set(skill_ids)
    if not wanted:
        return []
    skills = db.query(Skill).filter(Skill.id.in_(wanted)).all()
    if len(skills) != len(wanted):
        return None
    return skills


def sync_project_skills(project: Project, skills: list[Skill]) -> tuple[set[str], set[str]]:
    """Make ``project.skills`` equal to ``skills`` as one set difference.

    Returns the (added, removed) skill ids. Nothing is committed here.
    """
    current = {s.id: s for s in project.skills}
    desired = {s.id: s for s in skills}
    to_remove = current.keys() - desired.keys()
    to_add = desired.keys() - current.keys()
    for skill_id in to_remove:
        project.skills.remove(current[skill_id])
    for skill_id in to_add:
        project.skills.append(desired[skill_id])
    return set(to_add), set(to_remove)


def create_project(db: Session, payload: ProjectCreate, author_id: str, skills: list[Skill], image: str, image_ref: str):
    proj = Project(
        author_id=author_id,
        title=payload.title,
        description=payload.description,
        image=image,
        image_ref=image_ref,
    )
    proj.skills = list(skills)
    db.add(proj)
    db.commit()
    db.refresh(proj)
    return proj


def update_project(
    db: Session,
    proj: Project,
    payload: ProjectUpdate,
    skills: list[Skill],
    image: str | None = None,
    image_ref: str | None = None,
):
    proj.title = payload.title
    proj.description = payload.description
    if image_ref is not None:
        proj.image = image
        proj.image_ref = image_ref
    sync_project_skills(proj, skills)
    db.commit()
    db.refresh(proj)
    return proj


def delete_project(db: Session, proj: Project) -> None:
    # Association rows go with the project
    proj.skills = []
    db.delete(proj)
    db.commit()
