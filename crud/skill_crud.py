from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc
from models.skill import Skill


def get_skill(db: Session, skill_id: str):
    return db.query(Skill).filter(Skill.id == skill_id).first()


def list_skills(db: Session, author_id: str | None = None, skip: int = 0, limit: int = 100):
    q = db.query(Skill).options(selectinload(Skill.author), selectinload(Skill.projects))
    if author_id:
        q = q.filter(Skill.author_id == author_id)
    return q.order_by(desc(Skill.created_at)).offset(skip).limit(limit).all()


def create_skill(db: Session, name: str, author_id: str, image: str, image_ref: str):
    skill = Skill(name=name, author_id=author_id, image=image, image_ref=image_ref)
    db.add(skill)
    db.commit()
    db.refresh(skill)
    return skill


def update_skill(db: Session, skill: Skill, name: str | None = None, image: str | None = None, image_ref: str | None = None):
    if name:
        skill.name = name
    if image_ref is not None:
        skill.image = image
        skill.image_ref = image_ref
    db.commit()
    db.refresh(skill)
    return skill


def delete_skill(db: Session, skill: Skill) -> None:
    skill.projects = []
    db.delete(skill)
    db.commit()
