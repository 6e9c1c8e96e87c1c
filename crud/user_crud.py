from sqlalchemy.orm import Session
from sqlalchemy import desc
from models.user import User, Role
from models.post import Post
from models.project import Project
from models.skill import Skill
from models.certificate import Certificate
from schemas.user_schema import UserCreate, ProfileUpdate
from core.security import hash_password


def get_user(db: Session, user_id: str):
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def email_taken(db: Session, email: str, exclude_user_id: str | None = None) -> bool:
    q = db.query(User.id).filter(User.email == email)
    if exclude_user_id:
        q = q.filter(User.id != exclude_user_id)
    return q.first() is not None


def list_users(db: Session, skip: int = 0, limit: int = 100):
    return db.query(User).order_by(desc(User.created_at)).offset(skip).limit(limit).all()


def create_user(db: Session, payload: UserCreate, role: Role = Role.user):
    user = User(
        name=payload.name,
        email=payload.email,
        password=hash_password(payload.password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, payload: ProfileUpdate):
    user.name = payload.name
    user.email = payload.email
    db.commit()
    db.refresh(user)
    return user


def set_password(db: Session, user: User, password: str):
    user.password = hash_password(password)
    db.commit()
    db.refresh(user)
    return user


def set_avatar(db: Session, user: User, url: str, key: str):
    user.avatar = url
    user.avatar_ref = key
    db.commit()
    db.refresh(user)
    return user


def count_authored(db: Session, user_id: str) -> dict[str, int]:
    return {
        "posts_count": db.query(Post).filter(Post.author_id == user_id).count(),
        "projects_count": db.query(Project).filter(Project.author_id == user_id).count(),
        "skills_count": db.query(Skill).filter(Skill.author_id == user_id).count(),
        "certificates_count": db.query(Certificate).filter(Certificate.author_id == user_id).count(),
    }
