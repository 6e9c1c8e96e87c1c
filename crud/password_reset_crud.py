from sqlalchemy.orm import Session
from models.password_reset import PasswordResetCode, ResetCodeStatus
from models.user import User
from core.security import hash_password


def create_reset_code(db: Session, user: User, code: str):
    record = PasswordResetCode(user_id=user.id, code=code, email=user.email, status=ResetCodeStatus.valid)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def get_by_code(db: Session, code: str):
    return db.query(PasswordResetCode).filter(PasswordResetCode.code == code).first()


def redeem_reset_code(db: Session, record: PasswordResetCode, new_password: str):
    """Mark the code used and store the new password in a single commit."""
    record.status = ResetCodeStatus.used
    record.user.password = hash_password(new_password)
    db.commit()
    db.refresh(record)
    return record
