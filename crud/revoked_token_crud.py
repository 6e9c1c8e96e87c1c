from datetime import datetime
from sqlalchemy.orm import Session
from models.revoked_token import RevokedToken


def get_revoked_token(db: Session, token_hash: str):
    return db.query(RevokedToken).filter(RevokedToken.token_hash == token_hash).first()


def add_revoked_token(db: Session, token_hash: str, expires_at: datetime | None):
    if get_revoked_token(db, token_hash):
        return
    db.add(RevokedToken(token_hash=token_hash, expires_at=expires_at))
    db.commit()


def delete_expired(db: Session, now: datetime) -> int:
    deleted = (
        db.query(RevokedToken)
        .filter(RevokedToken.expires_at.is_not(None), RevokedToken.expires_at <= now)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted
