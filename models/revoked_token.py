from sqlalchemy import Column, String, DateTime, Index
from sqlalchemy.sql import func
from models.base import Base


class RevokedToken(Base):
    __tablename__ = "revoked_tokens"

    # sha256 of the raw token
    token_hash = Column(String(64), primary_key=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    revoked_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

Index("idx_revoked_tokens_expires_at", RevokedToken.expires_at)
