import enum
import uuid
from sqlalchemy import Column, String, Enum, ForeignKey, Index
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin


class ResetCodeStatus(str, enum.Enum):
    # valid: not redeemed yet; used: redeemed once and never accepted again
    valid = "valid"
    used = "used"


class PasswordResetCode(Base, TimestampMixin):
    __tablename__ = "password_reset_codes"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    code = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), nullable=False)
    status = Column(Enum(ResetCodeStatus, name="reset_code_status"), default=ResetCodeStatus.valid, nullable=False)

    user = relationship("User")

Index("idx_password_reset_codes_user_id", PasswordResetCode.user_id)
