"""
AuthSession model: server-side record backing every bearer token.
Fields:
- id (embedded in the token as session_id)
- user_id (String(36)) - FK to users.id
- token - the jti of the credential issued for this session
- created_at, expires_at, revoked_at
"""
from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, as_utc


class AuthSession(BaseModel, Base):
    __tablename__ = "sessions"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="sessions")

    __table_args__ = (
        Index("ix_sessions_id_user", "id", "user_id"),
    )

    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: datetime) -> bool:
        expires_at = as_utc(self.expires_at)
        return expires_at is not None and expires_at <= now

    def __repr__(self):
        return f"<AuthSession id={self.id} user={self.user_id}>"
