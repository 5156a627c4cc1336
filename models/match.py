from sqlalchemy import Column, String, Boolean, Text, ForeignKey, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


def canonical_pair(a: str, b: str) -> tuple[str, str]:
    """Return the pair as (smaller, larger) so it has a single representation."""
    return (a, b) if a < b else (b, a)


class Match(BaseModel, Base):
    __tablename__ = "matches"

    user1_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user2_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    notes = Column(Text, nullable=True)
    archived = Column(Boolean, nullable=False, default=False)

    user1 = relationship("User", foreign_keys=[user1_id])
    user2 = relationship("User", foreign_keys=[user2_id])
    conversation = relationship("Conversation", back_populates="match", uselist=False)

    __table_args__ = (
        UniqueConstraint("user1_id", "user2_id", name="uq_matches_pair"),
        CheckConstraint("user1_id < user2_id", name="ck_matches_canonical_order"),
        Index("ix_matches_user2", "user2_id"),
    )

    def other_participant(self, user_id: str) -> str:
        return self.user2_id if self.user1_id == user_id else self.user1_id
