from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Conversation(BaseModel, Base):
    __tablename__ = "conversations"

    # One conversation per match; the unique index backs insert-if-absent
    match_id = Column(String(36), ForeignKey("matches.id", ondelete="RESTRICT"), nullable=False, unique=True, index=True)

    match = relationship("Match", back_populates="conversation")
    messages = relationship("Message", back_populates="conversation", passive_deletes=True)
