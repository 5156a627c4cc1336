from enum import Enum

from sqlalchemy import Column, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base


class SwipeDirection(str, Enum):
    LEFT = "L"
    RIGHT = "R"

    @classmethod
    def parse(cls, raw):
        """Case-insensitive: accepts L/R and LEFT/RIGHT. Raises ValueError otherwise."""
        if not isinstance(raw, str):
            raise ValueError(f"invalid direction: {raw!r}")
        token = raw.strip().upper()
        if token in cls.__members__:
            return cls[token]
        return cls(token)


class Swipe(BaseModel, Base):
    __tablename__ = "swipes"

    swiper_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    swipee_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    direction = Column(
        SAEnum(SwipeDirection, name="swipe_direction", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    swiper = relationship("User", foreign_keys=[swiper_id])
    swipee = relationship("User", foreign_keys=[swipee_id])

    # Reciprocity lookups go (swiper, swipee, direction)
    __table_args__ = (
        Index("ix_swipes_pair_direction", "swiper_id", "swipee_id", "direction"),
        Index("ix_swipes_swipee", "swipee_id"),
    )
