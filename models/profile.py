from sqlalchemy import Column, String, Integer, Float, Text, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base

# Columns a client may write through the profiles endpoints
PROFILE_FIELDS = (
    "name",
    "age",
    "bio",
    "gender",
    "looking_for",
    "latitude",
    "longitude",
    "profile_image",
)


class Profile(BaseModel, Base):
    __tablename__ = "profiles"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    age = Column(Integer, nullable=True)
    bio = Column(Text, nullable=True)
    gender = Column(String(1), nullable=True)  # 'M' or 'F'
    looking_for = Column(String(1), nullable=True)  # 'M', 'F' or 'A' (any)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    profile_image = Column(String(512), nullable=True)

    user = relationship("User", back_populates="profile")

    __table_args__ = (
        CheckConstraint("(age IS NULL) OR (age >= 18)", name="ck_profiles_age_adult"),
        Index("ix_profiles_geo", "latitude", "longitude"),
    )
