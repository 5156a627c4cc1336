from models.base_model import Base, BaseModel, SoftDeleteMixin
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship


class User(SoftDeleteMixin, BaseModel, Base):
    __tablename__ = "users"
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        passive_deletes=True
    )
    sessions = relationship("AuthSession", back_populates="user", passive_deletes=True)

    @property
    def display_name(self):
        return self.profile.name if self.profile else None
