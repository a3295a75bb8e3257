"""Account model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Account profile: login email, password hash and full name."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)  # Stored lowercase
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)

    # Relationships
    memberships = relationship(
        "HouseholdMember", back_populates="user", cascade="all, delete-orphan"
    )
    owned_households = relationship("Household", back_populates="owner")
