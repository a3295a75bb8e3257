"""Household and membership models."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import HouseholdRole
from src.models.mixins import CreatedAtMixin, TimestampMixin


class Household(Base, TimestampMixin):
    """Household, the sharing boundary for members, items and invitations."""

    __tablename__ = "households"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="owned_households")
    members = relationship(
        "HouseholdMember", back_populates="household", cascade="all, delete-orphan"
    )
    invitations = relationship(
        "Invitation", back_populates="household", cascade="all, delete-orphan"
    )
    pantry_items = relationship(
        "PantryItem", back_populates="household", cascade="all, delete-orphan"
    )


class HouseholdMember(Base, CreatedAtMixin):
    """Membership of a user in a household."""

    __tablename__ = "household_members"
    __table_args__ = (
        UniqueConstraint("household_id", "user_id", name="uq_household_members_household_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    household_id = Column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role = Column(String(20), nullable=False, default=HouseholdRole.MEMBER.value)

    # Relationships
    household = relationship("Household", back_populates="members")
    user = relationship("User", back_populates="memberships")

    @property
    def email(self) -> str | None:
        return self.user.email if self.user else None

    @property
    def name(self) -> str | None:
        return self.user.name if self.user else None
