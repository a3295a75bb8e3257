"""Household invitation model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import HouseholdRole, InvitationStatus
from src.models.mixins import CreatedAtMixin


def _new_invitation_id() -> str:
    return str(uuid.uuid4())


class Invitation(Base, CreatedAtMixin):
    """Pending offer of membership sent to an email address."""

    __tablename__ = "household_invitations"

    id = Column(String(36), primary_key=True, default=_new_invitation_id)
    household_id = Column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    email = Column(String(255), nullable=False, index=True)
    role = Column(String(20), nullable=False, default=HouseholdRole.MEMBER.value)
    status = Column(String(20), nullable=False, default=InvitationStatus.PENDING.value)
    email_sent = Column(Boolean, nullable=False, default=False)
    invited_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    household = relationship("Household", back_populates="invitations")
    inviter = relationship("User")

    @property
    def household_name(self) -> str | None:
        return self.household.name if self.household else None
