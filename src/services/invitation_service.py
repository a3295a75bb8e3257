"""Household invitation lifecycle.

An invitation starts ``pending`` and moves once to ``accepted`` or
``declined``. Delivery of the notification email is recorded separately in
``email_sent`` and never changes the status. Expiry is not a stored state:
it is checked whenever an invitation is read for acceptance.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.enums import AWAITING_DECISION, HouseholdRole, InvitationStatus
from src.models.household import HouseholdMember
from src.models.invitation import Invitation
from src.models.user import User
from src.services import access
from src.services.auth import create_user, get_user_by_email, normalize_email
from src.services.email import EmailService
from src.services.errors import Conflict, EmailDeliveryError, Expired, Forbidden, NotFound
from src.services.household_service import HouseholdService

logger = logging.getLogger(__name__)

AWAITING_VALUES = [status.value for status in AWAITING_DECISION]


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@dataclass
class InviteResult:
    """Outcome of an invite request."""

    status: str  # "added" | "invited"
    message: str
    member: HouseholdMember | None = None
    invitation: Invitation | None = None
    email_sent: bool = False


class InvitationService:
    """Service for creating and resolving household invitations."""

    def __init__(self, db: Session, email_service: EmailService | None = None):
        self.db = db
        self.email_service = email_service or EmailService()
        self.households = HouseholdService(db)
        self.settings = get_settings()

    # --- Lookups ---

    def _get_or_404(self, invitation_id: str) -> Invitation:
        invitation = self.db.query(Invitation).filter(Invitation.id == invitation_id).first()
        if not invitation:
            raise NotFound("Invitation not found")
        return invitation

    @staticmethod
    def is_awaiting_decision(invitation: Invitation) -> bool:
        return invitation.status in AWAITING_VALUES

    @staticmethod
    def is_expired(invitation: Invitation, now: datetime | None = None) -> bool:
        if invitation.expires_at is None:
            return False
        return (now or datetime.now(UTC)) > _as_utc(invitation.expires_at)

    def _find_awaiting(self, household_id: int, email: str) -> Invitation | None:
        return (
            self.db.query(Invitation)
            .filter(
                Invitation.household_id == household_id,
                Invitation.email == email,
                Invitation.status.in_(AWAITING_VALUES),
            )
            .first()
        )

    def _require_acceptable(self, invitation: Invitation) -> None:
        if not self.is_awaiting_decision(invitation):
            raise Conflict(f"Invitation has already been {invitation.status}")
        if self.is_expired(invitation):
            raise Expired("Invitation has expired")

    # --- Operations ---

    async def invite(
        self,
        household_id: int,
        inviter_id: int,
        email: str,
        role: HouseholdRole | str = HouseholdRole.MEMBER,
    ) -> InviteResult:
        """Invite someone to a household by email (owners only).

        Existing accounts are added straight away. Otherwise a pending
        invitation is stored and an email is requested; a failed email does
        not undo the invitation.
        """
        household = self.households.get_household_or_404(household_id)
        access.require_owner(self.db, inviter_id, household_id)
        email = normalize_email(email)
        role = HouseholdRole(role).value

        existing_user = get_user_by_email(self.db, email)
        if existing_user:
            member = self.households.add_member(household_id, existing_user.id, role)
            return InviteResult(status="added", message="Member added successfully", member=member)

        now = datetime.now(UTC)
        expires_at = now + timedelta(days=self.settings.invitation_expiry_days)
        invitation = self._find_awaiting(household_id, email)
        if invitation:
            # Re-inviting refreshes the open invitation instead of stacking duplicates
            invitation.role = role
            invitation.invited_by = inviter_id
            invitation.expires_at = expires_at
            invitation.email_sent = False
            logger.info(f"Refreshing invitation {invitation.id} for household {household_id}")
        else:
            invitation = Invitation(
                household_id=household_id,
                email=email,
                role=role,
                status=InvitationStatus.PENDING.value,
                invited_by=inviter_id,
                created_at=now,
                expires_at=expires_at,
            )
            self.db.add(invitation)
        self.db.commit()
        self.db.refresh(invitation)
        logger.info(f"Invitation {invitation.id} pending for household {household_id}")

        try:
            await self.email_service.send_invitation(invitation.id, email, household.name)
        except EmailDeliveryError as e:
            logger.warning(f"Invitation {invitation.id} created but email not delivered: {e}")
            return InviteResult(
                status="invited",
                message="Invitation created but email sending failed",
                invitation=invitation,
                email_sent=False,
            )

        invitation.email_sent = True
        self.db.commit()
        self.db.refresh(invitation)
        return InviteResult(
            status="invited",
            message="Invitation sent successfully",
            invitation=invitation,
            email_sent=True,
        )

    def list_invitations(self, household_id: int, actor_id: int) -> list[Invitation]:
        """List a household's invitations, newest first (members only)."""
        self.households.get_household_or_404(household_id)
        access.require_member(self.db, actor_id, household_id)
        return (
            self.db.query(Invitation)
            .filter(Invitation.household_id == household_id)
            .order_by(Invitation.created_at.desc())
            .all()
        )

    def get_invitation(self, invitation_id: str) -> Invitation:
        """Fetch an invitation that can still be accepted."""
        invitation = self._get_or_404(invitation_id)
        if not self.is_awaiting_decision(invitation):
            raise NotFound("Invitation not found or has already been used")
        if self.is_expired(invitation):
            raise Expired("Invitation has expired")
        return invitation

    def _accept(self, invitation: Invitation, user_id: int) -> HouseholdMember:
        """Create the membership and flip the status. Does not commit."""
        if access.is_member(self.db, user_id, invitation.household_id):
            raise Conflict("User is already a member of this household")

        member = HouseholdMember(
            household_id=invitation.household_id,
            user_id=user_id,
            role=invitation.role,
        )
        self.db.add(member)
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("User is already a member of this household") from None

        updated = (
            self.db.query(Invitation)
            .filter(Invitation.id == invitation.id, Invitation.status.in_(AWAITING_VALUES))
            .update({Invitation.status: InvitationStatus.ACCEPTED.value}, synchronize_session=False)
        )
        if updated == 0:
            # Someone else resolved it concurrently; the membership still stands
            logger.warning(
                f"Invitation {invitation.id} was no longer pending when user {user_id} accepted it"
            )
        return member

    def accept(self, invitation_id: str, user: User) -> HouseholdMember:
        """Accept an invitation on behalf of an existing account."""
        invitation = self._get_or_404(invitation_id)
        self._require_acceptable(invitation)

        if normalize_email(user.email) != invitation.email:
            if self.settings.invitation_require_email_match:
                raise Forbidden("This invitation was sent to a different email address")
            logger.warning(
                f"User {user.id} is accepting invitation {invitation.id} "
                f"addressed to a different email"
            )

        try:
            member = self._accept(invitation, user.id)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(member)
        logger.info(f"User {user.id} joined household {member.household_id} via {invitation_id}")
        return member

    def register_and_accept(
        self,
        invitation_id: str,
        email: str,
        password: str,
        name: str | None = None,
    ) -> tuple[User, HouseholdMember]:
        """Create an account for the invited email and accept in one transaction."""
        invitation = self._get_or_404(invitation_id)
        self._require_acceptable(invitation)

        email = normalize_email(email)
        if email != invitation.email:
            raise Forbidden("This invitation was sent to a different email address")
        if get_user_by_email(self.db, email):
            raise Conflict("Email already registered")

        try:
            user = create_user(self.db, email, password, name, commit=False)
            member = self._accept(invitation, user.id)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Email already registered") from None
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        self.db.refresh(member)
        logger.info(f"Registered user {user.id} from invitation {invitation_id}")
        return user, member

    def decline(self, invitation_id: str) -> Invitation:
        """Decline a pending invitation. No membership is created."""
        invitation = self._get_or_404(invitation_id)
        updated = (
            self.db.query(Invitation)
            .filter(Invitation.id == invitation_id, Invitation.status.in_(AWAITING_VALUES))
            .update({Invitation.status: InvitationStatus.DECLINED.value}, synchronize_session=False)
        )
        if updated == 0:
            self.db.rollback()
            raise Conflict(f"Invitation has already been {invitation.status}")
        self.db.commit()
        self.db.refresh(invitation)
        logger.info(f"Invitation {invitation_id} declined")
        return invitation

    def cancel(self, invitation_id: str, actor_id: int) -> None:
        """Delete an invitation that has not been accepted (owners only)."""
        invitation = self._get_or_404(invitation_id)
        access.require_owner(self.db, actor_id, invitation.household_id)
        if invitation.status == InvitationStatus.ACCEPTED:
            raise Conflict("Accepted invitations cannot be cancelled")
        self.db.delete(invitation)
        self.db.commit()
        logger.info(f"User {actor_id} cancelled invitation {invitation_id}")
