"""Household and membership management."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from src.models.enums import HouseholdRole
from src.models.household import Household, HouseholdMember
from src.services import access
from src.services.errors import Conflict, Forbidden, NotFound

logger = logging.getLogger(__name__)


class HouseholdService:
    """Service for households and their members."""

    def __init__(self, db: Session):
        self.db = db

    def get_household_or_404(self, household_id: int) -> Household:
        household = self.db.query(Household).filter(Household.id == household_id).first()
        if not household:
            raise NotFound("Household not found")
        return household

    def create_household(self, name: str, owner_id: int) -> Household:
        """Create a household together with its owner membership.

        Both rows are written in one transaction; if the membership cannot be
        stored the household is rolled back with it.
        """
        household = Household(name=name, owner_id=owner_id)
        try:
            self.db.add(household)
            self.db.flush()
            self.db.add(
                HouseholdMember(
                    household_id=household.id,
                    user_id=owner_id,
                    role=HouseholdRole.OWNER.value,
                )
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to create household '{name}' for user {owner_id}")
            raise
        self.db.refresh(household)
        logger.info(f"Created household {household.id} owned by user {owner_id}")
        return household

    def list_households(self, user_id: int) -> list[Household]:
        """Get every household the user is a member of."""
        return access.member_households(self.db, user_id)

    def get_household(self, household_id: int, actor_id: int) -> Household:
        household = self.get_household_or_404(household_id)
        access.require_member(self.db, actor_id, household_id)
        return household

    def list_members(self, household_id: int, actor_id: int) -> list[HouseholdMember]:
        """List members of a household (members only)."""
        self.get_household_or_404(household_id)
        access.require_member(self.db, actor_id, household_id)
        return (
            self.db.query(HouseholdMember)
            .options(joinedload(HouseholdMember.user))
            .filter(HouseholdMember.household_id == household_id)
            .order_by(HouseholdMember.created_at, HouseholdMember.id)
            .all()
        )

    def add_member(
        self,
        household_id: int,
        user_id: int,
        role: HouseholdRole | str = HouseholdRole.MEMBER,
    ) -> HouseholdMember:
        """Insert a membership row. The caller is responsible for authorization."""
        if access.is_member(self.db, user_id, household_id):
            raise Conflict("User is already a member of this household")

        role = HouseholdRole(role).value
        member = HouseholdMember(household_id=household_id, user_id=user_id, role=role)
        self.db.add(member)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("User is already a member of this household") from None
        self.db.refresh(member)
        logger.info(f"Added user {user_id} to household {household_id} as {role}")
        return member

    def remove_member(self, household_id: int, user_id: int, actor_id: int) -> None:
        """Remove a member. Owners can remove anyone; members can remove themselves."""
        household = self.get_household_or_404(household_id)
        if actor_id != user_id:
            access.require_owner(self.db, actor_id, household_id)
        elif not access.is_member(self.db, actor_id, household_id):
            raise Forbidden("User is not a member of this household")

        member = (
            self.db.query(HouseholdMember)
            .filter(
                HouseholdMember.household_id == household_id,
                HouseholdMember.user_id == user_id,
            )
            .first()
        )
        if not member:
            raise NotFound("Member not found")

        if member.role == HouseholdRole.OWNER:
            owner_count = (
                self.db.query(HouseholdMember)
                .filter(
                    HouseholdMember.household_id == household_id,
                    HouseholdMember.role == HouseholdRole.OWNER.value,
                )
                .count()
            )
            if owner_count <= 1:
                raise Conflict("Cannot remove the only owner of a household")

        if household.owner_id == user_id:
            # Hand owner_id to the longest-standing remaining owner
            successor = (
                self.db.query(HouseholdMember)
                .filter(
                    HouseholdMember.household_id == household_id,
                    HouseholdMember.role == HouseholdRole.OWNER.value,
                    HouseholdMember.user_id != user_id,
                )
                .order_by(HouseholdMember.created_at, HouseholdMember.id)
                .first()
            )
            if not successor:
                raise Conflict("Cannot remove the only owner of a household")
            household.owner_id = successor.user_id
            logger.info(f"Household {household_id} ownership moved to user {successor.user_id}")

        self.db.delete(member)
        self.db.commit()
        logger.info(f"User {actor_id} removed user {user_id} from household {household_id}")
