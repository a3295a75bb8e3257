"""Household access checks.

Every mutating household operation asks one of these predicates before it
touches storage. Lookups that fail are answered as "not authorized".
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.enums import HouseholdRole
from src.models.household import Household, HouseholdMember
from src.services.errors import Forbidden

logger = logging.getLogger(__name__)


def _membership(db: Session, user_id: int, household_id: int) -> HouseholdMember | None:
    return (
        db.query(HouseholdMember)
        .filter(
            HouseholdMember.household_id == household_id,
            HouseholdMember.user_id == user_id,
        )
        .first()
    )


def is_member(db: Session, user_id: int, household_id: int) -> bool:
    """Check if the user has a membership row for the household."""
    try:
        return _membership(db, user_id, household_id) is not None
    except SQLAlchemyError as e:
        logger.error(f"Membership lookup failed for user {user_id}, household {household_id}: {e}")
        return False


def is_owner(db: Session, user_id: int, household_id: int) -> bool:
    """Check if the user is an owner of the household."""
    try:
        membership = _membership(db, user_id, household_id)
    except SQLAlchemyError as e:
        logger.error(f"Ownership lookup failed for user {user_id}, household {household_id}: {e}")
        return False
    return membership is not None and membership.role == HouseholdRole.OWNER


def member_households(db: Session, user_id: int) -> list[Household]:
    """Get every household the user belongs to."""
    return (
        db.query(Household)
        .join(HouseholdMember, HouseholdMember.household_id == Household.id)
        .filter(HouseholdMember.user_id == user_id)
        .order_by(Household.id)
        .all()
    )


def member_household_ids(db: Session, user_id: int) -> list[int]:
    """Get IDs of every household the user belongs to."""
    rows = (
        db.query(HouseholdMember.household_id).filter(HouseholdMember.user_id == user_id).all()
    )
    return [household_id for (household_id,) in rows]


def require_member(db: Session, user_id: int, household_id: int) -> None:
    if not is_member(db, user_id, household_id):
        raise Forbidden("User is not a member of this household")


def require_owner(db: Session, user_id: int, household_id: int) -> None:
    if not is_owner(db, user_id, household_id):
        raise Forbidden("Only household owners can perform this action")
