"""Shopping list built on top of household pantry items."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from src.models.pantry import PantryItem
from src.models.shopping_list import ShoppingListEntry
from src.services import access
from src.services.errors import Conflict, Forbidden, NotFound

logger = logging.getLogger(__name__)


class ShoppingListService:
    """Service for the per-household "buy again" list."""

    def __init__(self, db: Session):
        self.db = db

    def _reachable_household_ids(self, user_id: int, household_id: int | None) -> list[int]:
        household_ids = access.member_household_ids(self.db, user_id)
        if household_id is None:
            return household_ids
        if household_id not in household_ids:
            raise Forbidden("User is not a member of this household")
        return [household_id]

    def add(self, item_id: int, user_id: int) -> ShoppingListEntry:
        """Put a pantry item on the list. Each item can only be listed once."""
        item = self.db.query(PantryItem).filter(PantryItem.id == item_id).first()
        if not item:
            raise NotFound("Item not found")
        access.require_member(self.db, user_id, item.household_id)

        entry = ShoppingListEntry(item_id=item_id, added_by=user_id)
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Item already in shopping list") from None
        self.db.refresh(entry)
        logger.info(f"User {user_id} added item {item_id} to the shopping list")
        return entry

    def list_entries(
        self, user_id: int, household_id: int | None = None
    ) -> list[ShoppingListEntry]:
        """Entries for the user's households with their items, newest first."""
        household_ids = self._reachable_household_ids(user_id, household_id)
        if not household_ids:
            return []
        return (
            self.db.query(ShoppingListEntry)
            .join(PantryItem, ShoppingListEntry.item_id == PantryItem.id)
            .options(joinedload(ShoppingListEntry.item))
            .filter(PantryItem.household_id.in_(household_ids))
            .order_by(ShoppingListEntry.added_at.desc(), ShoppingListEntry.id.desc())
            .all()
        )

    def remove(self, entry_id: int, user_id: int) -> bool:
        """Remove one entry. Returns False when there was nothing to remove."""
        entry = self.db.query(ShoppingListEntry).filter(ShoppingListEntry.id == entry_id).first()
        if not entry:
            return False
        access.require_member(self.db, user_id, entry.item.household_id)
        self.db.delete(entry)
        self.db.commit()
        return True

    def clear(self, user_id: int, household_id: int | None = None) -> int:
        """Remove every entry in the user's households in a single statement."""
        household_ids = self._reachable_household_ids(user_id, household_id)
        if not household_ids:
            return 0

        item_ids = select(PantryItem.id).where(PantryItem.household_id.in_(household_ids))
        try:
            removed = (
                self.db.query(ShoppingListEntry)
                .filter(ShoppingListEntry.item_id.in_(item_ids))
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to clear shopping list for user {user_id}")
            raise
        logger.info(f"User {user_id} cleared {removed} shopping list entries")
        return removed
