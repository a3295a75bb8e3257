"""Pantry item store scoped to households."""

import logging
from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy.orm import Session

from src.models.pantry import PantryItem
from src.services import access, inventory
from src.services.errors import NotFound, ValidationError
from src.services.household_service import HouseholdService

logger = logging.getLogger(__name__)

# Fields a member may set on create/update
ITEM_FIELDS = (
    "name",
    "brand",
    "category",
    "quantity",
    "completion",
    "expiry",
    "purchase_date",
    "location",
    "tags",
    "notes",
    "barcode",
    "image",
    "scanned_at",
)
REQUIRED_FIELDS = ("name", "quantity")

DEFAULT_QUANTITY = 1
UNOPENED = 100
USED_UP = 0


def normalize_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Keep known fields and turn blank strings into None."""
    normalized = {}
    for key, value in fields.items():
        if key not in ITEM_FIELDS:
            continue
        if isinstance(value, str):
            value = value.strip() or None
        normalized[key] = value
    return normalized


class PantryService:
    """Service for household pantry items."""

    def __init__(self, db: Session):
        self.db = db
        self.households = HouseholdService(db)

    def get_item_or_404(self, item_id: int) -> PantryItem:
        item = self.db.query(PantryItem).filter(PantryItem.id == item_id).first()
        if not item:
            raise NotFound("Item not found")
        return item

    def get_item(self, item_id: int, actor_id: int) -> PantryItem:
        """Get an item, checking the actor belongs to its household."""
        item = self.get_item_or_404(item_id)
        access.require_member(self.db, actor_id, item.household_id)
        return item

    def create(self, household_id: int, actor_id: int, fields: dict[str, Any]) -> PantryItem:
        """Add an item to a household pantry."""
        self.households.get_household_or_404(household_id)
        access.require_member(self.db, actor_id, household_id)

        data = normalize_fields(fields)
        if not data.get("name"):
            raise ValidationError("Name is required")
        if data.get("quantity") is None:
            data["quantity"] = DEFAULT_QUANTITY
        if data.get("completion") is None:
            data["completion"] = UNOPENED
        if data.get("scanned_at") is None:
            data["scanned_at"] = datetime.now(UTC)

        item = PantryItem(household_id=household_id, created_by=actor_id, **data)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"User {actor_id} added item {item.id} to household {household_id}")
        return item

    def list_items(
        self,
        household_id: int,
        actor_id: int,
        *,
        search: str | None = None,
        room: str | None = None,
        location: str | None = None,
        expiry: str | None = None,
        hide_used: bool = False,
        sort_by: str = "added",
        today: date | None = None,
    ) -> list[PantryItem]:
        """List a household's items with optional filtering and sorting."""
        self.households.get_household_or_404(household_id)
        access.require_member(self.db, actor_id, household_id)

        items = self.db.query(PantryItem).filter(PantryItem.household_id == household_id).all()
        items = inventory.filter_items(
            items,
            search=search,
            room=room,
            location=location,
            expiry=expiry,
            hide_used=hide_used,
            today=today,
        )
        return inventory.sort_items(items, sort_by)

    def summary(
        self, household_id: int, actor_id: int, today: date | None = None
    ) -> dict[str, int]:
        """Count a household's items per expiry bucket."""
        self.households.get_household_or_404(household_id)
        access.require_member(self.db, actor_id, household_id)
        items = self.db.query(PantryItem).filter(PantryItem.household_id == household_id).all()
        return inventory.expiry_summary(items, today)

    def update(self, item_id: int, actor_id: int, patch: dict[str, Any]) -> PantryItem:
        """Apply a partial update. Any household member may edit any item."""
        item = self.get_item(item_id, actor_id)

        data = normalize_fields(patch)
        for key in REQUIRED_FIELDS:
            if key in data and data[key] is None:
                raise ValidationError(f"{key.capitalize()} cannot be empty")

        for key, value in data.items():
            setattr(item, key, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item_id: int, actor_id: int) -> None:
        """Delete an item; its shopping list entry goes with it."""
        item = self.get_item(item_id, actor_id)
        self.db.delete(item)
        self.db.commit()
        logger.info(f"User {actor_id} deleted item {item_id}")

    def duplicate(self, item_id: int, actor_id: int) -> PantryItem:
        """Copy an item as a fresh, unopened one."""
        source = self.get_item(item_id, actor_id)
        data = {key: getattr(source, key) for key in ITEM_FIELDS}
        data["completion"] = UNOPENED

        item = PantryItem(household_id=source.household_id, created_by=actor_id, **data)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"User {actor_id} duplicated item {item_id} as {item.id}")
        return item

    def mark_used(self, item_id: int, actor_id: int) -> PantryItem:
        """Mark an item as fully consumed."""
        return self.update(item_id, actor_id, {"completion": USED_UP})
