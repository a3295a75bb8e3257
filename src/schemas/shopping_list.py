"""Shopping list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from src.schemas.pantry import PantryItemResponse


class ShoppingListAdd(BaseModel):
    """Add a pantry item to the shopping list."""

    item_id: int


class ShoppingListEntryResponse(BaseModel):
    """Shopping list entry without item details."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    item_id: int
    added_by: int
    added_at: datetime


class ShoppingListItemResponse(ShoppingListEntryResponse):
    """Shopping list entry joined with the current state of its item."""

    item: PantryItemResponse


class ShoppingListClearResponse(BaseModel):
    """Result of clearing the shopping list."""

    removed: int
