"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_shopping_list_service
from src.models.user import User
from src.schemas.shopping_list import (
    ShoppingListAdd,
    ShoppingListClearResponse,
    ShoppingListEntryResponse,
    ShoppingListItemResponse,
)
from src.services.shopping_list_service import ShoppingListService

router = APIRouter(prefix="/api/v1/shopping-list", tags=["shopping-list"])


@router.get("", response_model=list[ShoppingListItemResponse])
def get_shopping_list(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
    household_id: int | None = None,
):
    """Get the shopping list for the current user's households, newest first."""
    return service.list_entries(current_user.id, household_id)


@router.post("", response_model=ShoppingListEntryResponse, status_code=status.HTTP_201_CREATED)
def add_to_shopping_list(
    entry_data: ShoppingListAdd,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Add a pantry item to the shopping list. Returns 409 if it's already there."""
    return service.add(entry_data.item_id, current_user.id)


@router.delete("", response_model=ShoppingListClearResponse)
def clear_shopping_list(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
    household_id: int | None = None,
):
    """Remove every entry for the current user's households."""
    return ShoppingListClearResponse(removed=service.clear(current_user.id, household_id))


@router.delete("/{entry_id}")
def remove_from_shopping_list(
    entry_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Remove an entry. Removing an entry that doesn't exist is not an error."""
    removed = service.remove(entry_id, current_user.id)
    return {"message": "Item removed from shopping list", "removed": removed}
