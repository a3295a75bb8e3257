"""Pantry API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_pantry_service
from src.models.enums import ExpiryStatus
from src.models.user import User
from src.schemas.pantry import (
    PantryItemCreate,
    PantryItemResponse,
    PantryItemUpdate,
    PantrySummaryResponse,
    RoomResponse,
    StorageAreaResponse,
)
from src.services import storage_areas
from src.services.inventory import SortKey
from src.services.pantry_service import PantryService

router = APIRouter(prefix="/api/v1", tags=["pantry"])


@router.get("/households/{household_id}/pantry", response_model=list[PantryItemResponse])
def list_pantry_items(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
    search: str | None = None,
    room: str | None = None,
    location: str | None = None,
    expiry: ExpiryStatus | None = None,
    hide_used: bool = False,
    sort: Annotated[SortKey, Query()] = "added",
):
    """List a household's pantry items.

    Filters combine: ``search`` matches name, brand or category, ``room`` and
    ``location`` match storage areas, ``expiry`` picks a freshness bucket
    (``expiring-week`` includes the 3-day and today buckets), and
    ``hide_used`` drops fully consumed items.
    """
    return service.list_items(
        household_id,
        current_user.id,
        search=search,
        room=room,
        location=location,
        expiry=expiry,
        hide_used=hide_used,
        sort_by=sort,
    )


@router.post(
    "/households/{household_id}/pantry",
    response_model=PantryItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_pantry_item(
    household_id: int,
    item_data: PantryItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Add an item to a household pantry."""
    return service.create(household_id, current_user.id, item_data.model_dump(exclude_unset=True))


@router.get("/households/{household_id}/pantry/summary", response_model=PantrySummaryResponse)
def get_pantry_summary(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Count a household's items per expiry bucket."""
    return service.summary(household_id, current_user.id)


@router.get("/pantry/{item_id}", response_model=PantryItemResponse)
def get_pantry_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Get a specific pantry item."""
    return service.get_item(item_id, current_user.id)


@router.put("/pantry/{item_id}", response_model=PantryItemResponse)
def update_pantry_item(
    item_id: int,
    item_data: PantryItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Update a pantry item."""
    return service.update(item_id, current_user.id, item_data.model_dump(exclude_unset=True))


@router.delete("/pantry/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pantry_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Remove an item from the pantry (and from the shopping list)."""
    service.delete(item_id, current_user.id)


@router.post(
    "/pantry/{item_id}/duplicate",
    response_model=PantryItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_pantry_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Copy an item as a new, unopened one."""
    return service.duplicate(item_id, current_user.id)


@router.post("/pantry/{item_id}/mark-used", response_model=PantryItemResponse)
def mark_pantry_item_used(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Mark an item as fully used."""
    return service.mark_used(item_id, current_user.id)


# --- Storage areas ---


@router.get("/storage-areas", response_model=list[RoomResponse])
def list_storage_areas():
    """List rooms and their storage areas."""
    return [
        RoomResponse(
            room=room,
            areas=[
                StorageAreaResponse.model_validate(area)
                for area in storage_areas.areas_for_room(room)
            ],
        )
        for room in storage_areas.rooms()
    ]
