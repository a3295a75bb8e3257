"""Pantry schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.models.enums import ExpiryStatus
from src.services.inventory import classify_expiry

OPTIONAL_TEXT_FIELDS = (
    "brand",
    "category",
    "location",
    "tags",
    "notes",
    "barcode",
    "image",
)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PantryItemCreate(BaseModel):
    """Create a pantry item."""

    name: str = Field(..., min_length=1, max_length=255)
    brand: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=100)
    quantity: int | None = Field(None, ge=0)
    completion: int | None = Field(None, ge=0, le=100)
    expiry: date | None = None
    purchase_date: date | None = None
    location: str | None = Field(None, max_length=100)
    tags: str | None = Field(None, max_length=500)
    notes: str | None = None
    barcode: str | None = Field(None, max_length=64)
    image: str | None = Field(None, max_length=1024)
    scanned_at: datetime | None = None

    @field_validator(
        *OPTIONAL_TEXT_FIELDS, "expiry", "purchase_date", "scanned_at", mode="before"
    )
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class PantryItemUpdate(BaseModel):
    """Update a pantry item. Only fields that are sent are changed."""

    name: str | None = Field(None, min_length=1, max_length=255)
    brand: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=100)
    quantity: int | None = Field(None, ge=0)
    completion: int | None = Field(None, ge=0, le=100)
    expiry: date | None = None
    purchase_date: date | None = None
    location: str | None = Field(None, max_length=100)
    tags: str | None = Field(None, max_length=500)
    notes: str | None = None
    barcode: str | None = Field(None, max_length=64)
    image: str | None = Field(None, max_length=1024)
    scanned_at: datetime | None = None

    @field_validator(
        *OPTIONAL_TEXT_FIELDS, "expiry", "purchase_date", "scanned_at", mode="before"
    )
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class PantryItemResponse(BaseModel):
    """Pantry item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    household_id: int
    name: str
    brand: str | None
    category: str | None
    quantity: int
    completion: int | None
    expiry: date | None
    purchase_date: date | None
    location: str | None
    tags: str | None
    notes: str | None
    barcode: str | None
    image: str | None
    created_by: int | None
    scanned_at: datetime | None
    created_at: datetime
    updated_at: datetime
    expiry_status: ExpiryStatus | None = None

    @model_validator(mode="after")
    def fill_expiry_status(self) -> "PantryItemResponse":
        if self.expiry_status is None:
            self.expiry_status = classify_expiry(self.expiry)
        return self


class PantrySummaryResponse(BaseModel):
    """Item counts per expiry bucket. ``expiring_week`` includes the finer buckets."""

    total: int
    expired: int
    expiring_today: int
    expiring_3_days: int
    expiring_week: int
    ok: int
    no_expiry: int
    used_up: int


class StorageAreaResponse(BaseModel):
    """A storage area inside a room."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    room: str


class RoomResponse(BaseModel):
    """A room and its storage areas."""

    room: str
    areas: list[StorageAreaResponse]
