"""Household and membership schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.enums import HouseholdRole


class HouseholdCreate(BaseModel):
    """Create a household owned by the caller."""

    name: str = Field(..., min_length=1, max_length=255)


class HouseholdResponse(BaseModel):
    """Household response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    owner_id: int
    created_at: datetime


class HouseholdMemberResponse(BaseModel):
    """Household member with account details."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    household_id: int
    user_id: int
    role: HouseholdRole
    email: str | None = None
    name: str | None = None
    created_at: datetime


class MemberInvite(BaseModel):
    """Invite someone to a household, or add them directly if they have an account."""

    email: EmailStr = Field(..., max_length=255)
    role: HouseholdRole = HouseholdRole.MEMBER
