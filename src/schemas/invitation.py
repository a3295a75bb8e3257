"""Invitation schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.enums import HouseholdRole, InvitationStatus
from src.schemas.auth import UserResponse
from src.schemas.household import HouseholdMemberResponse


class InvitationResponse(BaseModel):
    """Invitation response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    household_id: int
    household_name: str | None = None
    email: str
    role: HouseholdRole
    status: InvitationStatus
    email_sent: bool
    invited_by: int
    created_at: datetime
    expires_at: datetime


class InviteResponse(BaseModel):
    """Result of inviting someone: either added directly or invited by email."""

    status: Literal["added", "invited"]
    message: str
    email: str
    member: HouseholdMemberResponse | None = None
    invitation: InvitationResponse | None = None
    email_sent: bool = False


class InvitationRegister(BaseModel):
    """Create an account from an invitation and accept it."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    name: str | None = Field(None, max_length=255)


class InvitationRegisterResponse(BaseModel):
    """New account plus its membership."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
    member: HouseholdMemberResponse
