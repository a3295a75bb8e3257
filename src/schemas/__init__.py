"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.household import (
    HouseholdCreate,
    HouseholdMemberResponse,
    HouseholdResponse,
    MemberInvite,
)
from src.schemas.invitation import InvitationResponse, InviteResponse
from src.schemas.pantry import PantryItemCreate, PantryItemResponse, PantryItemUpdate
from src.schemas.shopping_list import ShoppingListAdd, ShoppingListItemResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "HouseholdCreate",
    "HouseholdResponse",
    "HouseholdMemberResponse",
    "MemberInvite",
    "InvitationResponse",
    "InviteResponse",
    "PantryItemCreate",
    "PantryItemUpdate",
    "PantryItemResponse",
    "ShoppingListAdd",
    "ShoppingListItemResponse",
]
