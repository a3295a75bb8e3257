"""SQLAlchemy models."""

from src.models.household import Household, HouseholdMember
from src.models.invitation import Invitation
from src.models.pantry import PantryItem
from src.models.shopping_list import ShoppingListEntry
from src.models.user import User

__all__ = [
    "User",
    "Household",
    "HouseholdMember",
    "Invitation",
    "PantryItem",
    "ShoppingListEntry",
]
