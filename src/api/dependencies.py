"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import decode_access_token
from src.services.email import EmailService
from src.services.household_service import HouseholdService
from src.services.invitation_service import InvitationService
from src.services.pantry_service import PantryService
from src.services.shopping_list_service import ShoppingListService

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_email_service() -> EmailService:
    """Get email service instance."""
    return EmailService()


def get_household_service(
    db: Annotated[Session, Depends(get_db)],
) -> HouseholdService:
    """Get household service with dependencies."""
    return HouseholdService(db)


def get_invitation_service(
    db: Annotated[Session, Depends(get_db)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
) -> InvitationService:
    """Get invitation service with dependencies."""
    return InvitationService(db, email_service)


def get_pantry_service(
    db: Annotated[Session, Depends(get_db)],
) -> PantryService:
    """Get pantry service with dependencies."""
    return PantryService(db)


def get_shopping_list_service(
    db: Annotated[Session, Depends(get_db)],
) -> ShoppingListService:
    """Get shopping list service with dependencies."""
    return ShoppingListService(db)
