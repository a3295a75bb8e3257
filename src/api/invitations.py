"""Invitation endpoints used from the acceptance link."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_invitation_service
from src.models.user import User
from src.schemas.auth import UserResponse
from src.schemas.household import HouseholdMemberResponse
from src.schemas.invitation import (
    InvitationRegister,
    InvitationRegisterResponse,
    InvitationResponse,
)
from src.services.auth import create_access_token
from src.services.invitation_service import InvitationService

router = APIRouter(prefix="/api/v1/invitations", tags=["invitations"])


@router.get("/{invitation_id}", response_model=InvitationResponse)
def get_invitation(
    invitation_id: str,
    service: Annotated[InvitationService, Depends(get_invitation_service)],
):
    """Get an invitation that can still be accepted.

    No authentication: the invitee may not have an account yet.
    """
    return service.get_invitation(invitation_id)


@router.post("/{invitation_id}/accept", response_model=HouseholdMemberResponse)
def accept_invitation(
    invitation_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[InvitationService, Depends(get_invitation_service)],
):
    """Accept an invitation as the current user."""
    return service.accept(invitation_id, current_user)


@router.post(
    "/{invitation_id}/register",
    response_model=InvitationRegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_from_invitation(
    invitation_id: str,
    register_data: InvitationRegister,
    service: Annotated[InvitationService, Depends(get_invitation_service)],
):
    """Create an account for the invited email and join the household."""
    user, member = service.register_and_accept(
        invitation_id,
        register_data.email,
        register_data.password,
        register_data.name,
    )
    return InvitationRegisterResponse(
        access_token=create_access_token(user.id, user.email),
        user=UserResponse.model_validate(user),
        member=HouseholdMemberResponse.model_validate(member),
    )


@router.post("/{invitation_id}/decline", response_model=InvitationResponse)
def decline_invitation(
    invitation_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[InvitationService, Depends(get_invitation_service)],
):
    """Decline an invitation."""
    return service.decline(invitation_id)


@router.delete("/{invitation_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_invitation(
    invitation_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[InvitationService, Depends(get_invitation_service)],
):
    """Cancel an invitation that hasn't been accepted (owner only)."""
    service.cancel(invitation_id, current_user.id)
