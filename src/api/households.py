"""Household, membership and household invitation endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_household_service, get_invitation_service
from src.models.user import User
from src.schemas.household import (
    HouseholdCreate,
    HouseholdMemberResponse,
    HouseholdResponse,
    MemberInvite,
)
from src.schemas.invitation import InvitationResponse, InviteResponse
from src.services.household_service import HouseholdService
from src.services.invitation_service import InvitationService

router = APIRouter(prefix="/api/v1/households", tags=["households"])


@router.get("", response_model=list[HouseholdResponse])
def list_households(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """List the households the current user belongs to."""
    return service.list_households(current_user.id)


@router.post("", response_model=HouseholdResponse, status_code=status.HTTP_201_CREATED)
def create_household(
    household_data: HouseholdCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Create a household owned by the current user."""
    return service.create_household(household_data.name, current_user.id)


@router.get("/{household_id}", response_model=HouseholdResponse)
def get_household(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Get a household the current user belongs to."""
    return service.get_household(household_id, current_user.id)


@router.get("/{household_id}/members", response_model=list[HouseholdMemberResponse])
def list_members(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """List members of a household."""
    return service.list_members(household_id, current_user.id)


@router.post(
    "/{household_id}/members",
    response_model=InviteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_member(
    household_id: int,
    invite_data: MemberInvite,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[InvitationService, Depends(get_invitation_service)],
):
    """Invite someone by email (owner only).

    Users who already have an account are added straight away. Anyone else
    gets a pending invitation and an email with an acceptance link; if the
    email cannot be delivered the invitation is still created and the
    response says so.
    """
    result = await service.invite(
        household_id, current_user.id, invite_data.email, invite_data.role
    )
    return InviteResponse(
        status=result.status,
        message=result.message,
        email=str(invite_data.email).lower(),
        member=HouseholdMemberResponse.model_validate(result.member) if result.member else None,
        invitation=(
            InvitationResponse.model_validate(result.invitation) if result.invitation else None
        ),
        email_sent=result.email_sent,
    )


@router.delete("/{household_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    household_id: int,
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Remove a member (owner), or leave the household (self)."""
    service.remove_member(household_id, user_id, current_user.id)


@router.get("/{household_id}/invitations", response_model=list[InvitationResponse])
def list_invitations(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[InvitationService, Depends(get_invitation_service)],
):
    """List a household's invitations, newest first."""
    return service.list_invitations(household_id, current_user.id)
