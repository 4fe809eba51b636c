"""
Club Routes
Club creation, membership and owner management endpoints
"""

from fastapi import APIRouter, Depends, status
from clubhub.auth import UserBaseInfo, get_current_user
from clubhub.services import ClubService, get_club_service
from clubhub.schemas.club import (
    CreateClubRequest,
    UpdateClubRequest,
    DelegateClubRequest,
    ApproveClubRequest,
    ClubResponse,
    ClubListResponse,
)

router = APIRouter()


@router.post("", response_model=ClubResponse, status_code=status.HTTP_201_CREATED)
async def create_club(
    request: CreateClubRequest,
    current_user: UserBaseInfo = Depends(get_current_user),
    club_service: ClubService = Depends(get_club_service)
):
    """
    Create a new club

    - **name**: Club name (required, must be unique)
    - **description**: Club description (required)
    - **maxCapacity**: Maximum number of members, at least 1

    The creator becomes the owner and first member.
    """
    return await club_service.create_club(current_user.id, request)


@router.get("", response_model=ClubListResponse)
async def list_clubs(club_service: ClubService = Depends(get_club_service)):
    """List all clubs"""
    return await club_service.get_clubs()


@router.get("/me", response_model=ClubListResponse)
async def list_my_clubs(
    current_user: UserBaseInfo = Depends(get_current_user),
    club_service: ClubService = Depends(get_club_service)
):
    """List clubs the current user has joined"""
    return await club_service.get_my_clubs(current_user.id)


@router.get("/{club_id}", response_model=ClubResponse)
async def get_club(
    club_id: int,
    club_service: ClubService = Depends(get_club_service)
):
    """Get club details"""
    return await club_service.get_club_by_id(club_id)


@router.patch("/{club_id}", response_model=ClubResponse)
async def update_club(
    club_id: int,
    request: UpdateClubRequest,
    current_user: UserBaseInfo = Depends(get_current_user),
    club_service: ClubService = Depends(get_club_service)
):
    """
    Update club details (owner only)

    Omit a field to keep it; null values are rejected.
    """
    return await club_service.update_club(club_id, request, current_user.id)


@router.delete("/{club_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_club(
    club_id: int,
    current_user: UserBaseInfo = Depends(get_current_user),
    club_service: ClubService = Depends(get_club_service)
):
    """
    Delete a club (owner only)

    Upcoming club events are deleted; events that already started are archived.
    """
    await club_service.delete_club(club_id, current_user.id)


@router.post("/{club_id}/join", status_code=status.HTTP_204_NO_CONTENT)
async def join_club(
    club_id: int,
    current_user: UserBaseInfo = Depends(get_current_user),
    club_service: ClubService = Depends(get_club_service)
):
    """Request to join a club"""
    await club_service.join_club(club_id, current_user.id)


@router.delete("/{club_id}/join", status_code=status.HTTP_204_NO_CONTENT)
async def out_club(
    club_id: int,
    current_user: UserBaseInfo = Depends(get_current_user),
    club_service: ClubService = Depends(get_club_service)
):
    """
    Leave a club or cancel a pending join request

    Upcoming events you host in the club are cancelled and your
    participation in other upcoming club events is removed.
    """
    await club_service.out_club(club_id, current_user.id)


@router.put("/{club_id}/delegate", response_model=ClubResponse)
async def delegate_club(
    club_id: int,
    request: DelegateClubRequest,
    current_user: UserBaseInfo = Depends(get_current_user),
    club_service: ClubService = Depends(get_club_service)
):
    """Transfer ownership to another member (owner only)"""
    return await club_service.delegate(club_id, current_user.id, request)


@router.post("/{club_id}/approve", status_code=status.HTTP_204_NO_CONTENT)
async def approve_member(
    club_id: int,
    request: ApproveClubRequest,
    current_user: UserBaseInfo = Depends(get_current_user),
    club_service: ClubService = Depends(get_club_service)
):
    """Approve a pending join request (owner only)"""
    await club_service.approve(club_id, current_user.id, request)
