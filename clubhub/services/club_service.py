"""
Club Service
Business rules for club membership, capacity and ownership
"""

import logging

from clubhub.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from clubhub.models.club import JoinState
from clubhub.repositories.club_repository import ClubRepository
from clubhub.schemas.club import (
    CreateClubRequest,
    UpdateClubRequest,
    DelegateClubRequest,
    ApproveClubRequest,
    ClubResponse,
    ClubListResponse,
)

logger = logging.getLogger(__name__)


class ClubService:
    """
    Service for club management operations

    Every precondition is checked here, in order, before the repository is
    asked to write anything.
    """

    def __init__(self, club_repository: ClubRepository):
        self.club_repository = club_repository

    async def _get_club_or_404(self, club_id: int) -> dict:
        club = await self.club_repository.get_club_by_id(club_id)
        if not club:
            raise NotFoundError("Club not found")
        return club

    async def _get_owned_club(self, club_id: int, actor_id: int, action: str) -> dict:
        club = await self._get_club_or_404(club_id)
        if club["owner_id"] != actor_id:
            raise ForbiddenError(f"Only the club owner can {action} the club")
        return club

    async def create_club(self, owner_id: int, data: CreateClubRequest) -> ClubResponse:
        """Create a club; the owner becomes its first joined member"""
        if await self.club_repository.club_name_exists(data.name):
            raise ConflictError(f"Club with name '{data.name}' already exists")

        club = await self.club_repository.create_club(
            owner_id=owner_id,
            name=data.name,
            description=data.description,
            max_capacity=data.max_capacity
        )
        logger.info("Club %s created by user %s", club["id"], owner_id)

        return ClubResponse.model_validate(club)

    async def join_club(self, club_id: int, user_id: int) -> None:
        """Request to join a club; the request stays pending until approved"""
        club = await self._get_club_or_404(club_id)

        join_state = await self.club_repository.get_join_state(club_id, user_id)
        if join_state == JoinState.PENDING:
            raise ConflictError(
                "Join request already sent. Wait for the club owner to approve it"
            )
        if join_state == JoinState.JOINED:
            raise ConflictError("Already a member of this club")

        joined_count = await self.club_repository.count_joined_users(club_id)
        if joined_count >= club["max_capacity"]:
            raise ConflictError("Club is full")

        # Capacity is re-checked in the same statement as the insert
        inserted = await self.club_repository.join_club(
            club_id, user_id, club["max_capacity"]
        )
        if not inserted:
            raise ConflictError("Club is full")

        logger.info("User %s requested to join club %s", user_id, club_id)

    async def out_club(self, club_id: int, user_id: int) -> None:
        """Leave a club, or cancel a pending join request"""
        club = await self._get_club_or_404(club_id)

        join_state = await self.club_repository.get_join_state(club_id, user_id)
        if join_state is None:
            raise ConflictError("Never requested to join this club")

        if club["owner_id"] == user_id:
            raise ConflictError(
                "The club owner cannot leave. Delegate ownership first"
            )

        await self.club_repository.out_club(club_id, user_id)
        logger.info("User %s left club %s (was %s)", user_id, club_id, join_state.value)

    async def get_club_by_id(self, club_id: int) -> ClubResponse:
        club = await self._get_club_or_404(club_id)
        return ClubResponse.model_validate(club)

    async def get_clubs(self) -> ClubListResponse:
        clubs = await self.club_repository.get_clubs()
        return ClubListResponse(total=len(clubs), clubs=clubs)

    async def get_my_clubs(self, user_id: int) -> ClubListResponse:
        """Clubs the user has joined (pending requests excluded)"""
        clubs = await self.club_repository.get_my_clubs(user_id)
        return ClubListResponse(total=len(clubs), clubs=clubs)

    async def update_club(
        self,
        club_id: int,
        data: UpdateClubRequest,
        actor_id: int
    ) -> ClubResponse:
        """
        Update club settings (owner only)

        Omitted fields stay unchanged; explicit nulls are rejected. Capacity
        cannot drop below the current number of joined members.
        """
        club = await self._get_owned_club(club_id, actor_id, "update")

        supplied = data.model_dump(include=data.model_fields_set)

        if "name" in supplied and supplied["name"] is None:
            raise BadRequestError("Club name cannot be null")
        if "description" in supplied and supplied["description"] is None:
            raise BadRequestError("Club description cannot be null")
        if "max_capacity" in supplied and supplied["max_capacity"] is None:
            raise BadRequestError("Club max capacity cannot be null")

        if "name" in supplied and supplied["name"] != club["name"]:
            if await self.club_repository.club_name_exists(supplied["name"]):
                raise ConflictError(f"Club with name '{supplied['name']}' already exists")

        if "max_capacity" in supplied:
            joined_count = await self.club_repository.count_joined_users(club_id)
            if supplied["max_capacity"] < joined_count:
                raise ConflictError(
                    "Max capacity cannot be lower than the current number of members"
                )

        updated = await self.club_repository.update_club(club_id, supplied)
        logger.info("Club %s updated by user %s: %s", club_id, actor_id, sorted(supplied))

        return ClubResponse.model_validate(updated)

    async def delete_club(self, club_id: int, actor_id: int) -> None:
        """Delete a club (owner only); started events are archived, not deleted"""
        await self._get_owned_club(club_id, actor_id, "delete")

        await self.club_repository.delete_club(club_id)
        logger.info("Club %s deleted by user %s", club_id, actor_id)

    async def delegate(
        self,
        club_id: int,
        actor_id: int,
        data: DelegateClubRequest
    ) -> ClubResponse:
        """Hand ownership to another joined member; the old owner stays a member"""
        club = await self._get_owned_club(club_id, actor_id, "delegate")

        if data.user_id == club["owner_id"]:
            raise ConflictError("User is already the club owner")

        join_state = await self.club_repository.get_join_state(club_id, data.user_id)
        if join_state != JoinState.JOINED:
            raise ConflictError("Ownership can only be delegated to a club member")

        updated = await self.club_repository.delegate_owner(club_id, data.user_id)
        logger.info(
            "Club %s ownership delegated from user %s to user %s",
            club_id, actor_id, data.user_id
        )

        return ClubResponse.model_validate(updated)

    async def approve(
        self,
        club_id: int,
        actor_id: int,
        data: ApproveClubRequest
    ) -> None:
        """Approve a pending join request (owner only, capacity bounded)"""
        club = await self._get_owned_club(club_id, actor_id, "approve members of")

        join_state = await self.club_repository.get_join_state(club_id, data.user_id)
        if join_state == JoinState.JOINED:
            raise ConflictError("Already a member of this club")
        if join_state is None:
            raise ConflictError("User never requested to join this club")

        joined_count = await self.club_repository.count_joined_users(club_id)
        if joined_count >= club["max_capacity"]:
            raise ConflictError("Club is full")

        approved = await self.club_repository.approve_join(
            club_id, data.user_id, club["max_capacity"]
        )
        if not approved:
            raise ConflictError("Club is full")

        logger.info("User %s approved into club %s by user %s", data.user_id, club_id, actor_id)
