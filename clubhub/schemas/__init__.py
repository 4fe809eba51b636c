"""
Pydantic schemas for request/response validation
"""

from clubhub.schemas.club import (
    CreateClubRequest,
    UpdateClubRequest,
    DelegateClubRequest,
    ApproveClubRequest,
    ClubResponse,
    ClubListResponse,
)

__all__ = [
    "CreateClubRequest",
    "UpdateClubRequest",
    "DelegateClubRequest",
    "ApproveClubRequest",
    "ClubResponse",
    "ClubListResponse",
]
