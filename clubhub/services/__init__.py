"""
Service layer
"""

from fastapi import Depends
from databases import Database

from clubhub.database import get_database
from clubhub.repositories import ClubRepository
from clubhub.services.club_service import ClubService


async def get_club_service(db: Database = Depends(get_database)) -> ClubService:
    """Build a club service bound to the request's database handle"""
    return ClubService(ClubRepository(db))


__all__ = ["ClubService", "get_club_service"]
