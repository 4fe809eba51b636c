"""
Database Models
Import all models here for Alembic migrations
"""

from clubhub.models.user import User
from clubhub.models.club import Club, ClubJoin, JoinState
from clubhub.models.event import Event, EventJoin

__all__ = [
    "User",
    "Club",
    "ClubJoin",
    "JoinState",
    "Event",
    "EventJoin",
]
