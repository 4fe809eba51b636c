"""
Data access layer
"""

from clubhub.repositories.club_repository import ClubRepository

__all__ = ["ClubRepository"]
