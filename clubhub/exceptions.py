"""
Domain Exceptions
Raised by the service layer and rendered as HTTP errors by the app
"""

from fastapi import status


class ClubHubError(Exception):
    """Base exception for all club rule violations"""
    
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class NotFoundError(ClubHubError):
    """Referenced club does not exist"""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ClubHubError):
    """Uniqueness, capacity or membership-state violation"""
    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(ClubHubError):
    """Actor is not the club owner"""
    status_code = status.HTTP_403_FORBIDDEN


class BadRequestError(ClubHubError):
    """Payload sets a field to null instead of omitting it"""
    status_code = status.HTTP_400_BAD_REQUEST
