"""
Authentication Module
JWT token management and current-user resolution
"""

from clubhub.auth.dependencies import (
    UserBaseInfo,
    create_access_token,
    decode_access_token,
    get_current_user,
)

__all__ = [
    "UserBaseInfo",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
]
