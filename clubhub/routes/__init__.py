"""
API Routes
"""

from clubhub.routes.clubs import router as clubs_router

__all__ = ["clubs_router"]
