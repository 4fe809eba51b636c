"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from clubhub import __version__
from clubhub.config import settings
from clubhub.database import connect_db, disconnect_db
from clubhub.exceptions import ClubHubError
from clubhub.routes import clubs_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the database on startup, disconnect on shutdown"""
    await connect_db()
    logger.info("%s started in %s mode", settings.APP_NAME, settings.APP_ENV)
    yield
    await disconnect_db()
    logger.info("%s stopped", settings.APP_NAME)


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Club membership management API",
    version=__version__,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Domain errors carry their own status code
@app.exception_handler(ClubHubError)
async def club_error_handler(request: Request, exc: ClubHubError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": __version__
    }


app.include_router(clubs_router, prefix="/clubs", tags=["Clubs"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clubhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # Auto-reload on code changes
    )
