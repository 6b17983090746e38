"""Pledgeline — FastAPI Application Entry Point.

Live active-monthly-sponsorship summaries for fundraising profiles.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pledgeline.config import settings
from pledgeline.database import init_db, test_connection
from pledgeline.api.sponsorship_routes import router as sponsorship_router
from pledgeline.core.logging import get_logger

logger = get_logger("main")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("Pledgeline starting up...")
    if settings.snapshot_history_enabled:
        if test_connection():
            try:
                init_db()
            except Exception as e:
                logger.error(f"Table creation failed: {e}")
        else:
            logger.error("Database NOT connected — snapshot history will fail")
    yield
    logger.info("Pledgeline shut down")


app = FastAPI(
    title="Pledgeline",
    description="Active monthly sponsorship totals and goal progress for fundraising profiles.",
    version=VERSION,
    lifespan=lifespan,
)

# CORS — the ticker is embedded on campaign pages served from other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(sponsorship_router)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "pledgeline",
        "version": VERSION,
    }
