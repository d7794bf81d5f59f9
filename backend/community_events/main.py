"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from community_events.config import settings
from community_events.database import Base, engine
from community_events.errors import register_exception_handlers

# Import routers
from community_events.routers import events, responses, metadata, statistics

# Import all models so Base.metadata knows about them
from community_events.models.response import EventResponse  # noqa: F401
from community_events.models.metadata import EventMetadata  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)

app = FastAPI(
    title="Community Events",
    description="Community events board — like/dislike responses, event metadata and statistics",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register routers
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(responses.router, prefix="/api", tags=["Responses"])
app.include_router(metadata.router, prefix="/api", tags=["Metadata"])
app.include_router(statistics.router, prefix="/api", tags=["Statistics"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.STORAGE_BACKEND == "table" and settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "storage": settings.STORAGE_BACKEND}
