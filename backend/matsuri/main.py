"""Matsuri API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MatsuriError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and object storage initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: cleanup of the engine and the storage client
      happens in one place
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matsuri.api.error_handlers import register_error_handlers
from matsuri.api.routes import festivals, health, pledges
from matsuri.config import get_settings
from matsuri.infrastructure.database import init_db
from matsuri.infrastructure.observability import setup_logging
from matsuri.infrastructure.storage_client import init_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    storage = init_storage(settings)
    logger.info("Matsuri API started")
    yield
    logger.info("Matsuri API shutting down")
    await storage.aclose()
    await db.dispose()


app = FastAPI(title="Matsuri API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(festivals.router)
app.include_router(pledges.router)

register_error_handlers(app)
