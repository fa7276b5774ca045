"""Applixy API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ApplixyError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup, open feed subscriptions cancelled on shutdown
    - Idle feed controllers swept in the background while the app runs

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables auto-created only when DATABASE_AUTO_CREATE is set (alembic otherwise)
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from applixy import __version__
from applixy.api.dependencies import close_feed_controllers, sweep_feed_controllers
from applixy.api.error_handlers import register_error_handlers
from applixy.api.routes import auth, directory, feed, health, saved, submissions
from applixy.config import get_settings
from applixy.infrastructure.database import init_db
from applixy.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await manager.create_tables()
    sweeper = asyncio.create_task(sweep_feed_controllers(
        settings.feed_sweep_interval_seconds, settings.feed_idle_timeout_seconds,
    ))
    logger.info("Applixy API started")
    yield
    logger.info("Applixy API shutting down")
    sweeper.cancel()
    try:
        await sweeper
    except asyncio.CancelledError:
        pass
    await close_feed_controllers()
    await manager.dispose()


app = FastAPI(title="Applixy API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(feed.router)
app.include_router(saved.router)
app.include_router(directory.router)
app.include_router(submissions.router)

register_error_handlers(app)
