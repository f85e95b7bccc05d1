"""
FastAPI application factory and entry point.

This module creates and configures the FastAPI application:
  1. Lifespan manager — creates tables, loads demo data, disposes the engine
  2. Middleware — request logging and CORS
  3. Exception handlers — maps domain errors to HTTP responses
  4. Router registration — /cashcards, gated on the CARD-OWNER role

Running locally:
    uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.config import settings
from app.database import AsyncSessionLocal, Base, engine
from app.dependencies import require_card_owner
from app.exceptions import register_exception_handlers
from app.logging_config import configure_logging
from app.middleware import RequestLogMiddleware
from app.routers import cash_cards
from app.seed import seed_demo_data

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("cashcard.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      Creates all database tables if they don't exist, then loads the demo
      cash cards when SEED_DEMO_DATA is enabled.

    Shutdown:
      Disposes of the database engine, closing all connections cleanly.
    """
    # --- Startup ---
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.SEED_DEMO_DATA:
        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)

    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    # --- Shutdown ---
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Cash card REST API with HTTP Basic auth and owner-scoped access",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(RequestLogMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

# Every /cashcards route requires Basic credentials for a CARD-OWNER
app.include_router(
    cash_cards.router,
    prefix="/cashcards",
    tags=["Cash Cards"],
    dependencies=[Depends(require_card_owner)],
)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health_check():
    """Unauthenticated liveness probe."""
    return {"status": "ok", "version": settings.APP_VERSION}
