"""StarChain API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StarChainError → structured JSON responses
    - CORS configured from settings read when the app is built, never at import
    - One Ledger per process, built in the lifespan; its genesis record is created there

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - build_ledger() wires concrete collaborators; tests build their own Ledger with fakes
    - create_app() factory: uvicorn runs it with factory=True and tests build a fresh
      app per test, so environment overrides apply
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from starchain.api.error_handlers import register_error_handlers
from starchain.api.routes import blocks, health, ownership, validation
from starchain.config import Settings, get_settings
from starchain.core.ledger import Ledger
from starchain.infrastructure.bitcoin_message import BitcoinMessageVerifier
from starchain.infrastructure.clock import SystemClock
from starchain.infrastructure.hashing import Sha256HashProvider
from starchain.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def build_ledger(settings: Settings) -> Ledger:
    """Ledger wired to SHA-256, Bitcoin message signatures and the wall clock."""
    return Ledger(
        Sha256HashProvider(),
        BitcoinMessageVerifier(),
        SystemClock(),
        challenge_window_seconds=settings.challenge_window_seconds,
        challenge_suffix=settings.challenge_suffix,
        genesis_data=settings.genesis_data,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    app.state.ledger = build_ledger(settings)
    logger.info("StarChain API started")
    yield
    logger.info("StarChain API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the registry API. Settings default to the cached environment settings."""
    settings = settings or get_settings()
    app = FastAPI(
        title="StarChain API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(blocks.router)
    app.include_router(ownership.router)
    app.include_router(validation.router)

    register_error_handlers(app)
    return app
