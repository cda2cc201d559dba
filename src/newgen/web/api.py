"""FastAPI application factory.

Main entry point for the Newgen Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from newgen import __version__
from newgen.config.app_config import AppConfig
from newgen.db.database import get_db_path, init_db
from newgen.web.dependencies import get_app_config, set_app_config
from newgen.web.errors import register_error_handlers
from newgen.web.routes import (
    auth_router,
    careers_router,
    chat_router,
    health_router,
    profile_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    config = get_app_config()
    init_db(config.database.path, timeout=config.database.timeout)
    logger.info(
        "api_startup",
        database=str(get_db_path()),
        llm_base_url=config.llm.base_url,
        llm_model=config.llm.model,
        email_configured=config.email.is_configured,
    )
    yield


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Explicit configuration; loaded from file/env when omitted

    Returns:
        Configured FastAPI app instance
    """
    set_app_config(config)

    app = FastAPI(
        title="Newgen Career API",
        description="Accounts, profiles, saved careers and an AI career advisor",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(profile_router)
    app.include_router(careers_router)
    app.include_router(chat_router)

    return app


# Default app instance for uvicorn
app = create_app()
