"""
FastAPI application bootstrap with: \n
- Lifespan-managed schema creation and development identity row \n
- CORS configured for the frontend \n
- Identity provider and content gateway attached to `app.state` \n
- Static serving of uploaded images (`/uploads`) and the static pages (`/`) \n

Environment contract (from `settings`): \n
- SKIP_AUTH: inject the fixed development identity instead of verifying tokens. \n
- FRONTEND_URL: allowed CORS origin. \n
- UPLOAD_DIR / PUBLIC_DIR: upload storage and static page directories. \n
- LOG_LEVEL: root log level. \n

Run with ``uvicorn techmatch.main:app``.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from techmatch.api.auth import build_identity_provider, development_identity
from techmatch.api.content_gateway import build_content_gateway
from techmatch.api.exception_handlers import setup_exception_handlers
from techmatch.api.fast_api import router
from techmatch.database.config.config import settings
from techmatch.database.config.connection_engine import init_db
from techmatch.database.core.funcs import ensure_admin, ensure_user

logger = logging.getLogger(__name__)
"""Module logger; handlers and level come from `logging.basicConfig` in `create_app`."""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    App lifespan manager.

    Notes
    ------------
    - On startup (before yielding):
        * Create missing tables.
        * Under SKIP_AUTH, make sure the development identity has a user row
          so the listings it creates satisfy the owner foreign key.
        * Seed the `ADMIN_EMAIL` administrator when configured.
    - On shutdown (after yielding):
        * Close the content gateway's HTTP client.
    """
    init_db()
    if settings.SKIP_AUTH:
        ensure_user(identity=development_identity(settings))
    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        ensure_admin(email=settings.ADMIN_EMAIL, password=settings.ADMIN_PASSWORD, name=settings.ADMIN_NAME)
    logger.info("TechMatch started (environment=%s)", settings.ENVIRONMENT)
    try:
        yield
    finally:
        app.state.content_gateway.close()
        logger.info("TechMatch shut down")


def create_app() -> FastAPI:
    """Build the application from the current settings."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    app = FastAPI(title="TechMatch", lifespan=lifespan)
    app.state.identity_provider = build_identity_provider(settings)
    app.state.content_gateway = build_content_gateway(settings)

    # -----------------------
    # CORS configuration
    # -----------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------
    # API routes
    # -----------------------
    app.include_router(router)
    setup_exception_handlers(app)

    # -----------------------
    # Static assets
    # -----------------------
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")
    if Path(settings.PUBLIC_DIR).is_dir():
        app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")
    else:
        logger.info("No static pages at %s; serving the API only", settings.PUBLIC_DIR)
    return app


app = create_app()
"""Instantiates the FastAPI application served by uvicorn."""
