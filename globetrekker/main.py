"""FastAPI application factory.

The app object lives in the root ``main.py``::

    uvicorn main:app --reload

``create_app`` takes optional settings, mail backend and engine so tests
can build an isolated app against an in-memory database and a fake mailer.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from globetrekker.api import auth, contact, health, registration, subscribe
from globetrekker.api.deps import AppContext
from globetrekker.core.config import Settings, get_settings
from globetrekker.core.database import build_engine, build_session_factory, init_db
from globetrekker.core.errors import register_error_handlers
from globetrekker.core.logging_config import setup_logging
from globetrekker.services.mailer import Mailer, build_mailer

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    mailer: Optional[Mailer] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    engine = engine or build_engine(settings.resolved_database_url)
    context = AppContext(
        settings=settings,
        engine=engine,
        session_factory=build_session_factory(engine),
        mailer=mailer or build_mailer(settings),
    )

    app = FastAPI(title=settings.project_name)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(subscribe.router)
    app.include_router(contact.router)
    app.include_router(auth.router)
    app.include_router(registration.router)

    @app.on_event("startup")
    def _startup() -> None:
        check_startup(context)

    return app


def check_startup(context: AppContext) -> None:
    """Warn about missing configuration and make sure the database is up.

    Missing variables are not fatal; an unreachable database exits the
    process with status 1.
    """
    for key in context.settings.missing_required():
        logger.warning("Missing env var: %s", key)
    try:
        init_db(context.engine)
    except SQLAlchemyError:
        logger.exception("Database connection error, shutting down")
        raise SystemExit(1)
    logger.info("Database ready")
