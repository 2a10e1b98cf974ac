"""Application factory for the casebook HTTP surface."""
from __future__ import annotations

from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from casebook.core.config import Settings, get_settings
from casebook.core.logging import configure_logging
from casebook.routers import cases as cases_router
from casebook.services.case_store import CaseStore, build_storage, open_store

logger = logging.getLogger(__name__)

DEV_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def create_app(settings: Optional[Settings] = None, store: Optional[CaseStore] = None) -> FastAPI:
    """Factory compatible with ``uvicorn --factory``; one store per app."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Casebook API")
    if settings.app_env != "prod":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(DEV_ORIGINS),
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    if store is None:
        store = open_store(build_storage(settings))
    app.state.case_store = store
    logger.info("casebook ready with %d cases (env=%s)", len(store), settings.app_env)

    app.include_router(cases_router.router)
    return app
