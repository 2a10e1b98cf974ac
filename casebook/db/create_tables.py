"""Create the storage slot table (``python -m casebook.db.create_tables``)."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = logging.getLogger(__name__)


def create_all() -> None:
    """Create missing tables; existing tables are left untouched."""
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.debug("storage tables ensured on %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    try:
        create_all()
        print("Storage tables created successfully.")
    except (RuntimeError, SQLAlchemyError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
