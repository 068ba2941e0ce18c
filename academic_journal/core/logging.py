"""Logging configuration."""

import logging

from academic_journal.core.config import settings


def configure_logging(debug: bool | None = None) -> None:
    """Configure root logging and quiet down noisy libraries."""
    if debug is None:
        debug = settings.DEBUG

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Suppress noisy SQLAlchemy and driver logs
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
