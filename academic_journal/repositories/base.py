"""Shared repository plumbing."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from academic_journal.core.exceptions import DataError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Async repository over a single session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _execute(self, query: Any, action: str) -> Any:
        """Run a statement, wrapping driver faults into DataError."""
        try:
            return await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Unable to {action}", exc_info=True)
            raise DataError(f"Unable to {action}") from e

    async def _flush(self, action: str) -> None:
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Unable to {action}", exc_info=True)
            raise DataError(f"Unable to {action}") from e
