"""Service wiring for a database session."""

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from academic_journal.core.config import Settings, get_settings
from academic_journal.repositories.catalog import (
    CourseRepository,
    LectureRepository,
    LecturerRepository,
    StudentRepository,
)
from academic_journal.repositories.journal_record import JournalRecordRepository
from academic_journal.services.formatters import FormatterRegistry, create_default_registry
from academic_journal.services.journal import JournalService
from academic_journal.services.notification import MessageSenderFactory
from academic_journal.services.report import ReportService


@lru_cache
def get_formatter_registry() -> FormatterRegistry:
    """Process-wide formatter registry with "json" and "xml" registered."""
    return create_default_registry()


def get_journal_service(db: AsyncSession, settings: Settings | None = None) -> JournalService:
    """Journal service backed by SQLAlchemy repositories."""
    settings = settings or get_settings()
    return JournalService(
        records=JournalRecordRepository(db),
        lectures=LectureRepository(db),
        students=StudentRepository(db),
        courses=CourseRepository(db),
        lecturers=LecturerRepository(db),
        senders=MessageSenderFactory(settings),
        settings=settings,
    )


def get_report_service(db: AsyncSession, settings: Settings | None = None) -> ReportService:
    """Report service sharing the session with its journal service."""
    return ReportService(
        journal=get_journal_service(db, settings),
        lectures=LectureRepository(db),
        students=StudentRepository(db),
        courses=CourseRepository(db),
        formatters=get_formatter_registry(),
    )
