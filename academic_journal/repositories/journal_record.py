"""SQLAlchemy-backed journal record store."""

from sqlalchemy import select

from academic_journal.core.exceptions import EntityNotFoundError, IncorrectIdentifierError
from academic_journal.models.course import Lecture
from academic_journal.models.journal_record import JournalRecord
from academic_journal.repositories.base import BaseRepository
from academic_journal.schemas.journal import JournalRecordFilter, JournalRecordSchema


class JournalRecordRepository(BaseRepository):
    """Journal record persistence."""

    async def get_filtered(self, filters: JournalRecordFilter) -> list[JournalRecordSchema]:
        """Get records matching every set filter field."""
        query = select(JournalRecord)

        if filters.lecture_id is not None:
            query = query.where(JournalRecord.lecture_id == filters.lecture_id)
        if filters.student_id is not None:
            query = query.where(JournalRecord.student_id == filters.student_id)
        if filters.course_id is not None:
            query = query.join(Lecture, JournalRecord.lecture_id == Lecture.id).where(
                Lecture.course_id == filters.course_id
            )

        result = await self._execute(query.order_by(JournalRecord.id), "get journal records")
        return [JournalRecordSchema.model_validate(r) for r in result.scalars().all()]

    async def get_by_id(self, record_id: int) -> JournalRecordSchema | None:
        record = await self._get_entity(record_id)
        return JournalRecordSchema.model_validate(record) if record else None

    async def save(self, record: JournalRecordSchema) -> int:
        """Insert a record with id 0, update an existing one otherwise."""
        if record.id < 0:
            raise IncorrectIdentifierError(record.id)

        if record.id == 0:
            entity = JournalRecord(
                lecture_id=record.lecture_id,
                student_id=record.student_id,
                attendance=record.attendance,
                score=record.score,
            )
            self.db.add(entity)
        else:
            entity = await self._get_entity(record.id)
            if entity is None:
                raise EntityNotFoundError("Journal record", record.id)
            entity.lecture_id = record.lecture_id
            entity.student_id = record.student_id
            entity.attendance = record.attendance
            entity.score = record.score

        await self._flush("save journal record")
        return entity.id

    async def delete(self, record: JournalRecordSchema) -> None:
        entity = await self._get_entity(record.id)
        if entity is None:
            raise EntityNotFoundError("Journal record", record.id)
        await self.db.delete(entity)
        await self._flush("delete journal record")

    async def _get_entity(self, record_id: int) -> JournalRecord | None:
        result = await self._execute(
            select(JournalRecord).where(JournalRecord.id == record_id),
            "get journal record",
        )
        return result.scalar_one_or_none()
