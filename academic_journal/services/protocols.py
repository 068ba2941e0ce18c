"""Collaborator capabilities consumed by the journal services."""

from collections.abc import Sequence
from typing import Protocol

from academic_journal.schemas.course import CourseSchema, LectureSchema, LecturerSchema
from academic_journal.schemas.journal import JournalRecordFilter, JournalRecordSchema
from academic_journal.schemas.student import StudentSchema


class JournalRecordStore(Protocol):
    """Persistence of journal records.

    Every operation may raise DataError on a storage fault.
    """

    async def get_filtered(self, filters: JournalRecordFilter) -> list[JournalRecordSchema]:
        """Records matching all set filter fields, in ascending id order."""
        ...

    async def save(self, record: JournalRecordSchema) -> int:
        """Insert when id is 0, update otherwise. Returns the record id.

        Raises EntityNotFoundError when the update target is gone and
        IncorrectIdentifierError when the id is negative.
        """
        ...

    async def get_by_id(self, record_id: int) -> JournalRecordSchema | None: ...

    async def delete(self, record: JournalRecordSchema) -> None: ...


class LectureLookup(Protocol):
    async def get_lecture(self, lecture_id: int) -> LectureSchema | None: ...

    async def get_lectures_by_course(self, course_id: int) -> list[LectureSchema]: ...


class StudentLookup(Protocol):
    async def get_student(self, student_id: int) -> StudentSchema | None: ...

    async def get_students_by_ids(self, student_ids: Sequence[int]) -> list[StudentSchema]: ...


class CourseLookup(Protocol):
    async def get_course(self, course_id: int) -> CourseSchema | None: ...


class LecturerLookup(Protocol):
    async def get_lecturer(self, lecturer_id: int) -> LecturerSchema | None: ...


class MessageSender(Protocol):
    """Fire-and-forget message delivery. Never raises."""

    async def send(self, message: str, address: str | None) -> None: ...


class MessageSenderFactory(Protocol):
    def get_email_sender(self) -> MessageSender: ...

    def get_sms_sender(self) -> MessageSender: ...
