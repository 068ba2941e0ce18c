"""Journal record service: upsert by (lecture, student) and threshold notifications."""

import logging
from collections.abc import Awaitable
from typing import TypeVar

from academic_journal.core.config import Settings, get_settings
from academic_journal.core.exceptions import (
    DataError,
    EntityNotFoundError,
    ReferenceNotFoundError,
    UnexpectedDataError,
)
from academic_journal.schemas.course import CourseSchema, LectureSchema
from academic_journal.schemas.journal import (
    JournalRecordCreate,
    JournalRecordFilter,
    JournalRecordSchema,
)
from academic_journal.schemas.student import StudentSchema
from academic_journal.services.protocols import (
    CourseLookup,
    JournalRecordStore,
    LectureLookup,
    LecturerLookup,
    MessageSenderFactory,
    StudentLookup,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def lookup(awaitable: Awaitable[T], action: str) -> T:
    """Await a collaborator lookup, reporting store faults as UnexpectedDataError."""
    try:
        return await awaitable
    except DataError as e:
        logger.error(f"Unable to {action}", exc_info=True)
        raise UnexpectedDataError(f"Unable to {action}") from e


def format_average(value: float) -> str:
    """Render an average without a trailing '.0' for whole numbers."""
    return str(int(value)) if value.is_integer() else str(value)


class JournalService:
    """Journal record management service."""

    def __init__(
        self,
        records: JournalRecordStore,
        lectures: LectureLookup,
        students: StudentLookup,
        courses: CourseLookup,
        lecturers: LecturerLookup,
        senders: MessageSenderFactory,
        settings: Settings | None = None,
    ):
        self.records = records
        self.lectures = lectures
        self.students = students
        self.courses = courses
        self.lecturers = lecturers
        self.senders = senders
        self.settings = settings or get_settings()

    async def save_record(self, request: JournalRecordCreate) -> int:
        """Create or overwrite the record of a student at a lecture.

        Returns the id of the stored record. After saving, the student's
        records in the lecture's course are reloaded and used to decide
        whether the absence and low-average notifications fire.
        """
        lecture = await lookup(self.lectures.get_lecture(request.lecture_id), "get lecture")
        if lecture is None:
            raise ReferenceNotFoundError("lecture", "Lecture with specified id does not exist.")
        student = await lookup(self.students.get_student(request.student_id), "get student")
        if student is None:
            raise ReferenceNotFoundError("student", "Student with specified id does not exist.")

        logger.info(
            "Saving journal record",
            extra={"lecture_id": request.lecture_id, "student_id": request.student_id},
        )
        existing = await self._get_filtered(
            JournalRecordFilter(lecture_id=request.lecture_id, student_id=request.student_id)
        )
        record_id = existing[0].id if existing else 0

        record = JournalRecordSchema.from_request(record_id, request)
        try:
            record_id = await self.records.save(record)
        except DataError as e:
            logger.error("Unable to save journal record", exc_info=True)
            raise UnexpectedDataError("Unable to save journal record") from e
        except EntityNotFoundError as e:
            # The record was found a moment ago, so only a concurrent delete gets here
            logger.error("Unexpected behavior. Unable to save journal record", exc_info=True)
            raise UnexpectedDataError("Unexpected behavior. Unable to save journal record") from e

        course_records = await self.get_records(
            student_id=request.student_id,
            course_id=lecture.course_id,
        )
        # Failures below surface after the write, so a session-scoped caller rolls it back
        await self._notify_absences(request, lecture, student, course_records)
        await self._notify_low_average(request, lecture, course_records)

        return record_id

    async def get_records(
        self,
        lecture_id: int = 0,
        student_id: int = 0,
        course_id: int = 0,
    ) -> list[JournalRecordSchema]:
        """Get records filtered by lecture, student and course.

        Zero means "no filter". The course filter is ignored when a lecture
        is given.
        """
        filters = JournalRecordFilter(
            lecture_id=lecture_id or None,
            student_id=student_id or None,
            course_id=course_id if not lecture_id and course_id else None,
        )
        return await self._get_filtered(filters)

    async def _get_filtered(self, filters: JournalRecordFilter) -> list[JournalRecordSchema]:
        try:
            return await self.records.get_filtered(filters)
        except DataError as e:
            logger.error("Unable to get journal records", exc_info=True)
            raise UnexpectedDataError("Unable to get journal records") from e

    async def _get_course(self, course_id: int) -> CourseSchema:
        course = await lookup(self.courses.get_course(course_id), "get course")
        if course is None:
            raise UnexpectedDataError(
                f"Unexpected behavior. Course with id {course_id} does not exist"
            )
        return course

    async def _notify_absences(
        self,
        request: JournalRecordCreate,
        lecture: LectureSchema,
        student: StudentSchema,
        course_records: list[JournalRecordSchema],
    ) -> None:
        missed = sum(1 for r in course_records if not r.attendance)
        if request.attendance or missed <= self.settings.ABSENCE_NOTIFICATION_THRESHOLD:
            return

        course = await self._get_course(lecture.course_id)
        lecturer = await lookup(
            self.lecturers.get_lecturer(course.lecturer_id),
            "get lecturer",
        )
        if lecturer is None:
            raise UnexpectedDataError(
                f"Unexpected behavior. Lecturer with id {course.lecturer_id} does not exist"
            )

        email_sender = self.senders.get_email_sender()
        await email_sender.send(
            f"Student {student.full_name} missed {missed} lectures in course '{course.name}'!",
            lecturer.email,
        )
        await email_sender.send(
            f"You missed {missed} lectures in course '{course.name}'!",
            student.email,
        )

    async def _notify_low_average(
        self,
        request: JournalRecordCreate,
        lecture: LectureSchema,
        course_records: list[JournalRecordSchema],
    ) -> None:
        if not course_records:
            return
        average = sum(r.score for r in course_records) / len(course_records)
        threshold = self.settings.LOW_AVERAGE_THRESHOLD
        if request.score >= threshold or average >= threshold:
            return

        course = await self._get_course(lecture.course_id)
        sms_sender = self.senders.get_sms_sender()
        await sms_sender.send(
            f"Your average mark in course '{course.name}' is {format_average(average)}.",
            self.settings.SMS_OPERATOR_NUMBER,
        )
