"""Report service: builds attendance/progress reports and renders them."""

import logging
from collections.abc import Sequence

from academic_journal.core.exceptions import (
    IncorrectIdError,
    ReferenceNotFoundError,
    UnexpectedDataError,
)
from academic_journal.schemas.course import CourseSchema, LectureSchema
from academic_journal.schemas.report import ReportData, ReportHeader, ReportRecord
from academic_journal.schemas.student import StudentSchema
from academic_journal.services.formatters import FormatterRegistry
from academic_journal.services.journal import JournalService, lookup
from academic_journal.services.protocols import CourseLookup, LectureLookup, StudentLookup

logger = logging.getLogger(__name__)


def attendance_percentage(records: Sequence[ReportRecord]) -> float | None:
    """Share of attended records in percent, or None for no records."""
    if not records:
        return None
    return sum(1 for r in records if r.attendance) / len(records) * 100


def average_score(records: Sequence[ReportRecord]) -> float | None:
    """Mean score of the records, or None for no records."""
    if not records:
        return None
    return sum(r.score for r in records) / len(records)


class ReportService:
    """Attendance and progress reports."""

    def __init__(
        self,
        journal: JournalService,
        lectures: LectureLookup,
        students: StudentLookup,
        courses: CourseLookup,
        formatters: FormatterRegistry,
    ):
        self.journal = journal
        self.lectures = lectures
        self.students = students
        self.courses = courses
        self.formatters = formatters

    async def build_by_lecture(self, lecture: LectureSchema) -> ReportData:
        """Report of every student's record at one lecture.

        Average score is never computed here since the records belong
        to different students.
        """
        course = await lookup(self.courses.get_course(lecture.course_id), "get course")
        if course is None:
            raise UnexpectedDataError(
                f"Unexpected behavior. Course with id {lecture.course_id} does not exist"
            )

        journal_records = await self.journal.get_records(lecture_id=lecture.id)
        student_ids = sorted({r.student_id for r in journal_records})
        students = {
            s.id: s
            for s in await lookup(self.students.get_students_by_ids(student_ids), "get students")
        }

        report_records = []
        for record in journal_records:
            student = students.get(record.student_id)
            if student is None:
                raise UnexpectedDataError(
                    f"Unexpected behavior. Student with id {record.student_id} does not exist"
                )
            report_records.append(
                ReportRecord(
                    student=student.full_name,
                    lecture=None,
                    attendance=record.attendance,
                    score=record.score,
                )
            )

        return ReportData(
            header=ReportHeader(lecture=lecture.name, student=None, course=course.name),
            records=report_records,
            average_score=None,
            attendance_percentage=attendance_percentage(report_records),
        )

    async def build_by_student(self, student: StudentSchema, course: CourseSchema) -> ReportData:
        """Report of one student's records across the lectures of a course."""
        lectures = {
            lecture.id: lecture
            for lecture in await lookup(
                self.lectures.get_lectures_by_course(course.id), "get course lectures"
            )
        }
        journal_records = await self.journal.get_records(student_id=student.id, course_id=course.id)

        report_records = []
        for record in journal_records:
            lecture = lectures.get(record.lecture_id)
            if lecture is None:
                raise UnexpectedDataError(
                    f"Unexpected behavior. Lecture with id {record.lecture_id} "
                    f"does not belong to course {course.id}"
                )
            report_records.append(
                ReportRecord(
                    student=None,
                    lecture=lecture.name,
                    attendance=record.attendance,
                    score=record.score,
                )
            )

        return ReportData(
            header=ReportHeader(lecture=None, student=student.full_name, course=course.name),
            records=report_records,
            average_score=average_score(report_records),
            attendance_percentage=attendance_percentage(report_records),
        )

    async def render_by_lecture(self, lecture_id: int, format_name: str) -> str:
        """Build the lecture report and render it with the named formatter."""
        if lecture_id <= 0:
            raise IncorrectIdError("lecture_id", lecture_id)

        lecture = await lookup(self.lectures.get_lecture(lecture_id), "get lecture")
        if lecture is None:
            raise ReferenceNotFoundError("lecture", f"Lecture with id {lecture_id} does not exist.")

        formatter = self.formatters.get(format_name)
        report = await self.build_by_lecture(lecture)
        logger.info(
            "Rendering lecture report",
            extra={"lecture_id": lecture_id, "format": format_name},
        )
        return formatter.format_report(report)

    async def render_by_student(self, student_id: int, course_id: int, format_name: str) -> str:
        """Build the student report for a course and render it."""
        if student_id <= 0:
            raise IncorrectIdError("student_id", student_id)
        if course_id <= 0:
            raise IncorrectIdError("course_id", course_id)

        student = await lookup(self.students.get_student(student_id), "get student")
        if student is None:
            raise ReferenceNotFoundError("student", f"Student with id {student_id} does not exist.")
        course = await lookup(self.courses.get_course(course_id), "get course")
        if course is None:
            raise ReferenceNotFoundError("course", f"Course with id {course_id} does not exist.")

        formatter = self.formatters.get(format_name)
        report = await self.build_by_student(student, course)
        logger.info(
            "Rendering student report",
            extra={"student_id": student_id, "course_id": course_id, "format": format_name},
        )
        return formatter.format_report(report)
