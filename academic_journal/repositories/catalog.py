"""Read-only lookups for lectures, students, courses and lecturers."""

from collections.abc import Sequence

from sqlalchemy import select

from academic_journal.models.course import Course, Lecture, Lecturer
from academic_journal.models.student import Student
from academic_journal.repositories.base import BaseRepository
from academic_journal.schemas.course import CourseSchema, LectureSchema, LecturerSchema
from academic_journal.schemas.student import StudentSchema


class LectureRepository(BaseRepository):
    async def get_lecture(self, lecture_id: int) -> LectureSchema | None:
        result = await self._execute(
            select(Lecture).where(Lecture.id == lecture_id),
            "get lecture",
        )
        lecture = result.scalar_one_or_none()
        return LectureSchema.model_validate(lecture) if lecture else None

    async def get_lectures_by_course(self, course_id: int) -> list[LectureSchema]:
        """Get all lectures of a course ordered by id."""
        result = await self._execute(
            select(Lecture).where(Lecture.course_id == course_id).order_by(Lecture.id),
            "get course lectures",
        )
        return [LectureSchema.model_validate(lecture) for lecture in result.scalars().all()]


class StudentRepository(BaseRepository):
    async def get_student(self, student_id: int) -> StudentSchema | None:
        result = await self._execute(
            select(Student).where(Student.id == student_id),
            "get student",
        )
        student = result.scalar_one_or_none()
        return StudentSchema.model_validate(student) if student else None

    async def get_students_by_ids(self, student_ids: Sequence[int]) -> list[StudentSchema]:
        """Batch lookup; unknown ids are skipped."""
        if not student_ids:
            return []
        result = await self._execute(
            select(Student).where(Student.id.in_(student_ids)).order_by(Student.id),
            "get students",
        )
        return [StudentSchema.model_validate(student) for student in result.scalars().all()]


class CourseRepository(BaseRepository):
    async def get_course(self, course_id: int) -> CourseSchema | None:
        result = await self._execute(
            select(Course).where(Course.id == course_id),
            "get course",
        )
        course = result.scalar_one_or_none()
        return CourseSchema.model_validate(course) if course else None


class LecturerRepository(BaseRepository):
    async def get_lecturer(self, lecturer_id: int) -> LecturerSchema | None:
        result = await self._execute(
            select(Lecturer).where(Lecturer.id == lecturer_id),
            "get lecturer",
        )
        lecturer = result.scalar_one_or_none()
        return LecturerSchema.model_validate(lecturer) if lecturer else None
