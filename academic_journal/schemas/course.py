"""Course, lecture and lecturer schemas."""

from academic_journal.schemas.common import BaseSchema


class LecturerSchema(BaseSchema):
    """Lecturer read schema."""

    id: int
    full_name: str
    email: str


class CourseSchema(BaseSchema):
    """Course read schema."""

    id: int
    name: str
    lecturer_id: int


class LectureSchema(BaseSchema):
    """Lecture read schema."""

    id: int
    name: str
    course_id: int
