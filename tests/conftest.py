"""In-memory collaborators for service tests."""

from collections.abc import Sequence

import pytest

from academic_journal.core.config import Settings
from academic_journal.core.exceptions import EntityNotFoundError, IncorrectIdentifierError
from academic_journal.schemas.course import CourseSchema, LectureSchema, LecturerSchema
from academic_journal.schemas.journal import JournalRecordFilter, JournalRecordSchema
from academic_journal.schemas.student import StudentSchema
from academic_journal.services.formatters import create_default_registry
from academic_journal.services.journal import JournalService
from academic_journal.services.report import ReportService


class InMemoryCatalog:
    """Lecture, student, course and lecturer lookups over dicts."""

    def __init__(self):
        self.lectures: dict[int, LectureSchema] = {}
        self.students: dict[int, StudentSchema] = {}
        self.courses: dict[int, CourseSchema] = {}
        self.lecturers: dict[int, LecturerSchema] = {}

    def add_lecturer(self, id: int, full_name: str, email: str) -> LecturerSchema:
        self.lecturers[id] = LecturerSchema(id=id, full_name=full_name, email=email)
        return self.lecturers[id]

    def add_course(self, id: int, name: str, lecturer_id: int) -> CourseSchema:
        self.courses[id] = CourseSchema(id=id, name=name, lecturer_id=lecturer_id)
        return self.courses[id]

    def add_lecture(self, id: int, name: str, course_id: int) -> LectureSchema:
        self.lectures[id] = LectureSchema(id=id, name=name, course_id=course_id)
        return self.lectures[id]

    def add_student(self, id: int, full_name: str, email: str | None = None) -> StudentSchema:
        self.students[id] = StudentSchema(id=id, full_name=full_name, email=email)
        return self.students[id]

    async def get_lecture(self, lecture_id: int) -> LectureSchema | None:
        return self.lectures.get(lecture_id)

    async def get_lectures_by_course(self, course_id: int) -> list[LectureSchema]:
        return [l for l in self.lectures.values() if l.course_id == course_id]

    async def get_student(self, student_id: int) -> StudentSchema | None:
        return self.students.get(student_id)

    async def get_students_by_ids(self, student_ids: Sequence[int]) -> list[StudentSchema]:
        return [self.students[i] for i in student_ids if i in self.students]

    async def get_course(self, course_id: int) -> CourseSchema | None:
        return self.courses.get(course_id)

    async def get_lecturer(self, lecturer_id: int) -> LecturerSchema | None:
        return self.lecturers.get(lecturer_id)


class InMemoryJournalStore:
    """Journal record store that mirrors the repository contract."""

    def __init__(self, catalog: InMemoryCatalog):
        self.catalog = catalog
        self.rows: dict[int, JournalRecordSchema] = {}
        self.next_id = 1
        self.filters: list[JournalRecordFilter] = []

    async def get_filtered(self, filters: JournalRecordFilter) -> list[JournalRecordSchema]:
        self.filters.append(filters)
        result = []
        for record in sorted(self.rows.values(), key=lambda r: r.id):
            if filters.lecture_id is not None and record.lecture_id != filters.lecture_id:
                continue
            if filters.student_id is not None and record.student_id != filters.student_id:
                continue
            if filters.course_id is not None:
                lecture = self.catalog.lectures.get(record.lecture_id)
                if lecture is None or lecture.course_id != filters.course_id:
                    continue
            result.append(record)
        return result

    async def save(self, record: JournalRecordSchema) -> int:
        if record.id < 0:
            raise IncorrectIdentifierError(record.id)
        if record.id == 0:
            record = record.model_copy(update={"id": self.next_id})
            self.next_id += 1
        elif record.id not in self.rows:
            raise EntityNotFoundError("Journal record", record.id)
        self.rows[record.id] = record
        return record.id

    async def get_by_id(self, record_id: int) -> JournalRecordSchema | None:
        return self.rows.get(record_id)

    async def delete(self, record: JournalRecordSchema) -> None:
        if record.id not in self.rows:
            raise EntityNotFoundError("Journal record", record.id)
        del self.rows[record.id]


class RecordingSender:
    def __init__(self):
        self.sent: list[tuple[str, str | None]] = []

    async def send(self, message: str, address: str | None) -> None:
        self.sent.append((message, address))


class RecordingSenderFactory:
    def __init__(self):
        self.email = RecordingSender()
        self.sms = RecordingSender()

    def get_email_sender(self) -> RecordingSender:
        return self.email

    def get_sms_sender(self) -> RecordingSender:
        return self.sms


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def catalog() -> InMemoryCatalog:
    catalog = InMemoryCatalog()
    catalog.add_lecturer(1, "Isaac Newton", "newton@example.com")
    catalog.add_course(1, "Physics", lecturer_id=1)
    for i in range(1, 7):
        catalog.add_lecture(i, f"Physics L{i}", course_id=1)
    catalog.add_course(2, "Chemistry", lecturer_id=1)
    catalog.add_lecture(10, "Chemistry L1", course_id=2)
    catalog.add_student(1, "A", "a@example.com")
    catalog.add_student(2, "B", "b@example.com")
    catalog.add_student(3, "C")
    return catalog


@pytest.fixture
def store(catalog: InMemoryCatalog) -> InMemoryJournalStore:
    return InMemoryJournalStore(catalog)


@pytest.fixture
def senders() -> RecordingSenderFactory:
    return RecordingSenderFactory()


@pytest.fixture
def journal(store, catalog, senders, settings) -> JournalService:
    return JournalService(
        records=store,
        lectures=catalog,
        students=catalog,
        courses=catalog,
        lecturers=catalog,
        senders=senders,
        settings=settings,
    )


@pytest.fixture
def reports(journal, catalog) -> ReportService:
    return ReportService(
        journal=journal,
        lectures=catalog,
        students=catalog,
        courses=catalog,
        formatters=create_default_registry(),
    )
