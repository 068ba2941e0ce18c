"""Student schemas."""

from academic_journal.schemas.common import BaseSchema


class StudentSchema(BaseSchema):
    """Student read schema."""

    id: int
    full_name: str
    email: str | None = None
