"""Journal record schemas."""

from pydantic import Field, model_validator

from academic_journal.schemas.common import BaseSchema

MIN_SCORE = 0
MAX_SCORE = 5


class JournalRecordCreate(BaseSchema):
    """Journal record save request."""

    lecture_id: int = Field(..., gt=0, description="Lecture database ID")
    student_id: int = Field(..., gt=0, description="Student database ID")
    attendance: bool
    score: int = Field(0, ge=MIN_SCORE, le=MAX_SCORE)

    @model_validator(mode="after")
    def check_absent_score(self) -> "JournalRecordCreate":
        if not self.attendance and self.score != 0:
            raise ValueError("Absent student must have zero score")
        return self


class JournalRecordSchema(BaseSchema):
    """Stored journal record. An id of 0 means not yet saved."""

    id: int = 0
    lecture_id: int
    student_id: int
    attendance: bool
    score: int = Field(0, ge=MIN_SCORE, le=MAX_SCORE)

    @classmethod
    def from_request(cls, record_id: int, request: JournalRecordCreate) -> "JournalRecordSchema":
        """Build the persisted form of a request under the given id."""
        return cls(
            id=record_id,
            lecture_id=request.lecture_id,
            student_id=request.student_id,
            attendance=request.attendance,
            score=request.score,
        )


class JournalRecordFilter(BaseSchema):
    """Journal record filtering options. Set fields are combined with AND."""

    lecture_id: int | None = None
    student_id: int | None = None
    course_id: int | None = None  # Matches the record's lecture course
