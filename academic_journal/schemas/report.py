"""Report schemas."""

import math
import re

from pydantic import ConfigDict, field_validator
from pydantic.alias_generators import to_pascal

from academic_journal.schemas.common import BaseSchema

FLOAT_TOLERANCE = 1e-6

# Characters outside the XML 1.0 Char production
XML_ILLEGAL_CHARS = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def _close(left: float | None, right: float | None) -> bool:
    if left is None or right is None:
        return left is None and right is None
    return math.isclose(left, right, rel_tol=0.0, abs_tol=FLOAT_TOLERANCE)


class ReportSchema(BaseSchema):
    """Base for report parts, serialized with PascalCase names."""

    model_config = ConfigDict(alias_generator=to_pascal)

    @field_validator("*")
    @classmethod
    def reject_control_characters(cls, value):
        if isinstance(value, str) and XML_ILLEGAL_CHARS.search(value):
            raise ValueError("Text contains characters that cannot be written to a report")
        return value


class ReportHeader(ReportSchema):
    """Report header. Only one of lecture and student is set."""

    lecture: str | None = None
    student: str | None = None
    course: str


class ReportRecord(ReportSchema):
    """One journal entry as shown in a report."""

    student: str | None = None
    lecture: str | None = None
    attendance: bool
    score: int


class ReportData(ReportSchema):
    """Attendance and progress report.

    Equality compares average_score and attendance_percentage
    with an absolute tolerance of 1e-6.
    """

    header: ReportHeader
    records: list[ReportRecord] = []
    average_score: float | None = None
    attendance_percentage: float | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReportData):
            return NotImplemented
        return (
            self.header == other.header
            and self.records == other.records
            and _close(self.average_score, other.average_score)
            and _close(self.attendance_percentage, other.attendance_percentage)
        )
