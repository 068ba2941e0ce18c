"""Journal record model."""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, SmallInteger, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academic_journal.core.database import Base
from academic_journal.models.base import BigIntegerKey, IDMixin


class JournalRecord(Base, IDMixin):
    """Attendance and score of one student at one lecture."""

    __tablename__ = "journal_records"

    lecture_id: Mapped[int] = mapped_column(
        BigIntegerKey,
        ForeignKey("lectures.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id: Mapped[int] = mapped_column(
        BigIntegerKey,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attendance: Mapped[bool] = mapped_column(Boolean, nullable=False)
    score: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)

    # Relationships
    lecture: Mapped["Lecture"] = relationship("Lecture")
    student: Mapped["Student"] = relationship(
        "Student",
        back_populates="journal_records",
    )

    __table_args__ = (
        UniqueConstraint("lecture_id", "student_id", name="uq_journal_lecture_student"),
        CheckConstraint("score >= 0 AND score <= 5", name="ck_journal_score_range"),
        CheckConstraint("attendance OR score = 0", name="ck_journal_absent_zero_score"),
    )

    def __repr__(self) -> str:
        return (
            f"<JournalRecord(id={self.id}, lecture_id={self.lecture_id}, "
            f"student_id={self.student_id})>"
        )
