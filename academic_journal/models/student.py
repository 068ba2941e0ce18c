"""Student model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academic_journal.core.database import Base
from academic_journal.models.base import IDMixin


class Student(Base, IDMixin):
    """Student model for managing student records."""

    __tablename__ = "students"

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    journal_records: Mapped[list["JournalRecord"]] = relationship(
        "JournalRecord",
        back_populates="student",
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.full_name})>"
