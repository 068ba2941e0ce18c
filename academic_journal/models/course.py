"""Course, lecture and lecturer models."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academic_journal.core.database import Base
from academic_journal.models.base import BigIntegerKey, IDMixin


class Lecturer(Base, IDMixin):
    """Lecturer who runs one or more courses."""

    __tablename__ = "lecturers"

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    courses: Mapped[list["Course"]] = relationship(
        "Course",
        back_populates="lecturer",
    )

    def __repr__(self) -> str:
        return f"<Lecturer(id={self.id}, name={self.full_name})>"


class Course(Base, IDMixin):
    """Course model."""

    __tablename__ = "courses"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    lecturer_id: Mapped[int] = mapped_column(
        BigIntegerKey,
        ForeignKey("lecturers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    lecturer: Mapped["Lecturer"] = relationship(
        "Lecturer",
        back_populates="courses",
    )
    lectures: Mapped[list["Lecture"]] = relationship(
        "Lecture",
        back_populates="course",
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, name={self.name})>"


class Lecture(Base, IDMixin):
    """Single lecture of a course."""

    __tablename__ = "lectures"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    course_id: Mapped[int] = mapped_column(
        BigIntegerKey,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    course: Mapped["Course"] = relationship(
        "Course",
        back_populates="lectures",
    )

    def __repr__(self) -> str:
        return f"<Lecture(id={self.id}, name={self.name}, course_id={self.course_id})>"
