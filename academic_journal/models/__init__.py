"""Database models package."""

from academic_journal.models.course import Course, Lecture, Lecturer
from academic_journal.models.journal_record import JournalRecord
from academic_journal.models.student import Student

__all__ = [
    # Course
    "Course",
    "Lecture",
    "Lecturer",
    # Student
    "Student",
    # Journal
    "JournalRecord",
]
