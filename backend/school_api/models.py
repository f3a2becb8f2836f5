"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Each class maps to a table and uses relationships where appropriate.

Fields that a client must supply on create are declared `Optional` in
Python but `nullable=False` in the schema: the handlers never validate
payloads themselves, so a missing field reaches the database and is
rejected there as a NOT NULL violation.
"""

from typing import Optional
from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import List


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CourseStudent(SQLModel, table=True):
    """Link table for the Course <-> Student many-to-many association."""
    course_id: Optional[int] = Field(default=None, foreign_key='course.id', primary_key=True, ondelete='CASCADE')
    student_id: Optional[int] = Field(default=None, foreign_key='student.id', primary_key=True, ondelete='CASCADE')


class Teacher(SQLModel, table=True):
    """A teacher; owns zero or more courses."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None, nullable=False)
    department: Optional[str] = Field(default=None, nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)
    courses: List['Course'] = Relationship(back_populates='teacher')


class Course(SQLModel, table=True):
    """A course taught by exactly one `Teacher`.

    Fields:
    - `teacher_id`: foreign key to `teacher.id`, exposed as `TeacherId`
    - `students`: enrolled students through `CourseStudent`
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    title: Optional[str] = Field(default=None, nullable=False)
    description: Optional[str] = Field(default=None, nullable=False)
    teacher_id: Optional[int] = Field(default=None, foreign_key='teacher.id', nullable=False, index=True)
    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)
    teacher: Optional[Teacher] = Relationship(back_populates='courses')
    students: List['Student'] = Relationship(back_populates='courses', link_model=CourseStudent)


class Student(SQLModel, table=True):
    """A student enrolled in zero or more courses."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None, nullable=False)
    email: Optional[str] = Field(default=None, nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)
    courses: List[Course] = Relationship(back_populates='students', link_model=CourseStudent)
