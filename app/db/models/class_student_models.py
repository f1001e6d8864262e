# /app/db/models/class_student_models.py

"""
This module defines the SQLAlchemy ORM models for the `Class` and `Student`
entities: a teacher's class and the students assessed within it.

Both tables behave as document collections keyed by an opaque string id.
There is no foreign key from `students.classId` to `classes.id`;
the class -> students cascade is performed by the service layer as explicit
point deletes, so a student may briefly reference a class that is gone.
"""

from sqlalchemy import Column, String, Integer, Date, DateTime, JSON

from ..base_class import Base


class Class(Base):
    """
    SQLAlchemy model representing a teacher-owned class.

    `studentCount` is a cached counter maintained by the add/delete student
    operations, not a computed column.
    """
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    teacherId = Column(String, index=True, nullable=False)
    teacherName = Column(String, nullable=True)
    grade = Column(String, nullable=False)
    subject = Column(String, nullable=False, default="General")
    createdAt = Column(DateTime(timezone=True), nullable=False)
    studentCount = Column(Integer, nullable=False, default=0)


class Student(Base):
    """
    SQLAlchemy model representing a single student.

    `assessmentHistory` holds the append-only list of assessment snapshots as
    JSON objects ({date, readingScore, writingScore, level}) in insertion order.
    """
    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)

    classId = Column(String, index=True, nullable=False)
    className = Column(String, nullable=True)

    currentLevel = Column(String, nullable=False, default="beginner")
    readingScore = Column(Integer, nullable=False, default=0)
    writingScore = Column(Integer, nullable=False, default=0)
    lastAssessment = Column(Date, nullable=True)
    assessmentHistory = Column(JSON, nullable=False, default=list)
