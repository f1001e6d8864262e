# /app/models/student_model.py

# --- Core Imports ---
import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Core Enumerations ---

class Level(str, Enum):
    BEGINNER = "beginner"
    DEVELOPING = "developing"
    PROFICIENT = "proficient"


# --- Model Definitions ---

class AssessmentSnapshot(BaseModel):
    """One dated reading/writing result, frozen once appended to a student."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    date: datetime.date
    readingScore: int = Field(..., ge=0, le=100)
    writingScore: int = Field(..., ge=0, le=100)
    level: Level


class StudentBase(BaseModel):
    """
    The base model for a Student. Contains fields common to create and read operations.
    """
    name: str = Field(..., min_length=1, description="The full name of the student.")


class StudentCreate(StudentBase):
    """
    The model used for creating a new student.

    `classId` is optional at the schema level so that a missing class
    selection is reported by the service with a clear message instead of a
    generic schema error.
    """
    classId: Optional[str] = Field(default=None, description="The class the student is added to.")
    readingScore: int = Field(default=0, ge=0, le=100)
    writingScore: int = Field(default=0, ge=0, le=100)


class StudentUpdate(BaseModel):
    """
    Patch model for a student. Every field is optional; only the fields that
    are set (and not null) are merged onto the stored document.

    Scores must be sent together, since they are recorded as one assessment.
    """
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = Field(default=None, min_length=1)
    readingScore: Optional[int] = Field(default=None, ge=0, le=100)
    writingScore: Optional[int] = Field(default=None, ge=0, le=100)


class Student(StudentBase):
    """
    The full representation of a Student resource, as it is stored and
    returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, server-generated identifier for the student.")
    classId: str = Field(..., description="The ID of the class this student belongs to.")
    className: Optional[str] = Field(default=None, description="Denormalized name of the class.")
    currentLevel: Level = Level.BEGINNER
    readingScore: int = 0
    writingScore: int = 0
    lastAssessment: Optional[datetime.date] = None
    assessmentHistory: List[AssessmentSnapshot] = Field(default_factory=list)


class StudentProgressPoint(BaseModel):
    """A single month of one student's results, for the progress chart."""
    month: str
    readingScore: int
    writingScore: int
    level: Level


class StudentDetails(BaseModel):
    """A student together with the month-by-month view of their results."""
    student: Student
    progress: List[StudentProgressPoint]
