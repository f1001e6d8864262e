# /app/models/class_model.py

# --- Core Imports ---
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .dashboard_model import ClassStatistics, ProgressPoint
from .student_model import Student

DEFAULT_SUBJECT = "General"

# --- Model Definitions ---

class ClassCreate(BaseModel):
    """
    The model used for creating a new class.

    When `name` is omitted it is derived from the grade and section, e.g.
    grade "5" and section "A" give "Grade 5A".
    """
    grade: str = Field(..., min_length=1, description="The grade label, e.g. '5'.")
    section: str = Field(default="", description="Optional section letter, e.g. 'A'.")
    name: Optional[str] = Field(default=None, min_length=1)
    subject: str = Field(default=DEFAULT_SUBJECT, min_length=1)

    @model_validator(mode="after")
    def derive_name(self):
        if not self.name:
            self.name = f"Grade {self.grade}{self.section}"
        return self


class ClassUpdate(BaseModel):
    """
    Patch model for a class. Every field is optional; only the fields that are
    set (and not null) are merged onto the stored document.
    """
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = Field(default=None, min_length=1)
    grade: Optional[str] = Field(default=None, min_length=1)
    subject: Optional[str] = Field(default=None, min_length=1)


class Class(BaseModel):
    """
    The full representation of a Class resource, as it is stored and returned
    by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    teacherId: str
    teacherName: Optional[str] = None
    grade: str
    subject: str = DEFAULT_SUBJECT
    createdAt: datetime
    studentCount: int = Field(default=0, ge=0)


class LevelDistribution(BaseModel):
    beginner: int = 0
    developing: int = 0
    proficient: int = 0


class ClassSummary(Class):
    """A class as listed on the teacher's class overview, with its level mix."""
    levels: LevelDistribution = Field(default_factory=LevelDistribution)


class ClassDetails(BaseModel):
    """
    Everything the class details page needs in one payload: the class, its
    students, the class statistics and both progress series.
    """
    classInfo: Class
    students: List[Student]
    statistics: ClassStatistics
    progress: List[ProgressPoint]
    yearProgress: List[ProgressPoint]

