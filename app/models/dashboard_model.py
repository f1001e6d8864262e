# /app/models/dashboard_model.py

# --- Core Imports ---
# Import the necessary components from Pydantic for data modeling.
from pydantic import BaseModel, Field

# --- Model Definitions ---

class Statistics(BaseModel):
    """
    Defines the data contract for the level statistics of a set of students.
    This is what feeds the dashboard's summary cards, either across all of the
    teacher's students or for a single class.
    """

    total: int = Field(
        default=0,
        description="Number of students in the population.",
        examples=[32]
    )
    beginnerCount: int = Field(default=0, examples=[7])
    developingCount: int = Field(default=0, examples=[15])
    proficientCount: int = Field(default=0, examples=[10])
    needSupportCount: int = Field(
        default=0,
        description="Students flagged as needing support. Currently every beginner.",
        examples=[7]
    )
    recentAssessments: int = Field(
        default=0,
        description="Students assessed within the trailing 30 days.",
        examples=[12]
    )


class ClassStatistics(Statistics):
    """Statistics for one class, plus its rounded mean scores."""

    averageReadingScore: int = Field(default=0, examples=[71])
    averageWritingScore: int = Field(default=0, examples=[68])


class ProgressPoint(BaseModel):
    """The level counts of one calendar month, for the progress chart."""

    month: str = Field(..., description="Short English month name, e.g. 'Mar'.")
    beginnerCount: int = 0
    developingCount: int = 0
    proficientCount: int = 0
