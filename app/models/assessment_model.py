# /app/models/assessment_model.py

from pydantic import BaseModel, Field


class AssessmentCreate(BaseModel):
    """The payload for recording one reading/writing assessment of a student."""
    studentId: str = Field(..., min_length=1)
    readingScore: int = Field(..., ge=0, le=100, description="Reading score, 0-100.")
    writingScore: int = Field(..., ge=0, le=100, description="Writing score, 0-100.")
