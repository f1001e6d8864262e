# /app/services/leveling.py

"""
Maps a student's reading and writing scores to a proficiency level.

The two scores are averaged; an average of 80 or more is proficient, 60 up to
(but not including) 80 is developing, anything lower is beginner. Both
boundaries belong to the higher level.
"""

from ..core.exceptions import ValidationError
from ..models.student_model import Level

MIN_SCORE = 0
MAX_SCORE = 100

PROFICIENT_THRESHOLD = 80
DEVELOPING_THRESHOLD = 60


def classify(reading_score: float, writing_score: float) -> Level:
    average = (reading_score + writing_score) / 2
    if average >= PROFICIENT_THRESHOLD:
        return Level.PROFICIENT
    if average >= DEVELOPING_THRESHOLD:
        return Level.DEVELOPING
    return Level.BEGINNER


def validate_score(label: str, value) -> int:
    """Rejects anything that is not a whole score between 0 and 100."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be a whole number between {MIN_SCORE} and {MAX_SCORE}.")
    if not MIN_SCORE <= value <= MAX_SCORE:
        raise ValidationError(f"{label} must be between {MIN_SCORE} and {MAX_SCORE}, got {value}.")
    return value
