# /app/services/assessment_service.py

"""
Records reading/writing assessments against students.

Recording an assessment classifies the scores, appends a dated snapshot to the
student's history and updates the student's current scores, level and
last-assessment date in a single merge write. Aggregate views pick the change
up from the roster on their next read.
"""

import logging
from datetime import date
from typing import Optional

from ..models.student_model import AssessmentSnapshot, Student
from ..models.assessment_model import AssessmentCreate
from ..models.user_model import User
from .class_helpers.crud import resolve_owned_student, resolve_student
from .database_service import DatabaseService
from .leveling import classify, validate_score
from .roster_cache import RosterCache

logger = logging.getLogger(__name__)


def record_assessment(
    student_id: str,
    reading_score: int,
    writing_score: int,
    db: DatabaseService,
    roster: RosterCache,
    today: Optional[date] = None,
) -> Student:
    """
    Appends an assessment to a student and returns the updated student.

    Raises:
        ValidationError: a score is outside 0..100. Nothing is written.
        NotFoundError: the student is neither cached nor in the store.
        PersistenceError: the write failed. It is not retried.
    """
    validate_score("readingScore", reading_score)
    validate_score("writingScore", writing_score)

    student = resolve_student(student_id, roster, db)

    today = today or date.today()
    level = classify(reading_score, writing_score)
    snapshot = AssessmentSnapshot(
        date=today,
        readingScore=reading_score,
        writingScore=writing_score,
        level=level,
    )
    history = [s.model_dump(mode="json") for s in student.assessmentHistory]
    history.append(snapshot.model_dump(mode="json"))

    updated = db.upsert_student(student_id, {
        "readingScore": reading_score,
        "writingScore": writing_score,
        "currentLevel": level.value,
        "lastAssessment": today,
        "assessmentHistory": history,
    })
    logger.info(
        "Recorded assessment for student %s: reading=%d writing=%d level=%s",
        student_id, reading_score, writing_score, level.value,
    )
    return Student.model_validate(updated)


def record_for_teacher(
    payload: AssessmentCreate,
    user: User,
    db: DatabaseService,
    roster: RosterCache,
    today: Optional[date] = None,
) -> Student:
    """Records an assessment, provided the student sits in one of the user's classes."""
    validate_score("readingScore", payload.readingScore)
    validate_score("writingScore", payload.writingScore)
    resolve_owned_student(payload.studentId, user, roster, db)
    return record_assessment(
        payload.studentId, payload.readingScore, payload.writingScore, db=db, roster=roster, today=today
    )
