# /app/services/dashboard_service.py

# --- Core Imports ---
import math
from datetime import datetime, timedelta
from typing import List, Optional

import pandas as pd

# Import the Pydantic models to ensure our output matches the data contract.
from ..models.dashboard_model import ClassStatistics, Statistics
from ..models.student_model import Level, Student
from ..models.user_model import User
from .class_helpers.crud import resolve_owned_class
from .database_service import DatabaseService
from .roster_cache import RosterCache

# An assessment counts as recent for this many calendar days.
RECENT_WINDOW = timedelta(days=30)

_COLUMNS = ["level", "readingScore", "writingScore", "lastAssessment"]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _students_frame(students: List[Student]) -> pd.DataFrame:
    rows = [
        {
            "level": s.currentLevel.value,
            "readingScore": s.readingScore,
            "writingScore": s.writingScore,
            "lastAssessment": s.lastAssessment,
        }
        for s in students
    ]
    return pd.DataFrame(rows, columns=_COLUMNS)


# --- Pure Aggregations ---

def calculate_statistics(students: List[Student], now: Optional[datetime] = None) -> Statistics:
    """
    Counts students per level and how many were assessed recently.

    `needSupportCount` is, for now, the number of beginners; there is no
    separate at-risk signal. A student counts towards `recentAssessments` when
    their last assessment date is no earlier than 30 days before `now`;
    students never assessed are not counted.
    """
    if not students:
        return Statistics()

    now = now or datetime.now()
    df = _students_frame(students)

    level_counts = df["level"].value_counts()
    beginner = int(level_counts.get(Level.BEGINNER.value, 0))
    developing = int(level_counts.get(Level.DEVELOPING.value, 0))
    proficient = int(level_counts.get(Level.PROFICIENT.value, 0))

    last_assessed = pd.to_datetime(df["lastAssessment"])
    recent = int((last_assessed >= pd.Timestamp(now - RECENT_WINDOW)).sum())

    return Statistics(
        total=len(df),
        beginnerCount=beginner,
        developingCount=developing,
        proficientCount=proficient,
        needSupportCount=beginner,
        recentAssessments=recent,
    )


def calculate_class_statistics(students: List[Student], now: Optional[datetime] = None) -> ClassStatistics:
    """Level statistics plus the mean reading and writing score, rounded half up."""
    if not students:
        return ClassStatistics()

    base = calculate_statistics(students, now=now)
    df = _students_frame(students)
    return ClassStatistics(
        **base.model_dump(),
        averageReadingScore=_round_half_up(float(df["readingScore"].mean())),
        averageWritingScore=_round_half_up(float(df["writingScore"].mean())),
    )


# --- Core Public Functions ---

def get_summary_data(
    user: User,
    roster: RosterCache,
    db: DatabaseService,
    class_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Statistics:
    """
    Statistics across all of the teacher's students, or one of their classes
    when `class_id` is given.
    """
    if class_id:
        resolve_owned_class(class_id, user, roster, db)
        students = roster.students_for_class(class_id)
    else:
        students = roster.students_for_teacher(user.id)
    return calculate_statistics(students, now=now)


def get_class_statistics(
    class_id: str,
    user: User,
    roster: RosterCache,
    db: DatabaseService,
    now: Optional[datetime] = None,
) -> ClassStatistics:
    resolve_owned_class(class_id, user, roster, db)
    return calculate_class_statistics(roster.students_for_class(class_id), now=now)
