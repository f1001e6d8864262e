# /app/services/progress_service.py

"""
Builds the month-by-month progress series shown on the dashboard, class and
student pages.

Only assessments dated in the current calendar year are considered. Within a
month, each student is represented by one snapshot: the one appended last to
their history among that month's snapshots. Insertion order decides, not the
snapshot date, so a back-dated entry recorded later still wins its month.
"""

from datetime import date
from typing import List, Optional

import pandas as pd

from ..models.dashboard_model import ProgressPoint
from ..models.student_model import Level, Student, StudentProgressPoint
from ..models.user_model import User
from .class_helpers.crud import resolve_owned_class, resolve_owned_student
from .database_service import DatabaseService
from .roster_cache import RosterCache

# Fixed English labels so the series does not depend on the process locale.
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_COLUMNS = ["student_id", "position", "date", "readingScore", "writingScore", "level"]


def _snapshots_in_year(students: List[Student], year: int) -> pd.DataFrame:
    """One row per snapshot of the given year, with its position in the student's history."""
    rows = [
        {
            "student_id": student.id,
            "position": position,
            "date": snapshot.date,
            "readingScore": snapshot.readingScore,
            "writingScore": snapshot.writingScore,
            "level": snapshot.level.value,
        }
        for student in students
        for position, snapshot in enumerate(student.assessmentHistory)
        if snapshot.date.year == year
    ]
    df = pd.DataFrame(rows, columns=_COLUMNS)
    df["month"] = pd.to_datetime(df["date"]).dt.month
    return df


def _latest_per_student(month_rows: pd.DataFrame) -> pd.DataFrame:
    """The last-appended snapshot of each student within one month's rows."""
    ordered = month_rows.sort_values(["student_id", "position"], kind="stable")
    return ordered.groupby("student_id", sort=False).tail(1)


def build_progress_by_month(
    students: List[Student],
    include_all_months: bool = False,
    today: Optional[date] = None,
) -> List[ProgressPoint]:
    """
    Level counts per month of the current year.

    Months without any assessment are only included when `include_all_months`
    is set, in which case all twelve months appear. With no months at all the
    result is empty rather than a run of zero entries.
    """
    today = today or date.today()
    df = _snapshots_in_year(students, today.year)

    months = set(int(m) for m in df["month"].unique())
    if include_all_months:
        months.update(range(1, 13))
    if not months:
        return []

    series = []
    for month in sorted(months):
        latest = _latest_per_student(df[df["month"] == month])
        counts = latest["level"].value_counts()
        series.append(ProgressPoint(
            month=MONTH_LABELS[month - 1],
            beginnerCount=int(counts.get(Level.BEGINNER.value, 0)),
            developingCount=int(counts.get(Level.DEVELOPING.value, 0)),
            proficientCount=int(counts.get(Level.PROFICIENT.value, 0)),
        ))
    return series


def build_student_progress(student: Student, today: Optional[date] = None) -> List[StudentProgressPoint]:
    """Scores and level per month of the current year, for months with an assessment."""
    today = today or date.today()
    df = _snapshots_in_year([student], today.year)

    series = []
    for month in sorted(int(m) for m in df["month"].unique()):
        latest = _latest_per_student(df[df["month"] == month]).iloc[0]
        series.append(StudentProgressPoint(
            month=MONTH_LABELS[month - 1],
            readingScore=int(latest["readingScore"]),
            writingScore=int(latest["writingScore"]),
            level=Level(latest["level"]),
        ))
    return series


# --- Core Public Functions ---

def get_progress(
    user: User,
    roster: RosterCache,
    db: DatabaseService,
    class_id: Optional[str] = None,
    include_all_months: bool = False,
    today: Optional[date] = None,
) -> List[ProgressPoint]:
    if class_id:
        resolve_owned_class(class_id, user, roster, db)
        students = roster.students_for_class(class_id)
    else:
        students = roster.students_for_teacher(user.id)
    return build_progress_by_month(students, include_all_months=include_all_months, today=today)


def get_student_progress(
    student_id: str,
    user: User,
    roster: RosterCache,
    db: DatabaseService,
    today: Optional[date] = None,
) -> List[StudentProgressPoint]:
    student = resolve_owned_student(student_id, user, roster, db)
    return build_student_progress(student, today=today)
