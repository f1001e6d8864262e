# /app/services/class_service.py

"""
This service module acts as the primary business logic layer for all operations
related to classes and students.

It serves as a facade, orchestrating calls to the lower-level `crud` helper,
the assessment recorder and the aggregation services. Every function takes the
authenticated `User` and scopes what it reads or mutates to the classes that
user owns, plus the students inside them.
"""

from datetime import date, datetime
from typing import List, Optional

import pandas as pd

from ..core.exceptions import ValidationError
from ..models import class_model, student_model
from ..models.user_model import User
from . import assessment_service, dashboard_service, progress_service
from .class_helpers import crud
from .database_service import DatabaseService
from .roster_cache import RosterCache


# --- Facade Methods for Class Operations ---

def create_class(class_data: class_model.ClassCreate, db: DatabaseService, user: User) -> class_model.Class:
    """Creates a class and stamps the teacher's id and name onto it."""
    return crud.create_class(class_data=class_data, db=db, user=user)


def update_class(
    class_id: str,
    class_update: class_model.ClassUpdate,
    db: DatabaseService,
    roster: RosterCache,
    user: User,
) -> class_model.Class:
    crud.resolve_owned_class(class_id, user, roster, db)
    return crud.update_class(class_id=class_id, class_update=class_update, db=db, roster=roster)


def delete_class_by_id(class_id: str, db: DatabaseService, roster: RosterCache, user: User) -> int:
    """Deletes a class the user owns, students first. Returns the number of students removed."""
    crud.resolve_owned_class(class_id, user, roster, db)
    return crud.delete_class_by_id(class_id=class_id, db=db, roster=roster)


# --- Facade Methods for Student Operations ---

def add_student(
    student_data: student_model.StudentCreate,
    db: DatabaseService,
    roster: RosterCache,
    user: User,
) -> student_model.Student:
    if student_data.classId:
        crud.resolve_owned_class(student_data.classId, user, roster, db)
    return crud.add_student_to_class(student_data=student_data, db=db, roster=roster)


def update_student(
    student_id: str,
    student_update: student_model.StudentUpdate,
    db: DatabaseService,
    roster: RosterCache,
    user: User,
    today: Optional[date] = None,
) -> student_model.Student:
    """
    Applies a student patch.

    A patch with both scores records a new assessment, so the level and the
    history stay in step with the scores. A patch with only one of the two
    scores is rejected for the same reason. Other fields are merged as given.
    """
    patch = student_update.model_dump(exclude_unset=True, exclude_none=True)
    if not patch:
        raise ValidationError("No update data provided.")

    crud.resolve_owned_student(student_id, user, roster, db)

    has_reading = "readingScore" in patch
    has_writing = "writingScore" in patch
    if has_reading != has_writing:
        raise ValidationError("readingScore and writingScore must be updated together.")

    updated = None
    if has_reading and has_writing:
        updated = assessment_service.record_assessment(
            student_id, patch["readingScore"], patch["writingScore"], db=db, roster=roster, today=today
        )
    if "name" in patch:
        updated = crud.rename_student(student_id, patch["name"], db=db, roster=roster)
    return updated


def delete_student(student_id: str, db: DatabaseService, roster: RosterCache, user: User) -> student_model.Student:
    crud.resolve_owned_student(student_id, user, roster, db)
    return crud.delete_student(student_id, db=db, roster=roster)


# --- Data Assembly Logic ---

def get_all_classes_with_summary(user: User, roster: RosterCache) -> List[class_model.ClassSummary]:
    """
    Business logic to retrieve all classes for a user and enrich them with
    their level distribution.
    """
    user_classes = roster.classes_for_teacher(user.id)
    if not user_classes:
        return []

    students = roster.students_for_teacher(user.id)
    students_df = pd.DataFrame(
        [{"classId": s.classId, "level": s.currentLevel.value} for s in students],
        columns=["classId", "level"],
    )
    level_counts = {}
    if not students_df.empty:
        level_counts = students_df.groupby(["classId", "level"]).size().to_dict()

    summary_list = []
    for cls in sorted(user_classes, key=lambda c: c.createdAt):
        levels = class_model.LevelDistribution(
            beginner=int(level_counts.get((cls.id, student_model.Level.BEGINNER.value), 0)),
            developing=int(level_counts.get((cls.id, student_model.Level.DEVELOPING.value), 0)),
            proficient=int(level_counts.get((cls.id, student_model.Level.PROFICIENT.value), 0)),
        )
        summary_list.append(class_model.ClassSummary(**cls.model_dump(), levels=levels))
    return summary_list


def get_class_details_by_id(
    class_id: str,
    user: User,
    roster: RosterCache,
    db: DatabaseService,
    now: Optional[datetime] = None,
) -> class_model.ClassDetails:
    """
    Business logic to assemble the full details for the Class Details page,
    ensuring the user has ownership of the requested class.
    """
    class_info = crud.resolve_owned_class(class_id, user, roster, db)
    students_in_class = roster.students_for_class(class_id)

    now = now or datetime.now()
    return class_model.ClassDetails(
        classInfo=class_info,
        students=students_in_class,
        statistics=dashboard_service.calculate_class_statistics(students_in_class, now=now),
        progress=progress_service.build_progress_by_month(students_in_class, today=now.date()),
        yearProgress=progress_service.build_progress_by_month(
            students_in_class, include_all_months=True, today=now.date()
        ),
    )


def search_students(
    user: User,
    roster: RosterCache,
    db: DatabaseService,
    search: Optional[str] = None,
    class_id: Optional[str] = None,
) -> List[student_model.Student]:
    """The user's students, optionally narrowed to one class and a name search."""
    if class_id:
        crud.resolve_owned_class(class_id, user, roster, db)
        students = roster.students_for_class(class_id)
    else:
        students = roster.students_for_teacher(user.id)
    matches = crud.students_matching(students, search)
    return sorted(matches, key=lambda s: s.name.lower())


def get_student_details(
    student_id: str,
    user: User,
    roster: RosterCache,
    db: DatabaseService,
    today: Optional[date] = None,
) -> student_model.StudentDetails:
    student = crud.resolve_owned_student(student_id, user, roster, db)
    return student_model.StudentDetails(
        student=student,
        progress=progress_service.build_student_progress(student, today=today),
    )
