# /app/services/class_helpers/crud.py

"""
Core create/update/delete logic for classes and students.

Lookups go to the in-memory roster first and fall back to a point read
against the store, so a document written moments ago by another request is
still found before its snapshot has been delivered.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ...core.exceptions import NotFoundError, ValidationError
from ...models import class_model, student_model
from ...models.user_model import User
from ..database_service import DatabaseService
from ..roster_cache import RosterCache
from ..leveling import classify

logger = logging.getLogger(__name__)


# --- LOOKUPS ---

def find_class(class_id: str, roster: RosterCache, db: DatabaseService) -> Optional[class_model.Class]:
    cached = roster.get_class(class_id)
    if cached is not None:
        return cached
    stored = db.get_class(class_id)
    return class_model.Class.model_validate(stored) if stored is not None else None


def resolve_class(class_id: str, roster: RosterCache, db: DatabaseService) -> class_model.Class:
    found = find_class(class_id, roster, db)
    if found is None:
        raise NotFoundError(f"Class with ID {class_id} not found")
    return found


def resolve_student(student_id: str, roster: RosterCache, db: DatabaseService) -> student_model.Student:
    cached = roster.get_student(student_id)
    if cached is not None:
        return cached
    stored = db.get_student(student_id)
    if stored is None:
        raise NotFoundError(f"Student with ID {student_id} not found")
    return student_model.Student.model_validate(stored)


# --- CLASS-RELATED CORE BUSINESS LOGIC ---

def create_class(class_data: class_model.ClassCreate, db: DatabaseService, user: User) -> class_model.Class:
    """Creates a new, empty class owned by `user`."""
    new_id = f"cls_{uuid.uuid4().hex[:12]}"
    record = {
        "name": class_data.name,
        "grade": class_data.grade,
        "subject": class_data.subject,
        "teacherId": user.id,
        "teacherName": user.name,
        "createdAt": datetime.now(timezone.utc),
        "studentCount": 0,
    }
    new_class = class_model.Class.model_validate(db.upsert_class(new_id, record))
    logger.info("Created class %s (%s) for teacher %s", new_class.id, new_class.name, user.id)
    return new_class


def update_class(
    class_id: str,
    class_update: class_model.ClassUpdate,
    db: DatabaseService,
    roster: RosterCache,
) -> class_model.Class:
    patch = class_update.model_dump(exclude_unset=True, exclude_none=True)
    if not patch:
        raise ValidationError("No update data provided.")
    resolve_class(class_id, roster, db)
    return class_model.Class.model_validate(db.upsert_class(class_id, patch))


def delete_class_by_id(class_id: str, db: DatabaseService, roster: RosterCache) -> int:
    """
    Deletes a class and every student in it, children first.

    Each student is a separate delete. If one of them fails the error
    propagates, the class itself is left in place, and the students already
    removed stay removed. Returns the number of students this call removed;
    one that is already gone is not counted.
    """
    resolve_class(class_id, roster, db)

    deleted = 0
    for student in roster.students_for_class(class_id):
        if db.delete_student(student.id):
            deleted += 1

    db.delete_class(class_id)
    logger.info("Deleted class %s and %d student(s)", class_id, deleted)
    return deleted


# --- STUDENT-RELATED CORE BUSINESS LOGIC ---

def add_student_to_class(
    student_data: student_model.StudentCreate,
    db: DatabaseService,
    roster: RosterCache,
) -> student_model.Student:
    """Business logic to add a new student to an existing class."""
    if not student_data.classId:
        raise ValidationError("Class ID is required to add a student. Please select a class.")

    parent = resolve_class(student_data.classId, roster, db)

    new_student_id = f"stu_{uuid.uuid4().hex[:12]}"
    record = {
        "name": student_data.name,
        "classId": parent.id,
        "className": parent.name,
        "readingScore": student_data.readingScore,
        "writingScore": student_data.writingScore,
        "currentLevel": classify(student_data.readingScore, student_data.writingScore).value,
        "lastAssessment": None,
        "assessmentHistory": [],
    }
    new_student = student_model.Student.model_validate(db.upsert_student(new_student_id, record))

    db.upsert_class(parent.id, {"studentCount": parent.studentCount + 1})
    logger.info("Added student %s to class %s", new_student.id, parent.id)
    return new_student


def rename_student(
    student_id: str,
    name: str,
    db: DatabaseService,
    roster: RosterCache,
) -> student_model.Student:
    resolve_student(student_id, roster, db)
    return student_model.Student.model_validate(db.upsert_student(student_id, {"name": name}))


def delete_student(student_id: str, db: DatabaseService, roster: RosterCache) -> student_model.Student:
    """
    Deletes a student and decrements the cached count of their class, never
    below zero. A class that no longer exists is left alone.
    """
    student = resolve_student(student_id, roster, db)
    db.delete_student(student_id)

    parent = find_class(student.classId, roster, db)
    if parent is not None:
        db.upsert_class(parent.id, {"studentCount": max(0, parent.studentCount - 1)})
    logger.info("Deleted student %s from class %s", student_id, student.classId)
    return student


def students_matching(students: List[student_model.Student], search: Optional[str]) -> List[student_model.Student]:
    """Case-insensitive substring match on the student's name."""
    if not search:
        return list(students)
    needle = search.strip().lower()
    return [s for s in students if needle in s.name.lower()]


# --- OWNERSHIP ---
# A teacher only sees their own classes and the students in them. Anything
# else is reported exactly like a missing document.

def resolve_owned_class(class_id: str, user: User, roster: RosterCache, db: DatabaseService) -> class_model.Class:
    found = resolve_class(class_id, roster, db)
    if found.teacherId != user.id:
        raise NotFoundError(f"Class with ID {class_id} not found")
    return found


def resolve_owned_student(student_id: str, user: User, roster: RosterCache, db: DatabaseService) -> student_model.Student:
    student = resolve_student(student_id, roster, db)
    parent = find_class(student.classId, roster, db)
    if parent is None or parent.teacherId != user.id:
        raise NotFoundError(f"Student with ID {student_id} not found")
    return student
