# /app/services/roster_cache.py

"""
The in-memory roster: the latest snapshot of the `classes` and `students`
collections, kept current by two live subscriptions.

One `RosterCache` is built at application start-up and handed to the services
explicitly (it lives on `app.state`). The services read classes and students
from here and only fall back to a point read against the store when a
document is not cached yet.

The two collections update independently. A reader may briefly see a student
whose class was just deleted, or a class whose new student has not arrived
yet; nothing here tries to reconcile the two streams.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..models.class_model import Class
from ..models.student_model import Student
from .database_helpers.change_feed import CLASSES, STUDENTS

logger = logging.getLogger(__name__)


class RosterCache:
    def __init__(self):
        self._classes: Dict[str, Class] = {}
        self._students: Dict[str, Student] = {}
        self._unsubscribers: List[Callable[[], None]] = []
        self.ready = False

    # --- Subscription Wiring ---

    def attach(self, db) -> "RosterCache":
        """Subscribes to both collections through a DatabaseService."""
        self._unsubscribers.append(db.subscribe(CLASSES, self.on_classes_snapshot))
        self._unsubscribers.append(db.subscribe(STUDENTS, self.on_students_snapshot))
        return self

    def detach(self):
        while self._unsubscribers:
            self._unsubscribers.pop()()

    def on_classes_snapshot(self, snapshot: list):
        self._classes = {c.id: c for c in (Class.model_validate(doc) for doc in snapshot)}
        logger.debug("Roster now holds %d classes", len(self._classes))

    def on_students_snapshot(self, snapshot: list):
        self._students = {s.id: s for s in (Student.model_validate(doc) for doc in snapshot)}
        self.ready = True
        logger.debug("Roster now holds %d students", len(self._students))

    # --- Read Access ---

    @property
    def classes(self) -> List[Class]:
        return list(self._classes.values())

    @property
    def students(self) -> List[Student]:
        return list(self._students.values())

    def get_class(self, class_id: str) -> Optional[Class]:
        return self._classes.get(class_id)

    def get_student(self, student_id: str) -> Optional[Student]:
        return self._students.get(student_id)

    def students_for_class(self, class_id: str) -> List[Student]:
        return [s for s in self._students.values() if s.classId == class_id]

    def classes_for_teacher(self, teacher_id: str) -> List[Class]:
        return [c for c in self._classes.values() if c.teacherId == teacher_id]

    def students_for_teacher(self, teacher_id: str) -> List[Student]:
        """The teacher's students: those whose class the teacher owns."""
        owned = {c.id for c in self.classes_for_teacher(teacher_id)}
        return [s for s in self._students.values() if s.classId in owned]
