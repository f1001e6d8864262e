# /app/services/database_service.py

from typing import Callable, Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.change_feed import ChangeFeed, change_feed
from .database_helpers.class_student_repository_sql import ClassStudentRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session, feed: ChangeFeed = change_feed):
        """
        Initializes the DatabaseService on top of a SQLAlchemy session.
        Writes are announced on `feed` so live subscribers see them.
        """
        self.class_student_repo = ClassStudentRepositorySQL(db_session, feed=feed)

    # --- CLASS METHODS (DELEGATED) ---
    def get_class(self, class_id: str): return self.class_student_repo.get_class(class_id)
    def list_classes(self) -> List[Dict]: return self.class_student_repo.list_classes()
    def upsert_class(self, class_id: str, data: Dict): return self.class_student_repo.upsert_class(class_id, data)
    def delete_class(self, class_id: str) -> bool: return self.class_student_repo.delete_class(class_id)

    # --- STUDENT METHODS (DELEGATED) ---
    def get_student(self, student_id: str): return self.class_student_repo.get_student(student_id)
    def list_students(self) -> List[Dict]: return self.class_student_repo.list_students()
    def upsert_student(self, student_id: str, data: Dict): return self.class_student_repo.upsert_student(student_id, data)
    def delete_student(self, student_id: str) -> bool: return self.class_student_repo.delete_student(student_id)

    # --- LIVE SUBSCRIPTION ---
    def subscribe(self, collection: str, listener: Callable[[list], None]) -> Callable[[], None]:
        return self.class_student_repo.subscribe(collection, listener)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService bound to the request's
    session and the process-wide change feed.
    """
    yield DatabaseService(db_session=db)
