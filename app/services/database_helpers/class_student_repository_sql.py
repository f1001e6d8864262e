# /app/services/database_helpers/class_student_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Class and Student
tables. It is the direct interface to the database for all roster data.

The tables are used as two document collections. The repository offers the
operations a document store would: merge-upsert, point read, point delete,
full-collection listing and live subscription. It never runs filtered range
queries; all filtering and grouping happens in memory in the services.

Every driver failure is rolled back and re-raised as a `PersistenceError`,
except the snapshot read that follows a committed write.
"""

import logging
from typing import Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

# Import the SQLAlchemy models this repository will interact with.
from app.db.models.class_student_models import Class, Student
from app.core.exceptions import PersistenceError
from .change_feed import CLASSES, STUDENTS, ChangeFeed, change_feed

logger = logging.getLogger(__name__)

_MODELS = {CLASSES: Class, STUDENTS: Student}


def merge_patch(existing: Dict, patch: Dict) -> Dict:
    """
    Applies a partial update onto a document and returns the merged copy.

    A patch value wins only when it is defined; keys that are absent from the
    patch or set to None leave the existing value untouched.
    """
    merged = dict(existing)
    merged.update({key: value for key, value in patch.items() if value is not None})
    return merged


def row_to_dict(obj) -> Dict:
    return {c.name: getattr(obj, c.name) for c in obj.__table__.columns}


class ClassStudentRepositorySQL:
    def __init__(self, db_session: Session, feed: ChangeFeed = change_feed):
        self.db = db_session
        self.feed = feed

    # --- Generic Document Operations ---

    def _model(self, collection: str):
        try:
            return _MODELS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection '{collection}'.") from None

    def _check_fields(self, model, data: Dict):
        unknown = set(data) - {c.name for c in model.__table__.columns}
        if unknown:
            raise ValueError(f"Unknown {model.__tablename__} field(s): {sorted(unknown)}")

    def get_document(self, collection: str, doc_id: str):
        model = self._model(collection)
        try:
            return self.db.get(model, doc_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Reading %s/%s failed: %s", collection, doc_id, e)
            raise PersistenceError(f"Could not read {collection}/{doc_id}.") from e

    def list_documents(self, collection: str) -> List[Dict]:
        """Returns the whole collection as plain dictionaries, in id order."""
        model = self._model(collection)
        try:
            rows = self.db.query(model).order_by(model.id).all()
            return [row_to_dict(row) for row in rows]
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Listing %s failed: %s", collection, e)
            raise PersistenceError(f"Could not read the {collection} collection.") from e

    def upsert_document(self, collection: str, doc_id: str, data: Dict):
        """
        Creates the document, or merges `data` into it when it already exists.
        Fields not mentioned in `data` are never cleared.
        """
        model = self._model(collection)
        data = {key: value for key, value in data.items() if key != "id"}
        self._check_fields(model, data)
        with self.feed.lock:
            try:
                doc = self.db.get(model, doc_id)
                if doc is None:
                    doc = model(id=doc_id, **merge_patch({}, data))
                    self.db.add(doc)
                else:
                    for key, value in merge_patch(row_to_dict(doc), data).items():
                        setattr(doc, key, value)
                self.db.commit()
                self.db.refresh(doc)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error("Writing %s/%s failed: %s", collection, doc_id, e)
                raise PersistenceError(f"Could not save {collection}/{doc_id}.") from e

            self._publish(collection)
        return doc

    def delete_document(self, collection: str, doc_id: str) -> bool:
        model = self._model(collection)
        with self.feed.lock:
            try:
                doc = self.db.get(model, doc_id)
                if doc is None:
                    return False
                self.db.delete(doc)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error("Deleting %s/%s failed: %s", collection, doc_id, e)
                raise PersistenceError(f"Could not delete {collection}/{doc_id}.") from e

            self._publish(collection)
        return True

    # --- Live Subscription ---

    def subscribe(self, collection: str, listener: Callable[[list], None]) -> Callable[[], None]:
        """
        Registers `listener` for `collection`, immediately hands it the current
        snapshot, and returns the unsubscribe callable.
        """
        with self.feed.lock:
            unsubscribe = self.feed.add_listener(collection, listener)
            try:
                snapshot = self.list_documents(collection)
            except PersistenceError:
                unsubscribe()
                raise
            listener(snapshot)
        return unsubscribe

    def _publish(self, collection: str):
        # The write is already committed: a failed snapshot read is logged, not
        # raised. Listeners catch up on the next write to the collection.
        if not self.feed.has_listeners(collection):
            return
        try:
            snapshot = self.list_documents(collection)
        except PersistenceError as e:
            logger.warning("Could not publish a %s snapshot: %s", collection, e)
            return
        self.feed.publish(collection, snapshot)

    # --- Class Methods ---

    def get_class(self, class_id: str) -> Optional[Class]:
        return self.get_document(CLASSES, class_id)

    def list_classes(self) -> List[Dict]:
        return self.list_documents(CLASSES)

    def upsert_class(self, class_id: str, data: Dict) -> Class:
        return self.upsert_document(CLASSES, class_id, data)

    def delete_class(self, class_id: str) -> bool:
        return self.delete_document(CLASSES, class_id)

    # --- Student Methods ---

    def get_student(self, student_id: str) -> Optional[Student]:
        return self.get_document(STUDENTS, student_id)

    def list_students(self) -> List[Dict]:
        return self.list_documents(STUDENTS)

    def upsert_student(self, student_id: str, data: Dict) -> Student:
        return self.upsert_document(STUDENTS, student_id, data)

    def delete_student(self, student_id: str) -> bool:
        return self.delete_document(STUDENTS, student_id)
