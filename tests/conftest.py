# /tests/conftest.py

import os

# Every test runs against a private in-memory database. This has to be set
# before anything imports `app.db.database`.
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.db import database
from app.db.base import Base
from app.models.class_model import Class
from app.models.student_model import Student
from app.models.user_model import User
from app.services.database_helpers.change_feed import ChangeFeed
from app.services.database_service import DatabaseService
from app.services.leveling import classify
from app.services.roster_cache import RosterCache


@pytest.fixture
def db_session():
    """A session on a freshly created schema, dropped again after the test."""
    Base.metadata.create_all(bind=database.engine)
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def db_service(db_session, feed):
    return DatabaseService(db_session=db_session, feed=feed)


@pytest.fixture
def live_roster(db_service):
    """A roster subscribed to the test database."""
    roster = RosterCache().attach(db_service)
    yield roster
    roster.detach()


@pytest.fixture
def teacher():
    return User(id="teacher_1", name="Asha Rao", email="asha@example.org", school="Government Primary School")


@pytest.fixture
def make_class():
    def _make(class_id="cls_1", teacher_id="teacher_1", name="Grade 5A", student_count=0):
        return Class(
            id=class_id, name=name, teacherId=teacher_id, teacherName="Asha Rao",
            grade="5", subject="General", createdAt=datetime(2026, 1, 5, 9, 0),
            studentCount=student_count,
        )
    return _make


@pytest.fixture
def make_student():
    """
    Builds a Student model. `history` is a list of (date, reading, writing)
    tuples in insertion order; the level of each entry is derived.
    """
    def _make(student_id="stu_1", class_id="cls_1", name="Priya Singh",
              reading=0, writing=0, last_assessment=None, history=()):
        return Student(
            id=student_id, name=name, classId=class_id, className="Grade 5A",
            currentLevel=classify(reading, writing),
            readingScore=reading, writingScore=writing,
            lastAssessment=last_assessment,
            assessmentHistory=[
                {"date": d, "readingScore": r, "writingScore": w, "level": classify(r, w)}
                for d, r, w in history
            ],
        )
    return _make


@pytest.fixture
def client():
    """A TestClient running the full application lifespan on an empty database."""
    from app.main import app
    with TestClient(app) as test_client:
        yield test_client
    Base.metadata.drop_all(bind=database.engine)
