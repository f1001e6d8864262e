# /tests/test_class_service.py

from datetime import date
from unittest.mock import MagicMock, call

import pytest

from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.models import class_model, student_model
from app.models.student_model import Level
from app.services import class_service
from app.services.class_helpers import crud
from app.services.roster_cache import RosterCache

# --- Test Data Fixtures ---

@pytest.fixture
def mock_db_service():
    """Provides a mock of the DatabaseService for dependency injection."""
    db = MagicMock()
    db.upsert_student.side_effect = lambda student_id, data: {
        "id": student_id, "name": "Priya Singh", "classId": "cls_1", **data
    }
    return db


@pytest.fixture
def roster(make_class, make_student, teacher):
    roster = RosterCache()
    roster.on_classes_snapshot([
        make_class("cls_1", teacher_id=teacher.id, student_count=3),
        make_class("cls_2", teacher_id=teacher.id, name="Grade 6B", student_count=1),
    ])
    roster.on_students_snapshot([
        make_student("stu_a", class_id="cls_1", name="Priya Singh", reading=85, writing=82),
        make_student("stu_b", class_id="cls_1", name="Rahul Kumar", reading=72, writing=68),
        make_student("stu_c", class_id="cls_1", name="Anita Sharma", reading=45, writing=42),
        make_student("stu_d", class_id="cls_2", name="Arjun Patel", reading=88, writing=85),
    ])
    return roster


# --- Cascade Delete ---

def test_delete_class_deletes_each_student_then_the_class(mock_db_service, roster):
    manager = MagicMock()
    manager.attach_mock(mock_db_service.delete_student, "delete_student")
    manager.attach_mock(mock_db_service.delete_class, "delete_class")

    deleted = crud.delete_class_by_id("cls_1", db=mock_db_service, roster=roster)

    assert deleted == 3
    assert manager.mock_calls == [
        call.delete_student("stu_a"),
        call.delete_student("stu_b"),
        call.delete_student("stu_c"),
        call.delete_class("cls_1"),
    ]


def test_delete_class_stops_when_a_student_delete_fails(mock_db_service, roster):
    mock_db_service.delete_student.side_effect = [True, PersistenceError("network down")]

    with pytest.raises(PersistenceError):
        crud.delete_class_by_id("cls_1", db=mock_db_service, roster=roster)

    assert mock_db_service.delete_student.call_count == 2
    mock_db_service.delete_class.assert_not_called()


def test_delete_unknown_class_is_not_found(mock_db_service):
    mock_db_service.get_class.return_value = None
    with pytest.raises(NotFoundError):
        crud.delete_class_by_id("cls_nope", db=mock_db_service, roster=RosterCache())
    mock_db_service.delete_class.assert_not_called()


def test_delete_class_of_another_teacher_is_not_found(mock_db_service, roster, make_class, teacher):
    roster.on_classes_snapshot(roster.classes + [make_class("cls_foreign", teacher_id="other")])
    with pytest.raises(NotFoundError):
        class_service.delete_class_by_id("cls_foreign", db=mock_db_service, roster=roster, user=teacher)
    mock_db_service.delete_class.assert_not_called()


# --- Class Creation and Update ---

def test_create_class_derives_name_and_stamps_teacher(mock_db_service, teacher):
    mock_db_service.upsert_class.side_effect = lambda class_id, data: {"id": class_id, **data}

    created = class_service.create_class(class_model.ClassCreate(grade="5", section="A"), db=mock_db_service, user=teacher)

    assert created.id.startswith("cls_")
    assert created.name == "Grade 5A"
    assert created.subject == "General"
    assert created.teacherId == teacher.id
    assert created.teacherName == teacher.name
    assert created.studentCount == 0


def test_update_class_rejects_empty_patch(mock_db_service, roster, teacher):
    with pytest.raises(ValidationError):
        class_service.update_class("cls_1", class_model.ClassUpdate(), db=mock_db_service, roster=roster, user=teacher)
    mock_db_service.upsert_class.assert_not_called()


def test_update_class_sends_only_defined_fields(mock_db_service, roster, make_class, teacher):
    mock_db_service.upsert_class.return_value = make_class("cls_1", name="Grade 5C")

    class_service.update_class(
        "cls_1", class_model.ClassUpdate(name="Grade 5C", subject=None), db=mock_db_service, roster=roster, user=teacher
    )
    mock_db_service.upsert_class.assert_called_once_with("cls_1", {"name": "Grade 5C"})


# --- Student Creation and Deletion ---

def test_add_student_requires_a_class(mock_db_service, roster):
    with pytest.raises(ValidationError):
        crud.add_student_to_class(student_model.StudentCreate(name="New Kid"), db=mock_db_service, roster=roster)
    mock_db_service.upsert_student.assert_not_called()


def test_add_student_increments_class_count(mock_db_service, roster):
    student = crud.add_student_to_class(
        student_model.StudentCreate(name="New Kid", classId="cls_1", readingScore=65, writingScore=70),
        db=mock_db_service, roster=roster,
    )

    assert student.className == "Grade 5A"
    assert student.currentLevel == Level.DEVELOPING
    assert student.assessmentHistory == []
    mock_db_service.upsert_class.assert_called_once_with("cls_1", {"studentCount": 4})


def test_add_student_falls_back_to_store_for_uncached_class(mock_db_service, make_class):
    mock_db_service.get_class.return_value = make_class("cls_new", name="Grade 3B", student_count=0)

    student = crud.add_student_to_class(
        student_model.StudentCreate(name="New Kid", classId="cls_new"), db=mock_db_service, roster=RosterCache()
    )
    assert student.className == "Grade 3B"
    mock_db_service.get_class.assert_called_once_with("cls_new")
    mock_db_service.upsert_class.assert_called_once_with("cls_new", {"studentCount": 1})


def test_add_student_to_missing_class_is_not_found(mock_db_service):
    mock_db_service.get_class.return_value = None
    with pytest.raises(NotFoundError):
        crud.add_student_to_class(
            student_model.StudentCreate(name="New Kid", classId="cls_gone"), db=mock_db_service, roster=RosterCache()
        )
    mock_db_service.upsert_student.assert_not_called()


def test_delete_student_decrements_class_count(mock_db_service, roster):
    crud.delete_student("stu_d", db=mock_db_service, roster=roster)
    mock_db_service.delete_student.assert_called_once_with("stu_d")
    mock_db_service.upsert_class.assert_called_once_with("cls_2", {"studentCount": 0})


def test_delete_student_count_never_goes_negative(mock_db_service, make_class, make_student):
    roster = RosterCache()
    roster.on_classes_snapshot([make_class("cls_1", student_count=0)])
    roster.on_students_snapshot([make_student("stu_x", class_id="cls_1")])

    crud.delete_student("stu_x", db=mock_db_service, roster=roster)
    mock_db_service.upsert_class.assert_called_once_with("cls_1", {"studentCount": 0})


# --- Student Updates ---

def test_update_with_both_scores_records_an_assessment(mock_db_service, roster, teacher):
    updated = class_service.update_student(
        "stu_c", student_model.StudentUpdate(readingScore=90, writingScore=90),
        db=mock_db_service, roster=roster, user=teacher, today=date(2026, 10, 18),
    )
    assert updated.currentLevel == Level.PROFICIENT
    assert updated.lastAssessment == date(2026, 10, 18)
    assert len(updated.assessmentHistory) == 1


def test_update_with_a_single_score_is_rejected(mock_db_service, roster, teacher):
    with pytest.raises(ValidationError):
        class_service.update_student(
            "stu_c", student_model.StudentUpdate(readingScore=90), db=mock_db_service, roster=roster, user=teacher
        )
    mock_db_service.upsert_student.assert_not_called()


def test_rename_merges_only_the_name(mock_db_service, roster, teacher):
    class_service.update_student(
        "stu_a", student_model.StudentUpdate(name="Priya S."), db=mock_db_service, roster=roster, user=teacher
    )
    mock_db_service.upsert_student.assert_called_once_with("stu_a", {"name": "Priya S."})


# --- Read Models ---

def test_class_summaries_include_level_distribution(roster, teacher):
    summaries = class_service.get_all_classes_with_summary(user=teacher, roster=roster)
    by_id = {s.id: s for s in summaries}

    assert by_id["cls_1"].levels == class_model.LevelDistribution(beginner=1, developing=1, proficient=1)
    assert by_id["cls_2"].levels == class_model.LevelDistribution(beginner=0, developing=0, proficient=1)


def test_class_summaries_for_teacher_without_classes(roster):
    from app.models.user_model import User
    assert class_service.get_all_classes_with_summary(user=User(id="nobody"), roster=roster) == []


def test_search_students_is_case_insensitive(roster, teacher):
    found = class_service.search_students(user=teacher, roster=roster, db=None, search="SHARMA")
    assert [s.id for s in found] == ["stu_c"]


def test_search_students_within_a_class(roster, teacher):
    found = class_service.search_students(user=teacher, roster=roster, db=None, class_id="cls_2")
    assert [s.id for s in found] == ["stu_d"]


def test_delete_class_counts_only_students_actually_removed(mock_db_service, roster):
    mock_db_service.delete_student.side_effect = [True, False, True]

    deleted = crud.delete_class_by_id("cls_1", db=mock_db_service, roster=roster)

    assert deleted == 2
    mock_db_service.delete_class.assert_called_once_with("cls_1")
