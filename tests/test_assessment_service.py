# /tests/test_assessment_service.py

from datetime import date

import pytest
from unittest.mock import MagicMock

from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.models.assessment_model import AssessmentCreate
from app.models.student_model import Level
from app.services import assessment_service
from app.services.roster_cache import RosterCache

TODAY = date(2026, 10, 18)


@pytest.fixture
def mock_db_service():
    """Provides a mock of the DatabaseService whose writes echo the merged document."""
    db = MagicMock()

    def _echo_upsert(student_id, data):
        return {"id": student_id, "name": "Priya Singh", "classId": "cls_1", **data}

    db.upsert_student.side_effect = _echo_upsert
    return db


@pytest.fixture
def roster_with_student(make_class, make_student):
    roster = RosterCache()
    roster.on_classes_snapshot([make_class("cls_1")])
    roster.on_students_snapshot([
        make_student("stu_1", reading=50, writing=50, history=[(date(2026, 9, 1), 50, 50)]),
    ])
    return roster


@pytest.mark.parametrize("reading, writing", [(-1, 50), (50, 101), (-5, 200)])
def test_out_of_range_scores_are_rejected_before_any_write(reading, writing, mock_db_service, roster_with_student):
    with pytest.raises(ValidationError):
        assessment_service.record_assessment("stu_1", reading, writing, db=mock_db_service, roster=roster_with_student)
    mock_db_service.upsert_student.assert_not_called()
    mock_db_service.get_student.assert_not_called()


def test_record_appends_snapshot_and_updates_level(mock_db_service, roster_with_student):
    updated = assessment_service.record_assessment(
        "stu_1", 85, 90, db=mock_db_service, roster=roster_with_student, today=TODAY
    )

    assert updated.currentLevel == Level.PROFICIENT
    assert updated.readingScore == 85
    assert updated.writingScore == 90
    assert updated.lastAssessment == TODAY
    assert len(updated.assessmentHistory) == 2
    assert updated.assessmentHistory[-1].date == TODAY
    assert updated.assessmentHistory[-1].level == Level.PROFICIENT
    # The earlier entry is carried over untouched.
    assert updated.assessmentHistory[0].date == date(2026, 9, 1)


def test_record_writes_a_merge_patch_only(mock_db_service, roster_with_student):
    assessment_service.record_assessment("stu_1", 60, 60, db=mock_db_service, roster=roster_with_student, today=TODAY)

    student_id, patch = mock_db_service.upsert_student.call_args.args
    assert student_id == "stu_1"
    assert set(patch) == {"readingScore", "writingScore", "currentLevel", "lastAssessment", "assessmentHistory"}
    assert patch["currentLevel"] == "developing"
    assert patch["assessmentHistory"][-1] == {
        "date": "2026-10-18", "readingScore": 60, "writingScore": 60, "level": "developing",
    }


def test_unknown_student_falls_back_to_store_then_fails(mock_db_service):
    mock_db_service.get_student.return_value = None

    with pytest.raises(NotFoundError):
        assessment_service.record_assessment("stu_ghost", 70, 70, db=mock_db_service, roster=RosterCache())
    mock_db_service.get_student.assert_called_once_with("stu_ghost")
    mock_db_service.upsert_student.assert_not_called()


def test_student_found_only_in_store_is_recorded(mock_db_service, make_student):
    mock_db_service.get_student.return_value = make_student("stu_9", reading=20, writing=20)

    updated = assessment_service.record_assessment(
        "stu_9", 75, 75, db=mock_db_service, roster=RosterCache(), today=TODAY
    )
    assert updated.currentLevel == Level.DEVELOPING
    assert len(updated.assessmentHistory) == 1


def test_store_failure_propagates_without_retry(mock_db_service, roster_with_student):
    mock_db_service.upsert_student.side_effect = PersistenceError("Could not save students/stu_1.")

    with pytest.raises(PersistenceError):
        assessment_service.record_assessment("stu_1", 70, 70, db=mock_db_service, roster=roster_with_student)
    assert mock_db_service.upsert_student.call_count == 1


def test_record_for_teacher_hides_other_teachers_students(mock_db_service, make_class, make_student, teacher):
    roster = RosterCache()
    roster.on_classes_snapshot([make_class("cls_9", teacher_id="other_teacher")])
    roster.on_students_snapshot([make_student("stu_9", class_id="cls_9")])

    with pytest.raises(NotFoundError):
        assessment_service.record_for_teacher(
            AssessmentCreate(studentId="stu_9", readingScore=70, writingScore=70),
            user=teacher, db=mock_db_service, roster=roster,
        )
    mock_db_service.upsert_student.assert_not_called()
