# /app/routers/assessments_router.py

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_user, get_roster
from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..models.assessment_model import AssessmentCreate
from ..models.student_model import Student
from ..models.user_model import User
from ..services import assessment_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.roster_cache import RosterCache

router = APIRouter()


@router.post(
    "",
    response_model=Student,
    status_code=status.HTTP_201_CREATED,
    summary="Record an Assessment",
    description="Records reading and writing scores for a student and re-derives their level."
)
def record_assessment(
    payload: AssessmentCreate,
    user: User = Depends(get_current_user),
    roster: RosterCache = Depends(get_roster),
    db: DatabaseService = Depends(get_db_service),
):
    """
    Scores outside 0-100 never reach the service: the request model rejects
    them with a 422 before anything is looked up or written.
    """
    try:
        return assessment_service.record_for_teacher(payload=payload, user=user, db=db, roster=roster)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        # No automatic retry; the client may resubmit.
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
