# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

# --- Service and Model Imports ---
from ..core.deps import get_current_user, get_roster
from ..core.exceptions import NotFoundError, PersistenceError
from ..models.dashboard_model import ProgressPoint, Statistics
from ..models.user_model import User
from ..services import dashboard_service, progress_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.roster_cache import RosterCache

# --- APIRouter Instance ---
router = APIRouter()

# --- Endpoint Definitions ---
@router.get(
    "/summary",
    response_model=Statistics,
    summary="Get Dashboard Summary",
    description="Level statistics across the teacher's students, or one of their classes."
)
def get_dashboard_summary(
    class_id: Optional[str] = Query(default=None, alias="classId"),
    user: User = Depends(get_current_user),
    roster: RosterCache = Depends(get_roster),
    db: DatabaseService = Depends(get_db_service),
):
    """
    This is the "thin" router layer. It delegates the aggregation to the
    dashboard service and only translates its errors into HTTP responses.
    """
    try:
        return dashboard_service.get_summary_data(user=user, roster=roster, db=db, class_id=class_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get(
    "/progress",
    response_model=List[ProgressPoint],
    summary="Get Monthly Progress",
    description="Level counts per month of the current year, for the progress chart."
)
def get_dashboard_progress(
    class_id: Optional[str] = Query(default=None, alias="classId"),
    all_months: bool = Query(default=False, alias="allMonths"),
    user: User = Depends(get_current_user),
    roster: RosterCache = Depends(get_roster),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return progress_service.get_progress(
            user=user, roster=roster, db=db, class_id=class_id, include_all_months=all_months
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
