# /app/routers/classes_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core.deps import get_current_user, get_roster
from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..models import class_model, dashboard_model
from ..models.user_model import User
from ..services import class_service, dashboard_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.roster_cache import RosterCache

router = APIRouter()

# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[class_model.ClassSummary], summary="Get All Classes with Level Distribution")
def get_all_classes(user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster)):
    return class_service.get_all_classes_with_summary(user=user, roster=roster)

@router.post("", response_model=class_model.Class, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
def create_new_class(class_create: class_model.ClassCreate, user: User = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.create_class(class_data=class_create, db=db, user=user)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.get("/{class_id}", response_model=class_model.ClassDetails, summary="Get a Single Class with Full Details")
def get_class_by_id(class_id: str, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.get_class_details_by_id(class_id=class_id, user=user, roster=roster, db=db)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

@router.put("/{class_id}", response_model=class_model.Class, summary="Update a Class")
def update_class_details(class_id: str, class_update: class_model.ClassUpdate, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.update_class(class_id=class_id, class_update=class_update, db=db, roster=roster, user=user)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class and Its Students")
def delete_class(class_id: str, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        class_service.delete_class_by_id(class_id=class_id, db=db, roster=roster, user=user)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        # Students deleted before the failure stay deleted.
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{class_id}/statistics", response_model=dashboard_model.ClassStatistics, summary="Get Class Statistics")
def get_class_statistics(class_id: str, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        return dashboard_service.get_class_statistics(class_id=class_id, user=user, roster=roster, db=db)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
