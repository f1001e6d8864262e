# /app/routers/students_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.deps import get_current_user, get_roster
from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..models import student_model
from ..models.user_model import User
from ..services import class_service, progress_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.roster_cache import RosterCache

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="Search the Teacher's Students")
def list_students(
    search: Optional[str] = None,
    class_id: Optional[str] = Query(default=None, alias="classId"),
    user: User = Depends(get_current_user),
    roster: RosterCache = Depends(get_roster),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return class_service.search_students(user=user, roster=roster, db=db, search=search, class_id=class_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Add a Student to a Class")
def add_student(student_create: student_model.StudentCreate, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.add_student(student_data=student_create, db=db, roster=roster, user=user)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

# --- INDIVIDUAL STUDENT RESOURCE ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.StudentDetails, summary="Get a Student with Progress")
def get_student(student_id: str, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.get_student_details(student_id=student_id, user=user, roster=roster, db=db)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student")
def update_student_details(student_id: str, student_update: student_model.StudentUpdate, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.update_student(student_id=student_id, student_update=student_update, db=db, roster=roster, user=user)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a Student")
def remove_student(student_id: str, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        class_service.delete_student(student_id=student_id, db=db, roster=roster, user=user)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{student_id}/progress", response_model=List[student_model.StudentProgressPoint], summary="Get a Student's Monthly Progress")
def get_student_progress(student_id: str, user: User = Depends(get_current_user), roster: RosterCache = Depends(get_roster), db: DatabaseService = Depends(get_db_service)):
    try:
        return progress_service.get_student_progress(student_id=student_id, user=user, roster=roster, db=db)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
