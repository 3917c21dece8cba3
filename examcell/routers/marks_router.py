# /examcell/routers/marks_router.py

from fastapi import APIRouter, Depends, Query
from typing import Optional

from ..models import marks_model
from ..models.common_model import Message
from ..services import marks_service
from ..services.database_service import DatabaseService, get_db_service
from .http_errors import to_http_exception

router = APIRouter()


@router.get("", response_model=marks_model.MarksResponse, summary="Get Marks for a Class or One Student")
def get_marks(
    classId: Optional[int] = Query(default=None),
    studentId: Optional[int] = Query(default=None),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return marks_service.get_marks(db=db, class_id=classId, student_id=studentId)
    except ValueError as e:
        raise to_http_exception(e)


@router.post("", response_model=Message, summary="Save a Student's Marks")
def save_marks(payload: marks_model.MarksSave, db: DatabaseService = Depends(get_db_service)):
    try:
        marks_service.save_marks(payload=payload, db=db)
    except ValueError as e:
        raise to_http_exception(e)
    return Message(message="Marks saved successfully")
