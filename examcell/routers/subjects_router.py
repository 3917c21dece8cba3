# /examcell/routers/subjects_router.py

from fastapi import APIRouter, Body, Depends, Query, status
from typing import List, Optional

from ..models import subject_model
from ..models.common_model import Message, RecordId
from ..services import subject_service
from ..services.database_service import DatabaseService, get_db_service
from .http_errors import to_http_exception

router = APIRouter()


@router.get("", response_model=List[subject_model.Subject], summary="Get Subjects, Optionally for One Class")
def get_subjects(classId: Optional[int] = Query(default=None), db: DatabaseService = Depends(get_db_service)):
    return subject_service.get_subjects(db=db, class_id=classId)


@router.post("", response_model=subject_model.Subject, status_code=status.HTTP_201_CREATED, summary="Create a Subject and its Marks Columns")
def create_subject(subject_create: subject_model.SubjectCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return subject_service.create_subject(subject_data=subject_create, db=db)
    except ValueError as e:
        raise to_http_exception(e)


@router.put("", response_model=subject_model.Subject, summary="Update a Subject and Reconcile its Marks Columns")
def update_subject(subject_update: subject_model.SubjectUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        return subject_service.update_subject(subject_update=subject_update, db=db)
    except ValueError as e:
        raise to_http_exception(e)


@router.delete("", response_model=Message, summary="Delete a Subject and its Marks Columns")
def delete_subject(record: Optional[RecordId] = Body(default=None), db: DatabaseService = Depends(get_db_service)):
    try:
        subject_service.delete_subject(subject_id=record.id if record else None, db=db)
    except ValueError as e:
        raise to_http_exception(e)
    return Message(message="Subject deleted successfully")
