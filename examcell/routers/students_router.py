# /examcell/routers/students_router.py

from fastapi import APIRouter, Body, Depends, Query, status
from typing import List, Optional

from ..models import student_model
from ..models.common_model import Message, RecordId
from ..services import class_service
from ..services.database_service import DatabaseService, get_db_service
from .http_errors import to_http_exception

router = APIRouter()


@router.get("", response_model=List[student_model.Student], summary="Get Students, Optionally for One Class")
def get_students(classId: Optional[int] = Query(default=None), db: DatabaseService = Depends(get_db_service)):
    return class_service.get_students(db=db, class_id=classId)


@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Enroll a Student")
def add_student(student_create: student_model.StudentCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.create_student(student_data=student_create, db=db)
    except ValueError as e:
        raise to_http_exception(e)


@router.put("", response_model=student_model.Student, summary="Update a Student")
def update_student_details(student_update: student_model.StudentUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.update_student(student_update=student_update, db=db)
    except ValueError as e:
        raise to_http_exception(e)


@router.delete("", response_model=Message, summary="Delete a Student and their Marks")
def delete_student(record: Optional[RecordId] = Body(default=None), db: DatabaseService = Depends(get_db_service)):
    try:
        class_service.delete_student(student_id=record.id if record else None, db=db)
    except ValueError as e:
        raise to_http_exception(e)
    return Message(message="Student deleted successfully")
