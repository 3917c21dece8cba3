# /examcell/routers/classes_router.py

from fastapi import APIRouter, Body, Depends, status
from typing import List, Optional

from ..models import class_model
from ..models.common_model import Message, RecordId
from ..services import class_service
from ..services.database_service import DatabaseService, get_db_service
from .http_errors import to_http_exception

router = APIRouter()


@router.get("", response_model=List[class_model.Class], summary="Get All Classes")
def get_all_classes(db: DatabaseService = Depends(get_db_service)):
    return class_service.get_all_classes(db=db)


@router.post("", response_model=class_model.Class, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
def create_new_class(class_create: class_model.ClassCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.create_class(class_data=class_create, db=db)
    except ValueError as e:
        raise to_http_exception(e)


@router.put("", response_model=class_model.Class, summary="Update a Class")
def update_class_details(class_update: class_model.ClassUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        return class_service.update_class(class_update=class_update, db=db)
    except ValueError as e:
        raise to_http_exception(e)


@router.delete("", response_model=Message, summary="Delete a Class with its Students, Subjects and Marks")
def delete_class(record: Optional[RecordId] = Body(default=None), db: DatabaseService = Depends(get_db_service)):
    try:
        class_service.delete_class(class_id=record.id if record else None, db=db)
    except ValueError as e:
        raise to_http_exception(e)
    return Message(message="Class deleted successfully")
