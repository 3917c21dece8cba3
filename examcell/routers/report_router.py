# /examcell/routers/report_router.py

from fastapi import APIRouter, Depends, Query
from typing import Optional

from ..models import report_model
from ..services import report_service
from ..services.database_service import DatabaseService, get_db_service
from .http_errors import to_http_exception

router = APIRouter()


@router.get(
    "",
    response_model=report_model.ClassReport,
    summary="Get the Result Sheet of a Class",
    description="Per-student marks, subject totals, percentages, classification and per-subject summary. Read-only.",
)
def get_class_report(classId: Optional[int] = Query(default=None), db: DatabaseService = Depends(get_db_service)):
    try:
        return report_service.generate_class_report(class_id=classId, db=db)
    except ValueError as e:
        raise to_http_exception(e)
