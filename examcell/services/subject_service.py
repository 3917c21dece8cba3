# /examcell/services/subject_service.py

"""
Business logic for subjects. Every write here is followed by a marks-table
schema change, so that the class's marks table always has exactly one column
per subject assessment.
"""

import logging
from typing import List, Optional

from ..models import subject_model
from ..db.models.subject_models import Subject
from .class_service import get_class_or_404
from .database_service import DatabaseService
from .errors import ConflictError, NotFoundError, ValidationError
from .marks_helpers import schema_sync
from .marks_naming import table_name_for_class

logger = logging.getLogger(__name__)


def _check_unique(db: DatabaseService, subject_code: str, class_id: int, abbreviation: str, exclude_id: Optional[int] = None):
    by_code = db.get_subject_by_code(subject_code)
    if by_code is not None and by_code.id != exclude_id:
        raise ConflictError(f"Subject with code '{subject_code}' already exists")
    by_abbreviation = db.get_subject_by_abbreviation(class_id, abbreviation)
    if by_abbreviation is not None and by_abbreviation.id != exclude_id:
        raise ConflictError(f"Subject with abbreviation '{abbreviation}' already exists in this class")


def get_subjects(db: DatabaseService, class_id: Optional[int] = None) -> List[Subject]:
    return db.get_all_subjects(class_id=class_id)


def create_subject(subject_data: subject_model.SubjectCreate, db: DatabaseService) -> Subject:
    db_class = get_class_or_404(subject_data.classId, db)
    _check_unique(db, subject_data.subjectCode, subject_data.classId, subject_data.abbreviation)

    new_subject = db.add_subject(subject_data.model_dump())
    schema_sync.ensure_subject_columns(
        db, table_name_for_class(db_class), new_subject.abbreviation, list(new_subject.assessments)
    )
    return new_subject


def update_subject(subject_update: subject_model.SubjectUpdate, db: DatabaseService) -> Subject:
    if subject_update.id is None:
        raise ValidationError("Subject ID is required")
    db_subject = db.get_subject_by_id(subject_update.id)
    if db_subject is None:
        raise NotFoundError("Subject not found")

    update_data = subject_update.model_dump(exclude_unset=True, exclude={"id"}, exclude_none=True)
    if not update_data:
        raise ValidationError("No update data provided.")

    new_class = get_class_or_404(update_data.get("classId", db_subject.classId), db)
    _check_unique(
        db,
        update_data.get("subjectCode", db_subject.subjectCode),
        new_class.id,
        update_data.get("abbreviation", db_subject.abbreviation),
        exclude_id=db_subject.id,
    )

    # Snapshot the old shape before the ORM object is mutated.
    old_table = table_name_for_class(db_subject.class_)
    old_abbreviation = db_subject.abbreviation
    old_assessments = list(db_subject.assessments or [])

    updated = db.update_subject(db_subject.id, update_data)
    schema_sync.reconcile_subject_columns(
        db,
        old_table, old_abbreviation, old_assessments,
        table_name_for_class(new_class), updated.abbreviation, list(updated.assessments or []),
    )
    return updated


def delete_subject(subject_id: Optional[int], db: DatabaseService) -> None:
    if subject_id is None:
        raise ValidationError("Subject ID is required")
    db_subject = db.get_subject_by_id(subject_id)
    if db_subject is None:
        raise NotFoundError("Subject not found")

    subject_code = db_subject.subjectCode
    schema_sync.remove_subject_columns(
        db, table_name_for_class(db_subject.class_), db_subject.abbreviation, list(db_subject.assessments or [])
    )
    db.delete_subject(subject_id)
    logger.info("Deleted subject %s (%s)", subject_id, subject_code)
