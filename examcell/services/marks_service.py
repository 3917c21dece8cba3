# /examcell/services/marks_service.py

"""
Business logic for reading and saving per-assessment marks.

Marks live in the class's dynamically shaped marks table, keyed by the
student's enrollment number (a soft reference to `students`, not a foreign
key). Reads join students to rows in application code; writes are a single
upsert restricted to the columns the caller supplied.

User-facing keys use hyphens (`DSU-FA-TH`), columns use underscores
(`DSU_FA_TH`); see `marks_naming` for the translation.
"""

import logging
from typing import Any, Dict, List, Optional

from ..models import marks_model, subject_model
from .class_service import get_class_or_404
from .database_service import DatabaseService
from .errors import NotFoundError, ValidationError
from .marks_naming import (
    RESERVED_COLUMNS,
    column_for_key,
    key_for_column,
    max_score_for,
    split_column,
    table_name_for_class,
)

logger = logging.getLogger(__name__)


# --- Row Formatting ---

def format_marks_row(row: Optional[Dict], score_columns: List[str]) -> Dict[str, Optional[int]]:
    """
    Re-expands a marks row into `{key: score}`. Every score column of the table
    is present; a student without a row gets every score as None.
    """
    row = row or {}
    return {key_for_column(column): row.get(column) for column in score_columns}


def _score_columns(db: DatabaseService, table_name: str) -> List[str]:
    return [c for c in db.get_marks_columns(table_name) if c not in RESERVED_COLUMNS]


def _coerce_score(key: str, value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Score for '{key}' must be a whole number")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValidationError(f"Score for '{key}' must be a whole number")


# --- Public Operations ---

def get_marks(db: DatabaseService, class_id: Optional[int], student_id: Optional[int] = None) -> marks_model.MarksResponse:
    """
    Returns the class's subjects and either one student's marks or the marks of
    every student in the class, keyed by student id.
    """
    if class_id is None:
        raise ValidationError("Class ID is required")
    db_class = get_class_or_404(class_id, db)
    subjects = [subject_model.Subject.model_validate(s) for s in db.get_all_subjects(class_id=class_id)]
    table_name = table_name_for_class(db_class)
    score_columns = _score_columns(db, table_name)

    if student_id is not None:
        student = db.get_student_by_id(student_id)
        if student is None or student.classId != db_class.id:
            raise NotFoundError("Student not found")
        row = db.get_marks_row(table_name, student.enrollmentNumber)
        return marks_model.MarksResponse(subjects=subjects, marks=format_marks_row(row, score_columns))

    rows_by_enrollment = {row["enrollmentNumber"]: row for row in db.get_all_marks_rows(table_name)}
    marks_by_student = {
        str(student.id): format_marks_row(rows_by_enrollment.get(student.enrollmentNumber), score_columns)
        for student in db.get_students_by_class_id(class_id)
    }
    return marks_model.MarksResponse(subjects=subjects, marks=marks_by_student)


def save_marks(payload: marks_model.MarksSave, db: DatabaseService) -> None:
    """
    Upserts one student's marks. Only the supplied keys are written; name and
    seat number are always copied from the Student record.
    """
    student = db.get_student_by_id(payload.studentId)
    if student is None:
        raise NotFoundError("Student not found")
    if payload.classId is not None and payload.classId != student.classId:
        raise ValidationError(f"Student {student.id} does not belong to class {payload.classId}")

    table_name = table_name_for_class(student.class_)
    if not db.marks_table_exists(table_name):
        raise ValidationError("This class has no subjects yet; add subjects before entering marks")
    available = set(_score_columns(db, table_name))

    scores: Dict[str, Optional[int]] = {}
    for key, value in payload.marks.items():
        if key in RESERVED_COLUMNS:
            continue
        column = column_for_key(key)
        if column not in available:
            raise ValidationError(f"Unknown assessment '{key}' for this class")
        score = _coerce_score(key, value)
        if score is not None:
            _, assessment = split_column(column)
            maximum = max_score_for(assessment)
            if not 0 <= score <= maximum:
                raise ValidationError(f"Score for '{key}' must be between 0 and {maximum}")
        scores[column] = score

    db.upsert_marks_row(table_name, student.enrollmentNumber, student.seatNumber, student.name, scores)
    logger.info("Saved %d mark(s) for student %s in %s", len(scores), student.id, table_name)
