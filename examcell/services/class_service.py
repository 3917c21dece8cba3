# /examcell/services/class_service.py

"""
This service module acts as the business logic layer for classes and the
students enrolled in them.

Routers call these functions with validated pydantic models; the functions
enforce the domain rules (existence, uniqueness), persist through the
`DatabaseService` facade and keep each class's marks table consistent with
roster changes. Rule violations are raised as `services.errors` exceptions.
"""

import logging
from typing import List, Optional

from ..models import class_model, student_model
from ..db.models.class_student_models import Class, Student
from .database_service import DatabaseService
from .errors import ConflictError, NotFoundError, ValidationError
from .marks_helpers import schema_sync
from .marks_naming import table_name_for, table_name_for_class

logger = logging.getLogger(__name__)


# --- Class Operations ---

def get_all_classes(db: DatabaseService) -> List[Class]:
    return db.get_all_classes()


def get_class_or_404(class_id: int, db: DatabaseService) -> Class:
    db_class = db.get_class_by_id(class_id)
    if db_class is None:
        raise NotFoundError("Class not found")
    return db_class


def create_class(class_data: class_model.ClassCreate, db: DatabaseService) -> Class:
    """
    Creates a class. The (department, semester, masterCode) triple must be new.
    The marks table itself is created lazily, when the first subject is added.
    """
    if db.get_class_by_natural_key(class_data.department, class_data.semester, class_data.masterCode):
        raise ConflictError("Class with the same department, semester and master code already exists")
    return db.add_class(class_data.model_dump())


def update_class(class_update: class_model.ClassUpdate, db: DatabaseService) -> Class:
    """
    Updates a class. If its natural key changes, its marks table is renamed so
    the recorded marks follow the class.
    """
    if class_update.id is None:
        raise ValidationError("Class ID is required")
    db_class = get_class_or_404(class_update.id, db)

    update_data = class_update.model_dump(exclude_unset=True, exclude={"id"}, exclude_none=True)
    if not update_data:
        raise ValidationError("No update data provided.")

    department = update_data.get("department", db_class.department)
    semester = update_data.get("semester", db_class.semester)
    master_code = update_data.get("masterCode", db_class.masterCode)
    existing = db.get_class_by_natural_key(department, semester, master_code)
    if existing is not None and existing.id != db_class.id:
        raise ConflictError("Class with the same department, semester and master code already exists")

    # The row keeps its old key until the table has moved.
    old_table = table_name_for_class(db_class)
    new_table = table_name_for(department, semester, master_code)
    schema_sync.rename_class_table(db, old_table, new_table)
    try:
        return db.update_class(db_class.id, update_data)
    except Exception:
        logger.warning("Class %s update failed; moving %s back to %s", db_class.id, new_table, old_table)
        schema_sync.rename_class_table(db, new_table, old_table)
        raise


def delete_class(class_id: Optional[int], db: DatabaseService) -> None:
    """
    Drops the class's marks table, then deletes the class with its students
    and subjects. A failed drop leaves the class in place for a retry.
    """
    if class_id is None:
        raise ValidationError("Class ID is required")
    db_class = get_class_or_404(class_id, db)
    table_name = table_name_for_class(db_class)
    schema_sync.drop_class_table(db, table_name)
    db.delete_class(class_id)
    logger.info("Deleted class %s and marks table %s", class_id, table_name)


# --- Student Operations ---

def get_students(db: DatabaseService, class_id: Optional[int] = None) -> List[Student]:
    return db.get_all_students(class_id=class_id)


def create_student(student_data: student_model.StudentCreate, db: DatabaseService) -> Student:
    """
    Enrolls a student. Seat and enrollment numbers must be unused by every
    other student in every class; a clash is a ConflictError and nothing is
    inserted.
    """
    get_class_or_404(student_data.classId, db)
    if db.find_student_by_seat_or_enrollment(student_data.seatNumber, student_data.enrollmentNumber):
        logger.warning("Duplicate student seat=%s enrollment=%s", student_data.seatNumber, student_data.enrollmentNumber)
        raise ConflictError("Student with the same seat number or enrollment number already exists")
    return db.add_student(student_data.model_dump())


def update_student(student_update: student_model.StudentUpdate, db: DatabaseService) -> Student:
    """
    Updates a student's details and carries the change into the marks table:
    within the same class the row is re-keyed, after a class change the row in
    the old class's table is removed.
    """
    if student_update.id is None:
        raise ValidationError("Student ID is required")
    db_student = db.get_student_by_id(student_update.id)
    if db_student is None:
        raise NotFoundError("Student not found")

    update_data = student_update.model_dump(exclude_unset=True, exclude={"id"}, exclude_none=True)
    if not update_data:
        raise ValidationError("No update data provided.")

    new_class_id = update_data.get("classId", db_student.classId)
    if new_class_id != db_student.classId:
        get_class_or_404(new_class_id, db)

    seat_number = update_data.get("seatNumber", db_student.seatNumber)
    enrollment_number = update_data.get("enrollmentNumber", db_student.enrollmentNumber)
    if db.find_student_by_seat_or_enrollment(seat_number, enrollment_number, exclude_id=db_student.id):
        raise ConflictError("Student with the same seat number or enrollment number already exists")

    old_class_id = db_student.classId
    old_table = table_name_for_class(db_student.class_)
    old_enrollment = db_student.enrollmentNumber

    updated = db.update_student(db_student.id, update_data)

    if new_class_id == old_class_id:
        db.update_marks_identity(old_table, old_enrollment, updated.enrollmentNumber, updated.seatNumber, updated.name)
    elif db.delete_marks_row(old_table, old_enrollment):
        logger.info("Student %s moved classes; removed marks row from %s", updated.id, old_table)
    return updated


def delete_student(student_id: Optional[int], db: DatabaseService) -> None:
    if student_id is None:
        raise ValidationError("Student ID is required")
    db_student = db.get_student_by_id(student_id)
    if db_student is None:
        raise NotFoundError("Student not found")
    db.delete_marks_row(table_name_for_class(db_student.class_), db_student.enrollmentNumber)
    db.delete_student(student_id)
