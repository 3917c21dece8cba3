# /examcell/services/database_helpers/class_student_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Class and Student
tables. It is the direct interface to the database for all roster data.

Uniqueness rules (class natural key, student seat / enrollment numbers) are
enforced by database constraints. The services run a friendlier pre-check
first, and this layer turns a constraint violation that slipped past the
pre-check (e.g. two concurrent requests) into a ConflictError.
"""

import logging
from typing import List, Dict, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ...db.models.class_student_models import Class, Student
from ..errors import ConflictError

logger = logging.getLogger(__name__)


class ClassStudentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self, conflict_message: str):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Integrity error: %s", e.orig)
            raise ConflictError(conflict_message)

    # --- Class Methods ---

    def get_all_classes(self) -> List[Class]:
        return self.db.query(Class).order_by(Class.id).all()

    def get_class_by_id(self, class_id: int) -> Optional[Class]:
        return self.db.query(Class).filter(Class.id == class_id).first()

    def get_class_by_natural_key(self, department: str, semester: str, master_code: str) -> Optional[Class]:
        return (
            self.db.query(Class)
            .filter(Class.department == department, Class.semester == semester, Class.masterCode == master_code)
            .first()
        )

    def add_class(self, record: Dict) -> Class:
        new_class = Class(**record)
        self.db.add(new_class)
        self._commit("Class with the same department, semester and master code already exists")
        self.db.refresh(new_class)
        return new_class

    def update_class(self, class_id: int, data: Dict) -> Optional[Class]:
        db_class = self.get_class_by_id(class_id)
        if db_class:
            for key, value in data.items():
                setattr(db_class, key, value)
            self._commit("Class with the same department, semester and master code already exists")
            self.db.refresh(db_class)
        return db_class

    def delete_class(self, class_id: int) -> bool:
        db_class = self.get_class_by_id(class_id)
        if db_class:
            # The cascade defined on the model deletes the class's students and subjects.
            self.db.delete(db_class)
            self.db.commit()
            return True
        return False

    # --- Student Methods ---

    def get_all_students(self, class_id: Optional[int] = None) -> List[Student]:
        query = self.db.query(Student).options(joinedload(Student.class_))
        if class_id is not None:
            query = query.filter(Student.classId == class_id)
        return query.order_by(Student.id).all()

    def get_students_by_class_id(self, class_id: int) -> List[Student]:
        return self.get_all_students(class_id=class_id)

    def get_student_by_id(self, student_id: int) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id).first()

    def find_student_by_seat_or_enrollment(self, seat_number: str, enrollment_number: str, exclude_id: Optional[int] = None) -> Optional[Student]:
        """Global lookup: seat and enrollment numbers are unique across every class."""
        query = self.db.query(Student).filter(
            or_(Student.seatNumber == seat_number, Student.enrollmentNumber == enrollment_number)
        )
        if exclude_id is not None:
            query = query.filter(Student.id != exclude_id)
        return query.first()

    def add_student(self, record: Dict) -> Student:
        new_student = Student(**record)
        self.db.add(new_student)
        self._commit("Student with the same seat number or enrollment number already exists")
        self.db.refresh(new_student)
        return new_student

    def update_student(self, student_id: int, data: Dict) -> Optional[Student]:
        db_student = self.get_student_by_id(student_id)
        if db_student:
            for key, value in data.items():
                setattr(db_student, key, value)
            self._commit("Student with the same seat number or enrollment number already exists")
            self.db.refresh(db_student)
        return db_student

    def delete_student(self, student_id: int) -> bool:
        db_student = self.get_student_by_id(student_id)
        if db_student:
            self.db.delete(db_student)
            self.db.commit()
            return True
        return False
