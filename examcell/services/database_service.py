# /examcell/services/database_service.py

from typing import List, Dict, Optional, Generator
from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from ..db.database import get_db

# --- Repository Imports ---
from .database_helpers.class_student_repository_sql import ClassStudentRepositorySQL
from .database_helpers.subject_repository_sql import SubjectRepositorySQL
from .database_helpers.marks_table_repository_sql import MarksTableRepositorySQL
from .database_helpers.user_repository_sql import UserRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Initializes the DatabaseService.
        All repositories share the one session (and pooled connection) of the request.
        """
        if db_session is None:
            raise ValueError("A database session is required.")
        self.session = db_session
        self.class_student_repo = ClassStudentRepositorySQL(db_session)
        self.subject_repo = SubjectRepositorySQL(db_session)
        self.marks_repo = MarksTableRepositorySQL(db_session)
        self.user_repo = UserRepositorySQL(db_session)

    # --- TRANSACTION CONTROL ---
    def commit(self): self.session.commit()
    def rollback(self): self.session.rollback()

    # --- CLASS & STUDENT METHODS (DELEGATED) ---
    def get_all_classes(self) -> List: return self.class_student_repo.get_all_classes()
    def get_class_by_id(self, class_id: int): return self.class_student_repo.get_class_by_id(class_id)
    def get_class_by_natural_key(self, department: str, semester: str, master_code: str): return self.class_student_repo.get_class_by_natural_key(department, semester, master_code)
    def add_class(self, class_record: Dict): return self.class_student_repo.add_class(class_record)
    def update_class(self, class_id: int, class_update_data: Dict): return self.class_student_repo.update_class(class_id, class_update_data)
    def delete_class(self, class_id: int) -> bool: return self.class_student_repo.delete_class(class_id)
    def get_all_students(self, class_id: Optional[int] = None) -> List: return self.class_student_repo.get_all_students(class_id=class_id)
    def get_students_by_class_id(self, class_id: int) -> List: return self.class_student_repo.get_students_by_class_id(class_id)
    def get_student_by_id(self, student_id: int): return self.class_student_repo.get_student_by_id(student_id)
    def find_student_by_seat_or_enrollment(self, seat_number: str, enrollment_number: str, exclude_id: Optional[int] = None): return self.class_student_repo.find_student_by_seat_or_enrollment(seat_number, enrollment_number, exclude_id)
    def add_student(self, student_record: Dict): return self.class_student_repo.add_student(student_record)
    def update_student(self, student_id: int, student_update_data: Dict): return self.class_student_repo.update_student(student_id, student_update_data)
    def delete_student(self, student_id: int) -> bool: return self.class_student_repo.delete_student(student_id)

    # --- SUBJECT METHODS (DELEGATED) ---
    def get_all_subjects(self, class_id: Optional[int] = None) -> List: return self.subject_repo.get_all_subjects(class_id=class_id)
    def get_subject_by_id(self, subject_id: int): return self.subject_repo.get_subject_by_id(subject_id)
    def get_subject_by_code(self, subject_code: str): return self.subject_repo.get_subject_by_code(subject_code)
    def get_subject_by_abbreviation(self, class_id: int, abbreviation: str): return self.subject_repo.get_subject_by_abbreviation(class_id, abbreviation)
    def add_subject(self, subject_record: Dict): return self.subject_repo.add_subject(subject_record)
    def update_subject(self, subject_id: int, subject_update_data: Dict): return self.subject_repo.update_subject(subject_id, subject_update_data)
    def delete_subject(self, subject_id: int) -> bool: return self.subject_repo.delete_subject(subject_id)

    # --- MARKS TABLE METHODS (DELEGATED) ---
    def marks_schema_lock(self, *table_names: str): return self.marks_repo.schema_lock(*table_names)
    def marks_table_exists(self, table_name: str) -> bool: return self.marks_repo.table_exists(table_name)
    def get_marks_columns(self, table_name: str) -> List[str]: return self.marks_repo.get_column_names(table_name)
    def create_marks_table(self, table_name: str) -> bool: return self.marks_repo.create_table(table_name)
    def add_marks_columns(self, table_name: str, columns: List[str]) -> List[str]: return self.marks_repo.add_score_columns(table_name, columns)
    def drop_marks_columns(self, table_name: str, columns: List[str]) -> List[str]: return self.marks_repo.drop_score_columns(table_name, columns)
    def rename_marks_columns(self, table_name: str, renames: Dict[str, str]) -> Dict[str, str]: return self.marks_repo.rename_score_columns(table_name, renames)
    def rename_marks_table(self, old_name: str, new_name: str) -> bool: return self.marks_repo.rename_table(old_name, new_name)
    def drop_marks_table(self, table_name: str) -> bool: return self.marks_repo.drop_table(table_name)
    def get_all_marks_rows(self, table_name: str) -> List[Dict]: return self.marks_repo.get_all_rows(table_name)
    def get_marks_row(self, table_name: str, enrollment_number: str) -> Optional[Dict]: return self.marks_repo.get_row(table_name, enrollment_number)
    def upsert_marks_row(self, table_name: str, enrollment_number: str, seat_number: str, name: str, scores: Dict[str, Optional[int]]): return self.marks_repo.upsert_row(table_name, enrollment_number, seat_number, name, scores)
    def update_marks_identity(self, table_name: str, old_enrollment_number: str, enrollment_number: str, seat_number: str, name: str) -> int: return self.marks_repo.update_identity(table_name, old_enrollment_number, enrollment_number, seat_number, name)
    def delete_marks_row(self, table_name: str, enrollment_number: str) -> int: return self.marks_repo.delete_row(table_name, enrollment_number)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_username(self, username: str): return self.user_repo.get_user_by_username(username)
    def add_user(self, user_record: Dict): return self.user_repo.add_user(user_record)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService bound to the request's session.
    """
    yield DatabaseService(db_session=db)
