# /examcell/db/models/class_student_models.py

"""
This module defines the SQLAlchemy ORM models for the `Class` and `Student`
entities. A class is one department/semester/master-code cohort; a student
belongs to exactly one class.
"""

from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base


class Class(Base):
    """
    SQLAlchemy model representing a class (cohort).

    The natural key (department, semester, masterCode) is unique at the
    database level and is also what the per-class marks table is named after.
    """
    __tablename__ = "classes"
    __table_args__ = (
        UniqueConstraint("department", "semester", "master_code", name="uq_classes_natural_key"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    department = Column(String(20), nullable=False)
    semester = Column(String(20), nullable=False)
    masterCode = Column("master_code", String(20), nullable=False)

    # Deleting a Class removes its students and subjects through the ORM cascade.
    # Its marks table is dropped separately by the schema manager.
    students = relationship("Student", back_populates="class_", cascade="all, delete-orphan")
    subjects = relationship("Subject", back_populates="class_", cascade="all, delete-orphan")


class Student(Base):
    """
    SQLAlchemy model representing a single student within a Class.
    """
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), index=True, nullable=False)
    # Both numbers are unique across the whole institution, not per class.
    seatNumber = Column("seat_number", String(255), unique=True, index=True, nullable=False)
    enrollmentNumber = Column("enrollment_number", String(255), unique=True, index=True, nullable=False)

    classId = Column("class_id", Integer, ForeignKey("classes.id"), nullable=False, index=True)

    class_ = relationship("Class", back_populates="students")
