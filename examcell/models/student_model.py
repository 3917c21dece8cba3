# /examcell/models/student_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from .class_model import Class

# --- Model Definitions ---

class StudentBase(BaseModel):
    """
    The base model for a Student. Contains fields common to create and read operations.
    """
    name: str = Field(..., min_length=1, max_length=255, description="The full name of the student.")
    seatNumber: str = Field(..., min_length=1, max_length=255, description="Exam seat number, unique across the institution.")
    enrollmentNumber: str = Field(..., min_length=1, max_length=255, description="Enrollment number, unique across the institution.")
    classId: int = Field(..., description="The ID of the class this student belongs to.")


class StudentCreate(StudentBase):
    """The model used for creating a new student. Inherits all fields from the base."""
    model_config = ConfigDict(str_strip_whitespace=True)


class StudentUpdate(BaseModel):
    """
    The model for updating a student. All fields except `id` are optional to
    allow for partial updates.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    seatNumber: Optional[str] = Field(default=None, min_length=1, max_length=255)
    enrollmentNumber: Optional[str] = Field(default=None, min_length=1, max_length=255)
    classId: Optional[int] = None


class Student(StudentBase):
    """
    The full representation of a Student resource, as it is stored in the
    database and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="The unique, server-generated identifier for the student.")
    class_: Optional[Class] = Field(default=None, serialization_alias="class")
