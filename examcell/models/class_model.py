# /examcell/models/class_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional

from ..services.marks_naming import normalize_class_component

# --- Model Definitions ---

class ClassBase(BaseModel):
    """
    The natural key of a class. Each part is trimmed, upper-cased and must be
    alphanumeric, because together they name the class's marks table.
    """
    department: str = Field(..., max_length=20, description="Department code, e.g. 'CO'.", examples=["CO"])
    semester: str = Field(..., max_length=20, description="Semester code, e.g. '5'.", examples=["5"])
    masterCode: str = Field(..., max_length=20, description="Program variant code, e.g. 'I'.", examples=["I"])

    @field_validator("department", "semester", "masterCode")
    @classmethod
    def _normalize(cls, value: str, info) -> str:
        return normalize_class_component(value, info.field_name)


class ClassCreate(ClassBase):
    pass


class ClassUpdate(BaseModel):
    """All fields except `id` are optional to allow partial updates."""
    id: Optional[int] = None
    department: Optional[str] = Field(default=None, max_length=20)
    semester: Optional[str] = Field(default=None, max_length=20)
    masterCode: Optional[str] = Field(default=None, max_length=20)

    @field_validator("department", "semester", "masterCode")
    @classmethod
    def _normalize(cls, value: Optional[str], info) -> Optional[str]:
        if value is None:
            return value
        return normalize_class_component(value, info.field_name)


class Class(ClassBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
