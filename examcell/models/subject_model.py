# /examcell/models/subject_model.py

import json
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from .class_model import Class
from ..services.marks_naming import normalize_abbreviation, normalize_assessments


def _parse_assessments(value: Any) -> Any:
    # The mark-entry client historically posts the list as a JSON-encoded string.
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            raise ValueError("assessments must be a list or a JSON-encoded list")
    return value


class SubjectBase(BaseModel):
    subjectCode: str = Field(..., min_length=1, max_length=50, description="Globally unique subject code.")
    name: str = Field(..., min_length=1, max_length=255)
    abbreviation: str = Field(..., max_length=20, description="Prefix of this subject's marks columns.")
    classId: int
    assessments: List[str] = Field(default_factory=list, description="Ordered assessment tags, e.g. ['FA-TH', 'SA-TH'].")


class SubjectCreate(SubjectBase):
    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("abbreviation")
    @classmethod
    def _normalize_abbreviation(cls, value: str) -> str:
        return normalize_abbreviation(value)

    @field_validator("assessments", mode="before")
    @classmethod
    def _parse(cls, value: Any) -> Any:
        return _parse_assessments(value)

    @field_validator("assessments")
    @classmethod
    def _normalize_assessments(cls, value: List[str]) -> List[str]:
        return normalize_assessments(value)


class SubjectUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = None
    subjectCode: Optional[str] = Field(default=None, min_length=1, max_length=50)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    abbreviation: Optional[str] = Field(default=None, max_length=20)
    classId: Optional[int] = None
    assessments: Optional[List[str]] = None

    @field_validator("abbreviation")
    @classmethod
    def _normalize_abbreviation(cls, value: Optional[str]) -> Optional[str]:
        return normalize_abbreviation(value) if value is not None else value

    @field_validator("assessments", mode="before")
    @classmethod
    def _parse(cls, value: Any) -> Any:
        return _parse_assessments(value)

    @field_validator("assessments")
    @classmethod
    def _normalize_assessments(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return normalize_assessments(value) if value is not None else value


class Subject(SubjectBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    class_: Optional[Class] = Field(default=None, serialization_alias="class")
