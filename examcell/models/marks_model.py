# /examcell/models/marks_model.py

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .subject_model import Subject


class MarksSave(BaseModel):
    """
    Body of `POST /api/marks`.

    `marks` maps a marks key (`DSU-FA-TH` or `DSU_FA-TH`) to a score, or to
    null to clear it. Only the supplied keys are written.
    """
    studentId: int
    classId: Optional[int] = Field(default=None, description="Optional; must match the student's class when given.")
    marks: Dict[str, Any] = Field(default_factory=dict)


class MarksResponse(BaseModel):
    """
    For one student `marks` is `{key: score}`; for a whole class it is
    `{studentId: {key: score}}`.
    """
    subjects: List[Subject]
    marks: Dict[str, Any]
