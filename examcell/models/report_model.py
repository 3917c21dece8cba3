# /examcell/models/report_model.py

"""
Response contract of `GET /api/report`: read-only presentation data for the
printable class result sheet.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ReportClass(BaseModel):
    id: int
    department: str
    semester: str
    masterCode: str
    totalStudents: int


class ReportSubject(BaseModel):
    code: str
    name: str
    abbr: str
    assessments: List[str]
    maxMarks: int


class SubjectResult(BaseModel):
    theoryTotal: int = 0
    practicalTotal: int = 0
    slaTotal: int = 0
    otherTotal: int = 0
    total: int = 0
    maxMarks: int = 0
    percentage: float = 0.0
    failed: bool = False


class StudentReport(BaseModel):
    id: int
    name: str
    enrollment: str
    seat: str
    marks: Dict[str, Dict[str, Optional[int]]]
    results: Dict[str, SubjectResult]
    total: int
    maxMarks: int
    percentage: float
    classification: str
    failedSubjects: List[str] = Field(default_factory=list)


class SubjectSummary(BaseModel):
    appeared: int = 0
    theoryMin: Optional[int] = None
    theoryMax: Optional[int] = None
    practicalMin: Optional[int] = None
    practicalMax: Optional[int] = None
    passed: int = 0
    passedPercentage: float = 0.0
    aboveSixty: int = 0
    aboveSixtyPercentage: float = 0.0


class ClassReport(BaseModel):
    class_: ReportClass = Field(..., serialization_alias="class")
    subjects: List[ReportSubject]
    students: List[StudentReport]
    summary: Dict[str, SubjectSummary]
