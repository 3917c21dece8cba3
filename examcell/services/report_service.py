# /examcell/services/report_service.py

"""
Read-only assembly of the class result sheet.

Loads the class, its students and subjects and the whole marks table, matches
each student to their row by enrollment number and delegates every number to
`report_helpers.aggregation`. Performs no writes.
"""

from typing import Optional

from ..models import report_model
from .class_service import get_class_or_404
from .database_service import DatabaseService
from .errors import ValidationError
from .marks_naming import column_name_for, table_name_for_class
from .report_helpers import aggregation


def generate_class_report(class_id: Optional[int], db: DatabaseService) -> report_model.ClassReport:
    if class_id is None:
        raise ValidationError("Class ID is required")
    db_class = get_class_or_404(class_id, db)
    students = db.get_students_by_class_id(class_id)

    subjects = [
        report_model.ReportSubject(
            code=s.subjectCode,
            name=s.name,
            abbr=s.abbreviation,
            assessments=list(s.assessments or []),
            maxMarks=aggregation.subject_max_marks(s.assessments or []),
        )
        for s in db.get_all_subjects(class_id=class_id)
    ]

    rows_by_enrollment = {
        row["enrollmentNumber"]: row for row in db.get_all_marks_rows(table_name_for_class(db_class))
    }

    student_reports = []
    all_marks = []
    for student in students:
        row = rows_by_enrollment.get(student.enrollmentNumber, {})
        marks = {
            subject.abbr: {tag: row.get(column_name_for(subject.abbr, tag)) for tag in subject.assessments}
            for subject in subjects
        }
        all_marks.append(marks)

        result = aggregation.calculate_student_result(marks, subjects)
        student_reports.append(report_model.StudentReport(
            id=student.id,
            name=student.name,
            enrollment=student.enrollmentNumber,
            seat=student.seatNumber,
            marks=marks,
            **result,
        ))

    return report_model.ClassReport(
        class_=report_model.ReportClass(
            id=db_class.id,
            department=db_class.department,
            semester=db_class.semester,
            masterCode=db_class.masterCode,
            totalStudents=len(students),
        ),
        subjects=subjects,
        students=student_reports,
        summary=aggregation.summarize_subjects(all_marks, subjects),
    )
