# /examcell/services/report_helpers/aggregation.py

"""
Pure arithmetic behind the class result sheet.

Nothing in here touches the database: the report service loads the data and
hands plain dictionaries to these functions. Unset scores (None) always count
as 0 in sums.

Rules:
- Tags containing "SLA" are summed as SLA, then "TH" as theory, then "PR" as
  practical; any other tag is summed separately as "other".
- A subject's maximum is 50 per assessment, and it is failed when its total is
  below 40% of that maximum.
- The overall percentage is banded into a classification.
"""

from typing import Dict, Iterable, List, Optional

import pandas as pd

MARKS_PER_ASSESSMENT = 50
PASS_PERCENTAGE = 40
FIRST_CLASS_PERCENTAGE = 60
DISTINCTION_PERCENTAGE = 75

DISTINCTION = "FIRST CLASS WITH DISTINCTION"
FIRST_CLASS = "FIRST CLASS"
SECOND_CLASS = "SECOND CLASS"
FAIL = "FAIL"


def assessment_bucket(tag: str) -> str:
    if "SLA" in tag:
        return "sla"
    if "TH" in tag:
        return "theory"
    if "PR" in tag:
        return "practical"
    return "other"


def subject_max_marks(assessments: List[str]) -> int:
    return len(assessments) * MARKS_PER_ASSESSMENT


def percentage_of(total: float, maximum: float) -> float:
    if not maximum:
        return 0.0
    return total / maximum * 100


def classify(percentage: float) -> str:
    if percentage >= DISTINCTION_PERCENTAGE:
        return DISTINCTION
    if percentage >= FIRST_CLASS_PERCENTAGE:
        return FIRST_CLASS
    if percentage >= PASS_PERCENTAGE:
        return SECOND_CLASS
    return FAIL


def calculate_subject_result(scores: Dict[str, Optional[int]], assessments: List[str]) -> Dict:
    """Totals one student's scores for one subject."""
    buckets = {"theory": 0, "practical": 0, "sla": 0, "other": 0}
    for tag in assessments:
        buckets[assessment_bucket(tag)] += scores.get(tag) or 0

    total = sum(buckets.values())
    maximum = subject_max_marks(assessments)
    percentage = percentage_of(total, maximum)
    return {
        "theoryTotal": buckets["theory"],
        "practicalTotal": buckets["practical"],
        "slaTotal": buckets["sla"],
        "otherTotal": buckets["other"],
        "total": total,
        "maxMarks": maximum,
        "percentage": round(percentage, 2),
        # A subject with no assessments cannot be failed.
        "failed": maximum > 0 and percentage < PASS_PERCENTAGE,
    }


def calculate_student_result(marks_by_subject: Dict[str, Dict[str, Optional[int]]], subjects: Iterable) -> Dict:
    """
    Builds one student's per-subject results plus the overall total,
    percentage and classification. `subjects` items need `abbr` and `assessments`.
    """
    results = {}
    for subject in subjects:
        results[subject.abbr] = calculate_subject_result(marks_by_subject.get(subject.abbr, {}), subject.assessments)

    total = sum(r["total"] for r in results.values())
    maximum = sum(r["maxMarks"] for r in results.values())
    percentage = percentage_of(total, maximum)
    return {
        "results": results,
        "total": total,
        "maxMarks": maximum,
        "percentage": round(percentage, 2),
        # Bands are applied to the unrounded value.
        "classification": classify(percentage),
        "failedSubjects": [abbr for abbr, r in results.items() if r["failed"]],
    }


def _empty_summary() -> Dict:
    return {
        "appeared": 0,
        "theoryMin": None, "theoryMax": None,
        "practicalMin": None, "practicalMax": None,
        "passed": 0, "passedPercentage": 0.0,
        "aboveSixty": 0, "aboveSixtyPercentage": 0.0,
    }


def summarize_subjects(all_marks: List[Dict[str, Dict[str, Optional[int]]]], subjects: List) -> Dict[str, Dict]:
    """
    Per-subject statistics across the class.

    Only students who "appeared" (at least one non-null score in the subject)
    are counted. Percentages are against the appeared count, 0 if nobody appeared.
    """
    records = []
    for marks_by_subject in all_marks:
        for subject in subjects:
            scores = marks_by_subject.get(subject.abbr, {})
            result = calculate_subject_result(scores, subject.assessments)
            records.append({
                "abbr": subject.abbr,
                "appeared": any(scores.get(tag) is not None for tag in subject.assessments),
                "theory": result["theoryTotal"],
                "practical": result["practicalTotal"],
                "total": result["total"],
            })

    df = pd.DataFrame(records, columns=["abbr", "appeared", "theory", "practical", "total"])

    summary = {}
    for subject in subjects:
        appeared = df[(df["abbr"] == subject.abbr) & df["appeared"].astype(bool)]
        count = len(appeared)
        if count == 0:
            summary[subject.abbr] = _empty_summary()
            continue

        maximum = subject_max_marks(subject.assessments)
        passed = int((appeared["total"] >= maximum * PASS_PERCENTAGE / 100).sum())
        above_sixty = int((appeared["total"] >= maximum * FIRST_CLASS_PERCENTAGE / 100).sum())
        summary[subject.abbr] = {
            "appeared": count,
            "theoryMin": int(appeared["theory"].min()),
            "theoryMax": int(appeared["theory"].max()),
            "practicalMin": int(appeared["practical"].min()),
            "practicalMax": int(appeared["practical"].max()),
            "passed": passed,
            "passedPercentage": round(percentage_of(passed, count), 2),
            "aboveSixty": above_sixty,
            "aboveSixtyPercentage": round(percentage_of(above_sixty, count), 2),
        }
    return summary
