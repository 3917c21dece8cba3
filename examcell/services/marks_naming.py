# /examcell/services/marks_naming.py

"""
Typed naming rules for the per-class marks tables.

Everything that turns a class or a subject assessment into a physical SQL
identifier goes through this module. The functions are pure and validate
their inputs, so an identifier that reaches the DDL layer is always safe and
two different inputs never map to the same name.

    table_name_for("CO", "5", "I")   -> "marks_co_5_i"
    column_name_for("DSU", "FA-TH")  -> "DSU_FA_TH"
    key_for_column("DSU_FA_TH")      -> "DSU-FA-TH"
    column_for_key("DSU-FA-TH")      -> "DSU_FA_TH"
"""

import re
from typing import Dict, Iterable, List, Tuple

from .errors import ValidationError

TABLE_PREFIX = "marks"

# Columns every marks table carries; anything else is a score column.
RESERVED_COLUMNS = frozenset({"id", "enrollmentNumber", "seatNumber", "name"})

# Maximum score per assessment tag; any other tag is out of 100.
ASSESSMENT_MAX_SCORES: Dict[str, int] = {
    "FA-TH": 30,
    "SA-TH": 70,
    "FA-PR": 50,
    "SA-PR": 50,
    "SLA": 50,
}
DEFAULT_MAX_SCORE = 100

_CLASS_COMPONENT = re.compile(r"^[A-Za-z0-9]+$")
_ABBREVIATION = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
_ASSESSMENT_TAG = re.compile(r"^[A-Za-z0-9]+(-[A-Za-z0-9]+)*$")
_SCORE_COLUMN = re.compile(r"^[A-Z][A-Z0-9]*(_[A-Z0-9]+)+$")


# --- Normalisers (used by the pydantic models and by the naming functions) ---

def normalize_class_component(value: str, field: str = "value") -> str:
    value = (value or "").strip().upper()
    if not _CLASS_COMPONENT.match(value):
        raise ValidationError(f"{field} must be alphanumeric, got '{value}'")
    return value


def normalize_abbreviation(value: str) -> str:
    value = (value or "").strip().upper()
    if not _ABBREVIATION.match(value):
        raise ValidationError(
            f"Abbreviation must start with a letter and contain only letters and digits, got '{value}'"
        )
    return value


def normalize_assessment(tag: str) -> str:
    tag = (tag or "").strip().upper()
    if not _ASSESSMENT_TAG.match(tag):
        raise ValidationError(f"Invalid assessment tag '{tag}'")
    return tag


def normalize_assessments(tags: Iterable[str]) -> List[str]:
    """Normalises each tag and drops duplicates, keeping the first occurrence's position."""
    seen = []
    for tag in tags:
        normalized = normalize_assessment(tag)
        if normalized not in seen:
            seen.append(normalized)
    return seen


# --- Identifier construction ---

def table_name_for(department: str, semester: str, master_code: str) -> str:
    parts = [
        normalize_class_component(department, "department"),
        normalize_class_component(semester, "semester"),
        normalize_class_component(master_code, "masterCode"),
    ]
    return f"{TABLE_PREFIX}_{'_'.join(parts)}".lower().replace("-", "_")


def table_name_for_class(class_obj) -> str:
    return table_name_for(class_obj.department, class_obj.semester, class_obj.masterCode)


def column_name_for(abbreviation: str, assessment: str) -> str:
    return f"{normalize_abbreviation(abbreviation)}_{normalize_assessment(assessment).replace('-', '_')}"


def columns_for_subject(abbreviation: str, assessments: Iterable[str]) -> List[str]:
    return [column_name_for(abbreviation, tag) for tag in assessments]


# --- API key <-> column translation ---

def key_for_column(column: str) -> str:
    return column.replace("_", "-")


def column_for_key(key: str) -> str:
    """
    Translates a user-facing marks key back to its column name.

    Accepts the fully hyphenated form returned by reads (`DSU-FA-TH`) as well
    as the form the mark-entry form builds (`DSU_FA-TH`).
    """
    column = (key or "").strip().upper().replace("-", "_")
    if not _SCORE_COLUMN.match(column):
        raise ValidationError(f"Invalid marks key '{key}'")
    return column


def split_column(column: str) -> Tuple[str, str]:
    """Splits `DSU_FA_TH` into ("DSU", "FA-TH")."""
    abbreviation, _, rest = column.partition("_")
    return abbreviation, rest.replace("_", "-")


def max_score_for(assessment: str) -> int:
    return ASSESSMENT_MAX_SCORES.get(assessment.upper(), DEFAULT_MAX_SCORE)
