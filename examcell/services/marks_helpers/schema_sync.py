# /examcell/services/marks_helpers/schema_sync.py

"""
Keeps each class's marks table in step with the class's subjects.

Invariant maintained here: the score columns of `marks_<class>` are exactly
the `{ABBR}_{TAG}` pairs of the class's current subjects.

Every function takes the per-table schema lock, performs its idempotent
check-then-act DDL and commits before releasing the lock. Reconciliation is
not transactional across statements on every engine (MySQL commits each
ALTER), so a failure part-way leaves a partially reconciled table; re-running
the same subject edit repairs it because every step is idempotent.
"""

import logging
from typing import List

from ..database_service import DatabaseService
from ..marks_naming import column_name_for, columns_for_subject

logger = logging.getLogger(__name__)


def _run_schema_change(db: DatabaseService, table_names: List[str], change) -> None:
    with db.marks_schema_lock(*table_names):
        try:
            change()
            db.commit()
        except Exception:
            db.rollback()
            logger.error("Marks table reconciliation failed for %s", ", ".join(table_names))
            raise


def ensure_subject_columns(db: DatabaseService, table_name: str, abbreviation: str, assessments: List[str]) -> None:
    """Creates the class table if needed, then adds any missing columns for the subject."""
    def change():
        db.create_marks_table(table_name)
        db.add_marks_columns(table_name, columns_for_subject(abbreviation, assessments))

    _run_schema_change(db, [table_name], change)


def remove_subject_columns(db: DatabaseService, table_name: str, abbreviation: str, assessments: List[str]) -> None:
    """Drops the subject's columns. A missing table is a no-op."""
    def change():
        db.drop_marks_columns(table_name, columns_for_subject(abbreviation, assessments))

    _run_schema_change(db, [table_name], change)


def reconcile_subject_columns(
    db: DatabaseService,
    old_table: str, old_abbreviation: str, old_assessments: List[str],
    new_table: str, new_abbreviation: str, new_assessments: List[str],
) -> None:
    """
    Moves a subject's columns from its previous shape to its new one.

    - Moved to another class: the old class's columns are dropped (its marks
      belong to the old class's students) and fresh columns are added to the
      new class's table.
    - Same class: columns of assessments that survive are renamed if the
      abbreviation changed, so recorded marks are kept; columns of removed
      assessments are dropped; new assessments get new columns.
    """
    def change():
        if old_table != new_table:
            db.drop_marks_columns(old_table, columns_for_subject(old_abbreviation, old_assessments))
            db.create_marks_table(new_table)
            db.add_marks_columns(new_table, columns_for_subject(new_abbreviation, new_assessments))
            return

        db.create_marks_table(new_table)
        kept = [tag for tag in old_assessments if tag in new_assessments]
        removed = [tag for tag in old_assessments if tag not in new_assessments]
        if old_abbreviation != new_abbreviation:
            db.rename_marks_columns(new_table, {
                column_name_for(old_abbreviation, tag): column_name_for(new_abbreviation, tag) for tag in kept
            })
        db.drop_marks_columns(new_table, columns_for_subject(old_abbreviation, removed))
        db.add_marks_columns(new_table, columns_for_subject(new_abbreviation, new_assessments))

    _run_schema_change(db, [old_table, new_table], change)


def rename_class_table(db: DatabaseService, old_table: str, new_table: str) -> None:
    if old_table == new_table:
        return
    _run_schema_change(db, [old_table, new_table], lambda: db.rename_marks_table(old_table, new_table))


def drop_class_table(db: DatabaseService, table_name: str) -> None:
    _run_schema_change(db, [table_name], lambda: db.drop_marks_table(table_name))
