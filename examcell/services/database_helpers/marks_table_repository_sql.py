# /examcell/services/database_helpers/marks_table_repository_sql.py

"""
This module is the direct interface to the dynamically shaped, per-class
marks tables (`marks_<dept>_<sem>_<master>`).

It has two halves:
1. Schema operations (create / rename / drop the table, add / rename / drop
   score columns). DDL is emitted through alembic's `Operations` bound to the
   session's own connection, the same `op.add_column` / `op.drop_column` API
   our migration scripts use, so identifiers are always quoted by the dialect.
2. Row operations (read, upsert, re-key and delete one student's row), built
   on a reflected `Table` with SQLAlchemy Core.

Identifiers passed in here must already have been produced by
`services.marks_naming`; this layer does not re-validate them.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import Column, Integer, MetaData, String, Table, delete, inspect, select, update
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError

logger = logging.getLogger(__name__)

# One lock per marks table. Schema reconciliation is check-then-act, so two
# requests altering the same table must not interleave. Entries are never
# removed; there is one per class name ever used by this process.
_locks_guard = threading.Lock()
_table_locks: Dict[str, threading.Lock] = {}


def _lock_for(table_name: str) -> threading.Lock:
    with _locks_guard:
        return _table_locks.setdefault(table_name, threading.Lock())


class MarksTableRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    @contextmanager
    def schema_lock(self, *table_names: str) -> Iterator[None]:
        """Holds the locks of every named table, always acquired in sorted order."""
        locks = [_lock_for(name) for name in sorted(set(table_names))]
        for lock in locks:
            lock.acquire()
        try:
            yield
        finally:
            for lock in reversed(locks):
                lock.release()

    # --- Introspection ---

    def _operations(self) -> Operations:
        return Operations(MigrationContext.configure(self.db.connection()))

    def _reflect(self, table_name: str) -> Table:
        return Table(table_name, MetaData(), autoload_with=self.db.connection())

    def table_exists(self, table_name: str) -> bool:
        return inspect(self.db.connection()).has_table(table_name)

    def get_column_names(self, table_name: str) -> List[str]:
        if not self.table_exists(table_name):
            return []
        return [column["name"] for column in inspect(self.db.connection()).get_columns(table_name)]

    # --- Schema Methods ---

    def create_table(self, table_name: str) -> bool:
        """Creates the marks table if it is missing. Returns True if it was created."""
        if self.table_exists(table_name):
            return False
        self._operations().create_table(
            table_name,
            Column("id", Integer, primary_key=True, autoincrement=True),
            Column("enrollmentNumber", String(255), nullable=False, unique=True),
            Column("seatNumber", String(255), nullable=False, unique=True),
            Column("name", String(255), nullable=False),
        )
        logger.info("Created marks table %s", table_name)
        return True

    def add_score_columns(self, table_name: str, columns: List[str]) -> List[str]:
        existing = set(self.get_column_names(table_name))
        op = self._operations()
        added = []
        for column in columns:
            if column in existing or column in added:
                continue
            op.add_column(table_name, Column(column, Integer, nullable=True))
            added.append(column)
            logger.info("Added column %s to %s", column, table_name)
        return added

    def drop_score_columns(self, table_name: str, columns: List[str]) -> List[str]:
        existing = set(self.get_column_names(table_name))
        if not existing:
            return []
        op = self._operations()
        dropped = []
        for column in columns:
            if column not in existing or column in dropped:
                continue
            op.drop_column(table_name, column)
            dropped.append(column)
            logger.info("Dropped column %s from %s", column, table_name)
        return dropped

    def rename_score_columns(self, table_name: str, renames: Dict[str, str]) -> Dict[str, str]:
        """Renames `old -> new` columns that exist and whose target name is free."""
        existing = set(self.get_column_names(table_name))
        op = self._operations()
        renamed = {}
        for old, new in renames.items():
            if old == new or old not in existing or new in existing:
                continue
            op.alter_column(
                table_name, old,
                new_column_name=new,
                existing_type=Integer(),
                existing_nullable=True,
            )
            existing.discard(old)
            existing.add(new)
            renamed[old] = new
            logger.info("Renamed column %s to %s in %s", old, new, table_name)
        return renamed

    def rename_table(self, old_name: str, new_name: str) -> bool:
        if old_name == new_name or not self.table_exists(old_name):
            return False
        self._operations().rename_table(old_name, new_name)
        logger.info("Renamed marks table %s to %s", old_name, new_name)
        return True

    def drop_table(self, table_name: str) -> bool:
        if not self.table_exists(table_name):
            return False
        self._operations().drop_table(table_name)
        logger.info("Dropped marks table %s", table_name)
        return True

    # --- Row Methods ---

    def get_all_rows(self, table_name: str) -> List[Dict]:
        if not self.table_exists(table_name):
            return []
        table = self._reflect(table_name)
        result = self.db.connection().execute(select(table))
        return [dict(row) for row in result.mappings()]

    def get_row(self, table_name: str, enrollment_number: str) -> Optional[Dict]:
        if not self.table_exists(table_name):
            return None
        table = self._reflect(table_name)
        row = self.db.connection().execute(
            select(table).where(table.c.enrollmentNumber == enrollment_number)
        ).mappings().first()
        return dict(row) if row is not None else None

    def upsert_row(self, table_name: str, enrollment_number: str, seat_number: str, name: str, scores: Dict[str, Optional[int]]):
        """
        Inserts the student's row or, if the enrollment number already has one,
        updates the denormalised identity fields and only the supplied score columns.
        One native statement on SQLite, PostgreSQL and MySQL; other dialects are rejected.
        """
        table = self._reflect(table_name)
        values = {"enrollmentNumber": enrollment_number, "seatNumber": seat_number, "name": name, **scores}
        update_columns = ["seatNumber", "name", *scores.keys()]
        dialect = self.db.connection().dialect.name

        if dialect == "mysql":
            stmt = mysql.insert(table).values(**values)
            stmt = stmt.on_duplicate_key_update({c: stmt.inserted[c] for c in update_columns})
        elif dialect in ("sqlite", "postgresql"):
            insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
            stmt = insert(table).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[table.c.enrollmentNumber],
                set_={c: stmt.excluded[c] for c in update_columns},
            )
        else:
            raise NotImplementedError(f"Marks upsert is not supported on the '{dialect}' dialect")

        try:
            self.db.connection().execute(stmt)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Marks upsert rejected for %s in %s: %s", enrollment_number, table_name, e.orig)
            raise ConflictError(f"Seat number '{seat_number}' is already used by another marks row")
        self.db.commit()

    def update_identity(self, table_name: str, old_enrollment_number: str, enrollment_number: str, seat_number: str, name: str) -> int:
        """Keeps a row's denormalised student fields in step with the Student record."""
        if not self.table_exists(table_name):
            return 0
        table = self._reflect(table_name)
        result = self.db.connection().execute(
            update(table)
            .where(table.c.enrollmentNumber == old_enrollment_number)
            .values(enrollmentNumber=enrollment_number, seatNumber=seat_number, name=name)
        )
        self.db.commit()
        return result.rowcount

    def delete_row(self, table_name: str, enrollment_number: str) -> int:
        if not self.table_exists(table_name):
            return 0
        table = self._reflect(table_name)
        result = self.db.connection().execute(
            delete(table).where(table.c.enrollmentNumber == enrollment_number)
        )
        self.db.commit()
        return result.rowcount
