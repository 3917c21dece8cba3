# /tests/test_schema_sync.py

import threading

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, inspect, text

from examcell.services.database_helpers.marks_table_repository_sql import MarksTableRepositorySQL
from examcell.services.database_service import DatabaseService
from examcell.services.marks_helpers import schema_sync
from examcell.services.marks_naming import RESERVED_COLUMNS

TABLE = "marks_co_5_i"


def _columns(engine, table=TABLE):
    inspector = inspect(engine)
    if not inspector.has_table(table):
        return None
    return {c["name"]: c for c in inspector.get_columns(table)}


def _score_columns(engine, table=TABLE):
    return set(_columns(engine, table)) - RESERVED_COLUMNS


def test_ensure_creates_table_and_nullable_integer_columns(db_service, engine):
    """
    GIVEN: a class whose marks table does not exist yet.
    WHEN:  a subject DSU with FA-TH and SA-TH is synced.
    THEN:  the table exists with the reserved columns plus DSU_FA_TH and DSU_SA_TH.
    """
    assert _columns(engine) is None

    schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH", "SA-TH"])

    columns = _columns(engine)
    assert RESERVED_COLUMNS <= set(columns)
    assert _score_columns(engine) == {"DSU_FA_TH", "DSU_SA_TH"}
    for name in ("DSU_FA_TH", "DSU_SA_TH"):
        assert columns[name]["nullable"] is True
        assert isinstance(columns[name]["type"], Integer)
    print("\n✅ SUCCESS: test_ensure_creates_table_and_nullable_integer_columns passed.")


def test_ensure_is_idempotent(db_service, engine):
    schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH", "SA-TH"])
    before = _columns(engine)

    schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH", "SA-TH"])

    assert _columns(engine).keys() == before.keys()


def test_removing_one_assessment_drops_exactly_its_column(db_service, engine):
    schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH", "SA-TH"])
    schema_sync.ensure_subject_columns(db_service, TABLE, "OSY", ["FA-PR", "SA-PR"])

    schema_sync.reconcile_subject_columns(
        db_service,
        TABLE, "DSU", ["FA-TH", "SA-TH"],
        TABLE, "DSU", ["FA-TH"],
    )

    assert _score_columns(engine) == {"DSU_FA_TH", "OSY_FA_PR", "OSY_SA_PR"}


def test_remove_subject_columns_leaves_table_and_other_subjects(db_service, engine):
    schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH", "SA-TH"])
    schema_sync.ensure_subject_columns(db_service, TABLE, "OSY", ["SLA"])

    schema_sync.remove_subject_columns(db_service, TABLE, "DSU", ["FA-TH", "SA-TH"])
    # A second removal is a no-op.
    schema_sync.remove_subject_columns(db_service, TABLE, "DSU", ["FA-TH", "SA-TH"])

    assert _score_columns(engine) == {"OSY_SLA"}


def test_remove_on_missing_table_is_a_noop(db_service, engine):
    schema_sync.remove_subject_columns(db_service, "marks_it_1_k", "DSU", ["FA-TH"])
    assert _columns(engine, "marks_it_1_k") is None


def test_abbreviation_change_keeps_recorded_marks(db_service, engine):
    schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH", "SA-TH"])
    db_service.upsert_marks_row(TABLE, "E001", "S001", "Asha", {"DSU_FA_TH": 25, "DSU_SA_TH": 60})

    schema_sync.reconcile_subject_columns(
        db_service,
        TABLE, "DSU", ["FA-TH", "SA-TH"],
        TABLE, "DS", ["FA-TH", "SA-TH", "SLA"],
    )

    assert _score_columns(engine) == {"DS_FA_TH", "DS_SA_TH", "DS_SLA"}
    with engine.connect() as connection:
        row = connection.execute(text(f"SELECT DS_FA_TH, DS_SA_TH, DS_SLA FROM {TABLE}")).one()
    assert tuple(row) == (25, 60, None)


def test_moving_subject_to_another_class(db_service, engine):
    other = "marks_co_6_i"
    schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH"])

    schema_sync.reconcile_subject_columns(
        db_service,
        TABLE, "DSU", ["FA-TH"],
        other, "DSU", ["FA-TH", "SA-TH"],
    )

    assert _score_columns(engine) == set()
    assert _score_columns(engine, other) == {"DSU_FA_TH", "DSU_SA_TH"}


def test_rename_and_drop_class_table(db_service, engine):
    schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH"])

    schema_sync.rename_class_table(db_service, TABLE, "marks_co_5_k")
    assert _columns(engine) is None
    assert _score_columns(engine, "marks_co_5_k") == {"DSU_FA_TH"}

    schema_sync.drop_class_table(db_service, "marks_co_5_k")
    assert _columns(engine, "marks_co_5_k") is None


def test_failed_schema_change_is_reraised(db_service, mocker):
    mocker.patch.object(db_service, "add_marks_columns", side_effect=RuntimeError("disk full"))
    rollback = mocker.spy(db_service, "rollback")

    with pytest.raises(RuntimeError):
        schema_sync.ensure_subject_columns(db_service, TABLE, "DSU", ["FA-TH"])

    rollback.assert_called_once()


def test_schema_changes_on_one_table_are_serialized(db_service, session_factory, engine):
    """
    GIVEN: one request holding the schema lock of a marks table.
    WHEN:  another request tries to add columns to the same table.
    THEN:  the second change waits until the lock is released, then completes.
    """
    errors = []

    def add_subject_in_other_request():
        session = session_factory()
        try:
            schema_sync.ensure_subject_columns(DatabaseService(db_session=session), TABLE, "DSU", ["FA-TH"])
        except Exception as e:
            errors.append(e)
        finally:
            session.close()

    worker = threading.Thread(target=add_subject_in_other_request)
    with db_service.marks_schema_lock(TABLE):
        worker.start()
        worker.join(timeout=0.3)
        assert worker.is_alive()
        assert _columns(engine) is None

    worker.join(timeout=5)
    assert not worker.is_alive()
    assert errors == []
    assert _score_columns(engine) == {"DSU_FA_TH"}
    print("\n✅ SUCCESS: test_schema_changes_on_one_table_are_serialized passed.")


def test_upsert_rejects_unsupported_dialect(mocker):
    session = mocker.MagicMock()
    session.connection.return_value.dialect.name = "oracle"
    repo = MarksTableRepositorySQL(session)
    table = Table(
        TABLE, MetaData(),
        Column("enrollmentNumber", String(255)), Column("seatNumber", String(255)), Column("name", String(255)),
        Column("DSU_FA_TH", Integer),
    )
    mocker.patch.object(repo, "_reflect", return_value=table)

    with pytest.raises(NotImplementedError):
        repo.upsert_row(TABLE, "E001", "S001", "Asha", {"DSU_FA_TH": 10})

    session.connection.return_value.execute.assert_not_called()
    session.commit.assert_not_called()
