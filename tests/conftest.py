# /tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from examcell.core.deps import get_current_user
from examcell.db.base import Base
from examcell.db.database import get_db
from examcell.db.models.user_model import User
from examcell.main import app
from examcell.services.database_service import DatabaseService


@pytest.fixture
def engine(tmp_path):
    """
    A fresh SQLite database file per test, with the static tables created.
    A file (not :memory:) so that every session gets its own pooled connection.
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'examcell_test.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_service(session_factory):
    """Provides a DatabaseService bound to the temporary database."""
    session = session_factory()
    try:
        yield DatabaseService(db_session=session)
    finally:
        session.close()


@pytest.fixture
def override_db(session_factory):
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_db):
    """
    An API client whose requests are already authenticated.
    Not used as a context manager, so the app lifespan (and its real database) never starts.
    """
    app.dependency_overrides[get_current_user] = lambda: User(id=1, username="tester", is_active=True)
    return TestClient(app)


@pytest.fixture
def anonymous_client(override_db):
    """An API client that goes through the real bearer-token dependency."""
    return TestClient(app)


# --- Small API helpers shared by the API tests ---

@pytest.fixture
def make_class(client):
    def _make(department="CO", semester="5", masterCode="I"):
        response = client.post("/api/classes", json={"department": department, "semester": semester, "masterCode": masterCode})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_student(client):
    def _make(class_id, name="Asha Patil", seat="S001", enrollment="E001"):
        response = client.post("/api/students", json={
            "name": name, "seatNumber": seat, "enrollmentNumber": enrollment, "classId": class_id,
        })
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_subject(client):
    def _make(class_id, code="22519", name="Data Structures", abbreviation="DSU", assessments=("FA-TH", "SA-TH")):
        response = client.post("/api/subjects", json={
            "subjectCode": code, "name": name, "abbreviation": abbreviation,
            "classId": class_id, "assessments": list(assessments),
        })
        assert response.status_code == 201, response.text
        return response.json()
    return _make
