import os

# Keep the application's default engine off the working directory during tests.
os.environ["DATABASE_URL"] = "sqlite+pysqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import relief.models  # noqa: F401
from relief.api.deps import get_db
from relief.core.config import get_settings
from relief.db.base import Base
from relief.main import app
from relief.services.store import ReliefStore

from factories import slot, teacher


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def settings(monkeypatch, tmp_path):
    current = get_settings()
    monkeypatch.setattr(current, "export_dir", str(tmp_path / "exports"))
    return current


@pytest.fixture()
def school():
    """A, B teach Math (A is loaded), C teaches Science; A teaches 6-A in period 3."""
    return ReliefStore(
        teachers=[
            teacher("A", ["Math"], workload=2, name="Anura"),
            teacher("B", ["Math"], workload=0, name="Bimali"),
            teacher("C", ["Science"], workload=0, name="Chamara"),
        ],
        timetable=[slot("s1", 3, "A", "Math", class_name="6-A")],
    )
