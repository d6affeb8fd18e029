import os
import sys
from pathlib import Path

# -------------------------------------------------------------------
# Point settings at throwaway locations BEFORE importing the app.
# -------------------------------------------------------------------
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_PATH", str(ROOT / ".pytest_logs"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from formdesk.app.main import app  # noqa: E402
from formdesk.db import Base  # noqa: E402
from formdesk.db.session import enable_sqlite_fk, get_db  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_fk(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestSession = sessionmaker(autoflush=False, bind=engine)

    def _get_db():
        session = TestSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_form(client):
    """
    Returns a factory that creates a form through the API and returns its JSON.
    """

    def _make(fields, title="Contact"):
        resp = client.post("/forms", json={"title": title, "fields": fields})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
