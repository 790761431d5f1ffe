"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the real
database. Tables are created before each test and dropped after.

Most service tests run twice, once against the SQLAlchemy store and
once against the in-memory store, through the `store` fixture.
"""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ledger_sync.api.dependencies import get_session_store
from ledger_sync.config import Settings, get_settings
from ledger_sync.main import app
from ledger_sync.models import Base
from ledger_sync.models.base import get_db
from ledger_sync.services.session_store import SessionStore
from ledger_sync.storage.memory_store import InMemoryLedgerStore
from ledger_sync.storage.sqlalchemy_store import SqlAlchemyLedgerStore


TEST_DATABASE_URL = "sqlite:///./test.db"
TEST_API_KEY = "test-sync-key"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class FakeClock:
    """Settable clock returning naive UTC datetimes."""

    def __init__(self, start: datetime = datetime(2025, 10, 20, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(params=["sqlalchemy", "memory"])
def store(request, db_session):
    """A LedgerStore of each kind."""
    if request.param == "sqlalchemy":
        return SqlAlchemyLedgerStore(db_session)
    return InMemoryLedgerStore()


@pytest.fixture
def settings(monkeypatch):
    """Settings with a known API key and the default cutoffs."""
    monkeypatch.setenv("SYNC_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("PAYMENTS_CUTOFF_DATE", "2025-10-01")
    monkeypatch.setenv("SALES_CUTOFF_DATE", "2025-10-01")
    monkeypatch.setenv("IMPORT_FILE_SUFFIX", ".xlsx")
    return Settings()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_payload():
    """Build a snapshot payload the way the sync process sends it."""
    def _make(**overrides):
        payload = {
            "fileId": "file-001",
            "fileName": "Acme Hardware",
            "modifiedAt": "2025-10-18T09:30:00Z",
            "outstandingBalance": 1500,
            "consolidatedRows": [
                {
                    "paymentDate": "2025-10-05T00:00:00Z",
                    "disbursement": 100,
                    "balanceSnapshot": 1400,
                    "paymentTypeTag": "cash",
                    "sourceSheet": "October",
                    "sourceRow": 4,
                },
                {
                    "paymentDate": "2025-10-06T00:00:00Z",
                    "disbursement": 250,
                    "balanceSnapshot": 1150,
                },
            ],
            "saleRows": [
                {"saleDate": "2025-10-05", "totalAmount": 300},
                {"saleDate": "2025-10-07", "totalAmount": 80},
            ],
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def session_store(clock):
    return SessionStore(timedelta(hours=24), clock=clock)


@pytest.fixture
def client(db_session, settings, session_store):
    """
    Provide a test client wired to the test database, test settings
    and a fresh session store.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_session_store] = lambda: session_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TEST_API_KEY}"}
