"""Pytest fixtures for ReadTrace tests."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from readtrace.main import app
from readtrace.database import Base, get_db, enable_sqlite_foreign_keys
from readtrace.services.auth import AuthService

# In-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

TEST_PASSWORD = "TestPass1!"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
event.listen(engine, "connect", enable_sqlite_foreign_keys)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with the test database."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db):
    """Create a test user."""
    auth = AuthService(db)
    return auth.create_user("reader@example.com", TEST_PASSWORD, username="reader")


@pytest.fixture
def other_user(db):
    """A second account, for ownership checks."""
    auth = AuthService(db)
    return auth.create_user("other@example.com", TEST_PASSWORD, username="other")


@pytest.fixture
def auth_headers(db, test_user):
    """Get authorization headers for test user."""
    auth = AuthService(db)
    token = auth.create_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_series(db):
    """Factory for series rows owned by a user."""
    from readtrace.models.series import UserSeries
    from readtrace.utils.normalize import normalize_title

    def _make(user, title, **fields):
        series = UserSeries(
            user_id=user.id,
            title=title,
            normalized_title=normalize_title(title),
            platform=fields.pop("platform", "mangadex"),
            **fields,
        )
        db.add(series)
        db.commit()
        db.refresh(series)
        return series

    return _make


@pytest.fixture
def make_progress(db):
    """Factory for per-platform progress rows."""
    from readtrace.models.reading_progress import ReadingProgress

    def _make(series, platform, chapter, updated_at, resume_url=None, **fields):
        record = ReadingProgress(
            user_id=series.user_id,
            series_id=series.id,
            platform=platform,
            chapter_number=chapter,
            updated_at=updated_at,
            resume_url=resume_url,
            **fields,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    return _make