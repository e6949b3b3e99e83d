"""Shared test fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from slotpoll.main import app
from slotpoll.db.base import Base
from slotpoll.api.deps import get_db
from slotpoll.core.rate_limit import limiter
from slotpoll.core.security import create_user_token
from slotpoll.store import SqlRecordStore


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

DEFAULT_PASSWORD = "correct horse"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    limiter.reset()
    # Rate limit tests are marked with @pytest.mark.rate_limit
    limiter.enabled = "rate_limit" in request.keywords
    yield
    limiter.enabled = True
    limiter.reset()


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_session):
    """SQL record store over the test database."""
    return SqlRecordStore(db_session)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """
    Register users through the API.

    Returns a callable ``signup(email) -> (user_id, headers)``; the headers
    carry a Bearer token so several users can share one client.
    """
    def _signup(email, password=DEFAULT_PASSWORD):
        response = client.post("/api/v1/auth/register", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        client.cookies.clear()
        user_id = response.json()["user_id"]
        return user_id, {"Authorization": f"Bearer {create_user_token(user_id, email)}"}

    return _signup


@pytest.fixture
def owner(signup):
    """Registered poll owner: ``(user_id, headers)``."""
    return signup("owner@example.com")


@pytest.fixture
def guest(signup):
    """Second registered user: ``(user_id, headers)``."""
    return signup("guest@example.com")


@pytest.fixture
def stranger(signup):
    """Registered user never invited to anything: ``(user_id, headers)``."""
    return signup("stranger@example.com")
