import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import get_session
from app.main import app
from app.repositories.user_repository import (
    FixtureUserRepository,
    InMemoryUserRepository,
    SqlUserRepository,
)
from app.routes.users import get_user_repository

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. Tables dropped and recreated per test so SQL store tests are isolated
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on fresh tables"""
    from app.models.user import User  # noqa: F401

    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session


def _client_with_repository(repository_factory):
    # Override dependencies BEFORE creating TestClient so the app never uses its own engine
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_user_repository] = repository_factory
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="client")
def client_fixture():
    """Test client backed by the fixture store (nothing persists)"""
    yield from _client_with_repository(lambda: FixtureUserRepository())


@pytest.fixture(name="memory_client")
def memory_client_fixture():
    """Test client backed by one in-memory store shared across the test's requests"""
    repository = InMemoryUserRepository()
    yield from _client_with_repository(lambda: repository)


@pytest.fixture(name="sql_client")
def sql_client_fixture(session: Session):
    """Test client backed by the SQL store on the test engine"""

    def sql_repository():
        with Session(test_engine) as request_session:
            yield SqlUserRepository(request_session)

    yield from _client_with_repository(sql_repository)
