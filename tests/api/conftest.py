"""Shared fixtures for router tests using FastAPI TestClient."""

import uuid
from contextlib import ExitStack
from datetime import date, datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from report_tracker.models.report_status import ReportStatus
from report_tracker.services.auth_service import AuthService

TEST_JWT_SECRET = "api-test-secret-key-that-is-long-enough"


def pytest_collection_modifyitems(items):
    """Apply api marker to all tests in this directory."""
    for item in items:
        if "/api/" in str(item.fspath):
            item.add_marker(pytest.mark.api)


# Keep the lifespan away from a real database
@pytest.fixture(autouse=True)
def mock_database_init(artifact_store):
    with ExitStack() as stack:
        stack.enter_context(patch("report_tracker.main.init_db", new_callable=AsyncMock))
        mock_engine = stack.enter_context(patch("report_tracker.main.engine"))
        mock_engine.dispose = AsyncMock()
        stack.enter_context(
            patch("report_tracker.main.get_artifact_store", return_value=artifact_store)
        )
        yield


@pytest.fixture
def mock_db_session():
    """Create a mock AsyncSession for router tests."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock(return_value=Mock())
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def mock_report_service():
    """Create a mock ReportService."""
    service = AsyncMock()
    service.list_reports = AsyncMock(return_value=[])
    service.create_report = AsyncMock()
    service.get_report = AsyncMock()
    service.read_report_file = AsyncMock()
    service.update_report_status = AsyncMock()
    service.delete_report = AsyncMock(return_value=None)
    return service


@pytest.fixture
def auth_service():
    return AuthService(secret_key=TEST_JWT_SECRET, expiration_minutes=30)


@pytest.fixture
def mock_user(owner_id):
    """Create a mock User with a known password."""
    from report_tracker.models.user import User

    user = Mock(spec=User)
    user.id = owner_id
    user.email = "patient@example.com"
    user.password_hash = AuthService.hash_password("s3cret-pass")
    user.role = "USER"
    return user


@pytest.fixture
def mock_user_repo(mock_user):
    """Create a mock UserRepository that knows mock_user."""
    repo = AsyncMock()

    async def get_by_email(email):
        return mock_user if email == mock_user.email else None

    async def get_by_id(user_id):
        return mock_user if user_id == mock_user.id else None

    repo.get_by_email = AsyncMock(side_effect=get_by_email)
    repo.get_by_id = AsyncMock(side_effect=get_by_id)
    return repo


def _create_test_client(
    mock_db_session,
    mock_report_service,
    mock_user_repo,
    auth_service,
    artifact_store,
    *,
    current_user_id=None,
):
    """Build a TestClient with infra dependencies overridden.

    When current_user_id is provided, bearer token verification is bypassed.
    When omitted, auth dependencies run normally so tests can assert 401
    behaviour.
    """
    from report_tracker.main import app
    from report_tracker.database import get_db
    from report_tracker.dependencies import (
        get_current_user_id,
        get_report_service_dep,
        get_user_repository,
    )
    from report_tracker.factories.service_factories import get_artifact_store
    from report_tracker.services.auth_service import get_auth_service

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield mock_db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_report_service_dep] = lambda: mock_report_service
    app.dependency_overrides[get_user_repository] = lambda: mock_user_repo
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_artifact_store] = lambda: artifact_store

    if current_user_id is not None:
        app.dependency_overrides[get_current_user_id] = lambda: current_user_id

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client(
    mock_db_session, mock_report_service, mock_user_repo, auth_service, artifact_store, owner_id
):
    """TestClient authenticated as owner_id."""
    yield from _create_test_client(
        mock_db_session,
        mock_report_service,
        mock_user_repo,
        auth_service,
        artifact_store,
        current_user_id=owner_id,
    )


@pytest.fixture
def unauthenticated_client(
    mock_db_session, mock_report_service, mock_user_repo, auth_service, artifact_store
):
    """TestClient WITHOUT auth override to test 401 responses."""
    yield from _create_test_client(
        mock_db_session,
        mock_report_service,
        mock_user_repo,
        auth_service,
        artifact_store,
    )


@pytest.fixture
def sample_report(owner_id):
    """Factory for mock Report rows returned by the service."""

    def _make(status=ReportStatus.UPLOADED, summary=None, file_path="/srv/uploads/x.pdf"):
        report = Mock()
        report.id = uuid.uuid4()
        report.user_id = owner_id
        report.name = "Lipid Panel"
        report.type = "LAB_REPORT"
        report.file_path = file_path
        report.status = status
        report.summary = summary
        report.report_date = date(2024, 3, 1)
        report.created_at = datetime(2024, 3, 2, 8, 0, tzinfo=timezone.utc)
        report.updated_at = datetime(2024, 3, 2, 8, 0, tzinfo=timezone.utc)
        return report

    return _make
