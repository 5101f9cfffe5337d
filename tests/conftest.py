"""Shared pytest fixtures."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")

# Clear settings cache before any imports to prevent stale values with coverage
from report_tracker.config import get_settings

get_settings.cache_clear()

import pytest
import uuid
from unittest.mock import AsyncMock, Mock
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone

from report_tracker.models.report_status import ReportStatus
from report_tracker.services.artifact_store import LocalArtifactStore


# Database mocking fixtures


@pytest.fixture
def mock_async_session():
    """Create a mock AsyncSession for repository and service tests."""
    session = AsyncMock()

    # Mock result object for execute
    mock_result = Mock()
    mock_result.scalar_one_or_none = Mock(return_value=None)
    mock_result.scalar_one = Mock(return_value=0)
    mock_result.scalars = Mock(return_value=Mock(all=Mock(return_value=[])))
    mock_result.fetchall = Mock(return_value=[])
    mock_result.rowcount = 0

    session.execute = AsyncMock(return_value=mock_result)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = Mock()
    session.delete = AsyncMock()

    @asynccontextmanager
    async def begin_nested():
        yield

    session.begin_nested = begin_nested

    return session


@pytest.fixture
def owner_id():
    """ID of the user who owns the sample report."""
    return uuid.uuid4()


@pytest.fixture
def other_user_id():
    """ID of a user who owns nothing."""
    return uuid.uuid4()


@pytest.fixture
def artifact_store(tmp_path):
    """Artifact store rooted in a per-test temporary directory."""
    return LocalArtifactStore(base_dir=tmp_path / "uploads")


@pytest.fixture
def make_report(owner_id):
    """Factory fixture for creating mock Report objects."""

    def _make(
        status=ReportStatus.UPLOADED,
        user_id=None,
        summary=None,
        file_path="/tmp/uploads/report.pdf",
    ):
        report = Mock()
        report.id = uuid.uuid4()
        report.user_id = user_id or owner_id
        report.name = "CBC Panel"
        report.type = "LAB_REPORT"
        report.file_path = file_path
        report.status = status
        report.summary = summary
        report.report_date = date(2024, 1, 15)
        report.created_at = datetime.now(timezone.utc)
        report.updated_at = datetime.now(timezone.utc)
        return report

    return _make
