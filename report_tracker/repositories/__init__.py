"""Repository layer for data access."""

from report_tracker.repositories.report_repository import ReportRepository
from report_tracker.repositories.user_repository import UserRepository

__all__ = [
    "ReportRepository",
    "UserRepository",
]
