"""API routers."""

from report_tracker.routers import auth, health, reports

__all__ = ["auth", "health", "reports"]
