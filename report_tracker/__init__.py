"""Report Tracker - ownership-scoped report upload and status tracking API."""

__version__ = "1.0.0"
