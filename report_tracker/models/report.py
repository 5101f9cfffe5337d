"""Report model for uploaded, user-owned report files."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from report_tracker.database import Base
from report_tracker.models.report_status import ReportStatus

if TYPE_CHECKING:
    from report_tracker.models.user import User


class Report(Base):
    """A stored upload tracked through the processing workflow."""

    __tablename__ = "reports"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Owner (immutable)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Descriptive metadata
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    report_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Artifact location, set once at creation
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False)

    # Workflow
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus, name="report_status", native_enum=False, length=20),
        nullable=False,
        default=ReportStatus.UPLOADED,
        index=True,
    )
    summary: Mapped[str | None] = mapped_column(Text)

    # Timestamps, stamped by ReportService
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="reports")

    def __repr__(self):
        return f"<Report(id='{self.id}', name='{self.name}', status='{self.status}')>"
