"""Schemas for report operations."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from report_tracker.models.report_status import ReportStatus


class ReportResponse(BaseModel):
    """Response for a single report."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(..., description="Report ID")
    name: str = Field(..., description="Report name")
    type: str = Field(..., description="Report type, e.g. LAB_REPORT")
    file_path: str = Field(..., description="Location of the stored file")
    status: ReportStatus = Field(..., description="Processing status")
    summary: Optional[str] = Field(None, description="Summary supplied with a status update")
    report_date: date = Field(..., description="Date the report refers to")
    created_at: datetime = Field(..., description="When the report was uploaded")
    updated_at: datetime = Field(..., description="When the report was last changed")

    @classmethod
    def from_report(cls, report) -> "ReportResponse":
        """Build a response from a Report row."""
        return cls(
            id=report.id,
            name=report.name,
            type=report.type,
            file_path=report.file_path,
            status=report.status,
            summary=report.summary,
            report_date=report.report_date,
            created_at=report.created_at,
            updated_at=report.updated_at,
        )


class StatusUpdateRequest(BaseModel):
    """Request body for a status change."""

    status: ReportStatus = Field(..., description="Target status")
    summary: Optional[str] = Field(None, description="Replaces the summary when provided")
