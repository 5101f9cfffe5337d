"""User reports router."""

import mimetypes
from datetime import date
from pathlib import Path
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, Response, UploadFile, status

from report_tracker.dependencies import CurrentUserId, ReportServiceDep
from report_tracker.models.report_status import ReportStatus
from report_tracker.schemas.common import ApiResponse
from report_tracker.schemas.reports import ReportResponse, StatusUpdateRequest
from report_tracker.utils.logger import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("", response_model=ApiResponse[list[ReportResponse]])
async def list_reports(
    current_user_id: CurrentUserId,
    report_service: ReportServiceDep,
    status_filter: Optional[ReportStatus] = Query(None, alias="status"),
) -> ApiResponse[list[ReportResponse]]:
    """List the caller's reports, newest first."""
    reports = await report_service.list_reports(current_user_id, status=status_filter)
    return ApiResponse.ok([ReportResponse.from_report(r) for r in reports])


@router.post(
    "",
    response_model=ApiResponse[ReportResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_report(
    current_user_id: CurrentUserId,
    report_service: ReportServiceDep,
    file: Annotated[UploadFile, File(...)],
    name: Annotated[str, Form(min_length=1, max_length=255)],
    report_type: Annotated[str, Form(alias="type", min_length=1, max_length=100)],
    report_date: Annotated[date, Form(alias="reportDate")],
) -> ApiResponse[ReportResponse]:
    """
    Upload a report file with its metadata.

    The file is stored before the report row is written; a storage failure
    leaves no report behind.
    """
    content = await file.read()
    report = await report_service.create_report(
        caller_id=current_user_id,
        name=name,
        report_type=report_type,
        report_date=report_date,
        content=content,
        original_filename=file.filename,
    )
    return ApiResponse.ok(ReportResponse.from_report(report), message="Report uploaded successfully")


@router.get("/{report_id}", response_model=ApiResponse[ReportResponse])
async def get_report(
    report_id: UUID,
    current_user_id: CurrentUserId,
    report_service: ReportServiceDep,
) -> ApiResponse[ReportResponse]:
    """Get a specific report by ID."""
    report = await report_service.get_report(report_id, current_user_id)
    return ApiResponse.ok(ReportResponse.from_report(report))


@router.get("/{report_id}/file")
async def download_report_file(
    report_id: UUID,
    current_user_id: CurrentUserId,
    report_service: ReportServiceDep,
) -> Response:
    """Download the stored file of a report."""
    report, content = await report_service.read_report_file(report_id, current_user_id)
    suffix = Path(report.file_path).suffix
    media_type = mimetypes.guess_type(f"file{suffix}")[0] or "application/octet-stream"
    filename = f"{report.id}{suffix}"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/{report_id}/status", response_model=ApiResponse[ReportResponse])
async def update_report_status(
    report_id: UUID,
    request: StatusUpdateRequest,
    current_user_id: CurrentUserId,
    report_service: ReportServiceDep,
) -> ApiResponse[ReportResponse]:
    """Advance a report's status, optionally setting its summary."""
    report = await report_service.update_report_status(
        report_id,
        current_user_id,
        new_status=request.status,
        summary=request.summary,
    )
    return ApiResponse.ok(ReportResponse.from_report(report), message="Status updated successfully")


@router.delete("/{report_id}", response_model=ApiResponse[None])
async def delete_report(
    report_id: UUID,
    current_user_id: CurrentUserId,
    report_service: ReportServiceDep,
) -> ApiResponse[None]:
    """Delete a report and its stored file."""
    await report_service.delete_report(report_id, current_user_id)
    return ApiResponse.ok(message="Report deleted successfully")
