"""
Report endpoints.

These routes expose CRUD operations for water incident reports plus
exact‑match filters by reporter, status, severity and type, and an
aggregate statistics endpoint.  Service errors (validation, not found)
are turned into ``{"message": ...}`` responses by the exception
handler registered in ``main.create_app``.

Fixed paths such as ``/stats`` and ``/recent`` are declared before
``/{report_id}`` so they are not captured by the id route.
"""

from typing import Dict, List

from fastapi import APIRouter, status

from water_reports_api.app.core.exceptions import NotFoundError
from water_reports_api.app.schemas.report import (
    ReportCreate,
    ReportRead,
    ReportStats,
    ReportUpdate,
    StatusUpdate,
)
from water_reports_api.app.services.report_service import ReportService

router = APIRouter()


@router.get("", response_model=List[ReportRead])
async def list_reports() -> List[ReportRead]:
    """Return all reports."""
    return await ReportService.list_reports()


@router.get("/recent", response_model=List[ReportRead])
async def list_recent_reports() -> List[ReportRead]:
    """Return all reports, most recently updated first."""
    return await ReportService.list_recent()


@router.get("/stats", response_model=ReportStats)
async def report_stats() -> ReportStats:
    """Return total, per‑status and per‑severity counts.

    The response contains ``total``, ``pending``, ``inProgress``,
    ``resolved``, ``critical`` and ``high``.
    """
    return await ReportService.stats()


@router.get("/reporter/{reporter}", response_model=List[ReportRead])
async def reports_by_reporter(reporter: str) -> List[ReportRead]:
    return await ReportService.list_by_reporter(reporter)


@router.get("/status/{report_status}", response_model=List[ReportRead])
async def reports_by_status(report_status: str) -> List[ReportRead]:
    return await ReportService.list_by_status(report_status)


@router.get("/severity/{severity}", response_model=List[ReportRead])
async def reports_by_severity(severity: str) -> List[ReportRead]:
    return await ReportService.list_by_severity(severity)


@router.get("/type/{report_type}", response_model=List[ReportRead])
async def reports_by_type(report_type: str) -> List[ReportRead]:
    return await ReportService.list_by_type(report_type)


@router.get("/{report_id}", response_model=ReportRead)
async def get_report(report_id: int) -> ReportRead:
    """Retrieve a single report by ID.

    Returns HTTP 404 if the report is not found.
    """
    report = await ReportService.get_report(report_id)
    if report is None:
        raise NotFoundError(f"Report not found with id: {report_id}")
    return report


@router.post("", response_model=ReportRead, status_code=status.HTTP_201_CREATED)
async def create_report(report_in: ReportCreate) -> ReportRead:
    """Submit a new report.

    ``status`` defaults to ``"Pending Review"``.  Returns HTTP 400 if a
    required field is missing.
    """
    return await ReportService.create_report(report_in)


@router.put("/{report_id}", response_model=ReportRead)
async def update_report(report_id: int, report_in: ReportUpdate) -> ReportRead:
    """Replace the editable fields of a report."""
    return await ReportService.update_report(report_id, report_in)


@router.patch("/{report_id}/status", response_model=ReportRead)
async def update_report_status(report_id: int, status_in: StatusUpdate) -> ReportRead:
    """Set the status and severity of a report (used by officials)."""
    return await ReportService.update_status(report_id, status_in)


@router.delete("/{report_id}")
async def delete_report(report_id: int) -> Dict[str, str]:
    """Delete a report by ID."""
    await ReportService.delete_report(report_id)
    return {"message": "Report deleted successfully"}
