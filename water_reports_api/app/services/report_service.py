"""
Service layer for water incident reports.

This module provides CRUD operations, exact‑match filters and aggregate
counts for reports.  Two dates are kept on every report:
``date_reported`` is stamped once on creation, ``last_updated`` is
stamped on creation and refreshed by every update.  Dates are ISO
``YYYY-MM-DD`` strings.

Statuses follow the workflow ``Pending Review -> In Progress ->
Resolved`` but any value and any transition is accepted.  Filters
compare strings exactly (SQLite's default binary collation), so
``"resolved"`` does not match ``"Resolved"``.

All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from typing import List, Optional

from water_reports_api.app.core.db import get_connection
from water_reports_api.app.core.exceptions import NotFoundError, ValidationError
from water_reports_api.app.schemas.report import (
    ReportCreate,
    ReportRead,
    ReportStats,
    ReportUpdate,
    StatusUpdate,
)


DEFAULT_STATUS = "Pending Review"

# (field, message) pairs checked in order; the first blank field wins.
CREATE_REQUIRED = [
    ("title", "Title is required"),
    ("details", "Details are required"),
    ("type", "Type is required"),
    ("severity", "Severity is required"),
    ("location", "Location is required"),
    ("reporter", "Reporter name is required"),
]

UPDATE_REQUIRED = [
    ("title", "Title is required"),
    ("details", "Details are required"),
    ("type", "Type is required"),
    ("severity", "Severity is required"),
    ("status", "Status is required"),
    ("location", "Location is required"),
]

STATUS_REQUIRED = [
    ("status", "Status is required"),
    ("severity", "Severity is required"),
]

# Columns the list_by_* helpers may filter on.
FILTER_COLUMNS = {"reporter", "status", "severity", "type"}


def today() -> str:
    """Return the current date as stored on reports."""
    return date.today().isoformat()


def _require(data, fields: list[tuple[str, str]]) -> None:
    for field, message in fields:
        value = getattr(data, field)
        if value is None or not value.strip():
            raise ValidationError(message)


class ReportService:
    """Service class for managing reports."""

    @classmethod
    async def list_reports(cls) -> List[ReportRead]:
        """Return every report in store order."""
        conn = get_connection()
        try:
            rows = conn.execute("SELECT * FROM reports ORDER BY id").fetchall()
            return [cls._row_to_report_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_recent(cls) -> List[ReportRead]:
        """Return every report, most recently updated first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM reports ORDER BY last_updated DESC, id DESC"
            ).fetchall()
            return [cls._row_to_report_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_report(cls, report_id: int) -> Optional[ReportRead]:
        """Retrieve a single report by its ID, or ``None``."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM reports WHERE id = ?",
                (report_id,),
            ).fetchone()
            if not row:
                return None
            return cls._row_to_report_read(row)
        finally:
            conn.close()

    @classmethod
    async def list_by_reporter(cls, reporter: str) -> List[ReportRead]:
        return await cls._list_where("reporter", reporter)

    @classmethod
    async def list_by_status(cls, status: str) -> List[ReportRead]:
        return await cls._list_where("status", status)

    @classmethod
    async def list_by_severity(cls, severity: str) -> List[ReportRead]:
        return await cls._list_where("severity", severity)

    @classmethod
    async def list_by_type(cls, report_type: str) -> List[ReportRead]:
        return await cls._list_where("type", report_type)

    @classmethod
    async def _list_where(cls, column: str, value: str) -> List[ReportRead]:
        if column not in FILTER_COLUMNS:
            raise ValueError(f"Cannot filter reports by {column}")
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM reports WHERE {column} = ? ORDER BY id",
                (value,),
            ).fetchall()
            return [cls._row_to_report_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def create_report(cls, data: ReportCreate) -> ReportRead:
        """Insert a new report and return the stored record.

        Raises ``ValidationError`` if a required field is missing or
        blank.  An empty ``status`` becomes ``"Pending Review"``.  Both
        ``date_reported`` and ``last_updated`` are set to today.
        """
        logger = logging.getLogger(__name__)
        _require(data, CREATE_REQUIRED)
        status = data.status if data.status else DEFAULT_STATUS
        stamp = today()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO reports (
                    title, details, type, severity, status, location,
                    latitude, longitude, reporter, date_reported, last_updated, tags
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data.title,
                    data.details,
                    data.type,
                    data.severity,
                    status,
                    data.location,
                    data.latitude,
                    data.longitude,
                    data.reporter,
                    stamp,
                    stamp,
                    data.tags,
                ),
            )
            report_id = cursor.lastrowid
            conn.commit()
            logger.info("Created report %s (%s, %s)", report_id, data.type, data.severity)
            row = cursor.execute(
                "SELECT * FROM reports WHERE id = ?",
                (report_id,),
            ).fetchone()
            return cls._row_to_report_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_report(cls, report_id: int, data: ReportUpdate) -> ReportRead:
        """Overwrite the editable fields of a report.

        Title, details, type, severity, status, location and tags are
        replaced; coordinates, reporter and ``date_reported`` are kept.
        ``last_updated`` is refreshed.  Raises ``NotFoundError`` if the
        report does not exist and ``ValidationError`` if a required
        field is blank.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT id FROM reports WHERE id = ?", (report_id,)).fetchone()
            if not row:
                raise NotFoundError(f"Report not found with id: {report_id}")
            _require(data, UPDATE_REQUIRED)
            cursor.execute(
                """
                UPDATE reports
                SET title = ?, details = ?, type = ?, severity = ?, status = ?,
                    location = ?, tags = ?, last_updated = ?
                WHERE id = ?
                """,
                (
                    data.title,
                    data.details,
                    data.type,
                    data.severity,
                    data.status,
                    data.location,
                    data.tags,
                    today(),
                    report_id,
                ),
            )
            if cursor.rowcount == 0:
                conn.rollback()
                raise NotFoundError(f"Report not found with id: {report_id}")
            conn.commit()
            logger.info("Updated report %s", report_id)
            return cls._reload(cursor, report_id)
        finally:
            conn.close()

    @classmethod
    async def update_status(cls, report_id: int, data: StatusUpdate) -> ReportRead:
        """Set only the status and severity of a report.

        No transition rules are applied: any status may follow any
        other.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT id FROM reports WHERE id = ?", (report_id,)).fetchone()
            if not row:
                raise NotFoundError(f"Report not found with id: {report_id}")
            _require(data, STATUS_REQUIRED)
            cursor.execute(
                "UPDATE reports SET status = ?, severity = ?, last_updated = ? WHERE id = ?",
                (data.status, data.severity, today(), report_id),
            )
            if cursor.rowcount == 0:
                conn.rollback()
                raise NotFoundError(f"Report not found with id: {report_id}")
            conn.commit()
            logger.info("Report %s is now %s / %s", report_id, data.status, data.severity)
            return cls._reload(cursor, report_id)
        finally:
            conn.close()

    @classmethod
    async def delete_report(cls, report_id: int) -> None:
        """Delete a report by ID.

        Raises ``NotFoundError`` if no such report exists.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM reports WHERE id = ?", (report_id,))
            affected = cursor.rowcount
            conn.commit()
            if not affected:
                raise NotFoundError(f"Report not found with id: {report_id}")
            logger.info("Deleted report %s", report_id)
        finally:
            conn.close()

    @classmethod
    async def stats(cls) -> ReportStats:
        """Count all reports and those in the tracked statuses and severities."""
        conn = get_connection()
        try:
            row = conn.execute(
                """
                SELECT
                    COUNT(*) AS total,
                    COALESCE(SUM(CASE WHEN status = ? THEN 1 ELSE 0 END), 0) AS pending,
                    COALESCE(SUM(CASE WHEN status = ? THEN 1 ELSE 0 END), 0) AS in_progress,
                    COALESCE(SUM(CASE WHEN status = ? THEN 1 ELSE 0 END), 0) AS resolved,
                    COALESCE(SUM(CASE WHEN severity = ? THEN 1 ELSE 0 END), 0) AS critical,
                    COALESCE(SUM(CASE WHEN severity = ? THEN 1 ELSE 0 END), 0) AS high
                FROM reports
                """,
                ("Pending Review", "In Progress", "Resolved", "Critical", "High"),
            ).fetchone()
            return ReportStats(
                total=row["total"],
                pending=row["pending"],
                in_progress=row["in_progress"],
                resolved=row["resolved"],
                critical=row["critical"],
                high=row["high"],
            )
        finally:
            conn.close()

    @classmethod
    async def count_reports(cls) -> int:
        conn = get_connection()
        try:
            return conn.execute("SELECT COUNT(*) FROM reports").fetchone()[0]
        finally:
            conn.close()

    @classmethod
    def _reload(cls, cursor: sqlite3.Cursor, report_id: int) -> ReportRead:
        # The row may have been deleted by another request since the commit.
        row = cursor.execute("SELECT * FROM reports WHERE id = ?", (report_id,)).fetchone()
        if not row:
            raise NotFoundError(f"Report not found with id: {report_id}")
        return cls._row_to_report_read(row)

    @staticmethod
    def _row_to_report_read(row: sqlite3.Row) -> ReportRead:
        """Convert a database row to a ReportRead schema instance."""
        return ReportRead(
            id=row["id"],
            title=row["title"],
            details=row["details"],
            type=row["type"],
            severity=row["severity"],
            status=row["status"],
            location=row["location"],
            latitude=row["latitude"],
            longitude=row["longitude"],
            reporter=row["reporter"],
            date_reported=row["date_reported"],
            last_updated=row["last_updated"],
            tags=row["tags"],
        )
