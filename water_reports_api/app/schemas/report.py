"""
Pydantic schemas for water incident reports.

A report describes a water‑quality or infrastructure incident.  The
``type``, ``severity`` and ``status`` fields are open strings; the
documented values are listed in the field descriptions only and are
not enforced.  Required fields are declared optional here so that a
missing or blank value reaches ``ReportService`` and is reported as a
400 with a readable message rather than a schema error.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class ReportCreate(BaseModel):
    """Schema for submitting a new report."""

    title: Optional[str] = Field(None, examples=["Pipe Burst near High School"])
    details: Optional[str] = Field(None, examples=["A major water main burst, causing flooding."])
    type: Optional[str] = Field(None, description="Quality, Infrastructure, Supply, Drought, Safety")
    severity: Optional[str] = Field(None, description="Critical, High, Medium, Low")
    status: Optional[str] = Field(None, description="Defaults to 'Pending Review' when empty")
    location: Optional[str] = Field(None, examples=["123 Main St, Sector 4"])
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    # The web client sends ``reporterName``; both spellings are accepted.
    reporter: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("reporter", "reporterName"),
        examples=["Jane Doe"],
    )
    tags: Optional[str] = Field(None, description="Comma‑separated tags", examples=["Water Leak,Road Hazard"])


class ReportUpdate(BaseModel):
    """Schema for a full update of a report.

    Coordinates and reporter are not updatable; if a client sends them
    they are ignored.
    """

    title: Optional[str] = None
    details: Optional[str] = None
    type: Optional[str] = None
    severity: Optional[str] = None
    status: Optional[str] = None
    location: Optional[str] = None
    tags: Optional[str] = None


class StatusUpdate(BaseModel):
    """Schema for the status/severity partial update used by officials."""

    status: Optional[str] = None
    severity: Optional[str] = None


class ReportRead(BaseModel):
    """Schema for reading a report from the API."""

    id: int
    title: str
    details: str
    type: str
    severity: str
    status: str
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    reporter: str
    date_reported: str = Field(..., alias="dateReported")
    last_updated: str = Field(..., alias="lastUpdated")
    tags: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }


class ReportStats(BaseModel):
    """Aggregate counts over all reports."""

    total: int
    pending: int
    in_progress: int = Field(..., alias="inProgress")
    resolved: int
    critical: int
    high: int

    model_config = {
        "populate_by_name": True,
    }
