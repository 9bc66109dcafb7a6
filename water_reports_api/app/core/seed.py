"""
Demo data inserted on first boot.

``seed_demo_data`` is called once from the application's startup hook
when ``settings.seed_demo_data`` is enabled.  Each table is only seeded
while it is empty, so restarting the service never duplicates the demo
records.  Records go through the services, which means they get the
same defaults and date stamps as records created through the API.
"""

import logging

from water_reports_api.app.schemas.report import ReportCreate
from water_reports_api.app.schemas.user import UserCreate
from water_reports_api.app.services.report_service import ReportService
from water_reports_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)


DEMO_USERS = [
    UserCreate(
        name="John Citizen",
        email="john@citizen.com",
        password="demo123",
        role="citizen",
        department="Community Member",
    ),
    UserCreate(
        name="Sarah Official",
        email="sarah@waterauthority.gov",
        password="demo123",
        role="official",
        department="Water Quality Authority",
    ),
]

DEMO_REPORTS = [
    ReportCreate(
        title="Drought Conditions Affecting Supply",
        details="Water levels in the main reservoir are critically low, affecting three major districts.",
        type="Drought",
        severity="High",
        status="Resolved",
        location="Central Valley Reservoir",
        reporter="Afrid",
        tags="Unsafe Drinking Water,Infrastructure Failure",
    ),
    ReportCreate(
        title="Pipe Burst near High School",
        details="A major water main burst, causing flooding and service interruption.",
        type="Infrastructure",
        severity="Critical",
        status="In Progress",
        location="123 Main St, Sector 4",
        reporter="Jane Doe",
        tags="Water Leak,Road Hazard",
    ),
    ReportCreate(
        title="Unusual Smell in Tap Water",
        details="Tap water has a strong, chemical odor in the Western neighborhood.",
        type="Quality",
        severity="Medium",
        status="Pending Review",
        location="Western Residential Area",
        reporter="Mark Smith",
        tags="Contamination,Health Risk",
    ),
]


async def seed_demo_data() -> None:
    """Insert demo users and reports into empty tables."""
    if await UserService.count_users() == 0:
        for user in DEMO_USERS:
            await UserService.register_user(user)
        logger.info("Demo users created")

    if await ReportService.count_reports() == 0:
        for report in DEMO_REPORTS:
            await ReportService.create_report(report)
        logger.info("Demo reports created")
