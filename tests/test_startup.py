# tests/test_startup.py
"""
Tests for migrations and demo data bootstrap
"""
import asyncio

from fastapi.testclient import TestClient

from water_reports_api.app.core.config import settings
from water_reports_api.app.core.db import MIGRATIONS, get_connection, init_db
from water_reports_api.app.core.seed import seed_demo_data
from water_reports_api.app.main import create_app
from water_reports_api.app.services.report_service import ReportService
from water_reports_api.app.services.user_service import UserService


def test_init_db_is_idempotent(database):
    init_db()
    conn = get_connection()
    try:
        versions = [row["version"] for row in conn.execute("SELECT version FROM migrations")]
    finally:
        conn.close()
    assert versions == [version for version, _ in MIGRATIONS]


def test_seed_populates_empty_tables(database):
    asyncio.run(seed_demo_data())
    users = asyncio.run(UserService.list_users())
    reports = asyncio.run(ReportService.list_reports())
    assert {u.role for u in users} == {"citizen", "official"}
    assert len(reports) == 3
    stats = asyncio.run(ReportService.stats())
    assert (stats.pending, stats.in_progress, stats.resolved) == (1, 1, 1)
    assert asyncio.run(UserService.authenticate("sarah@waterauthority.gov", "demo123")) is not None


def test_seed_runs_once(database):
    asyncio.run(seed_demo_data())
    asyncio.run(seed_demo_data())
    assert len(asyncio.run(UserService.list_users())) == 2
    assert len(asyncio.run(ReportService.list_reports())) == 3


def test_seed_skips_non_empty_reports(database, report_payload):
    from water_reports_api.app.schemas.report import ReportCreate

    asyncio.run(ReportService.create_report(ReportCreate(**report_payload)))
    asyncio.run(seed_demo_data())
    assert len(asyncio.run(ReportService.list_reports())) == 1
    assert len(asyncio.run(UserService.list_users())) == 2


def test_startup_seeds_when_enabled(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "seeded.db"))
    monkeypatch.setattr(settings, "seed_demo_data", True)
    with TestClient(create_app()) as client:
        assert len(client.get("/api/reports").json()) == 3
        response = client.post(
            "/api/users/login", json={"email": "john@citizen.com", "password": "demo123"}
        )
        assert response.status_code == 200
        assert response.json()["role"] == "citizen"
