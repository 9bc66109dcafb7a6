# tests/conftest.py
"""
Shared fixtures for the Water Reports API tests.
"""
import os

import pytest

# Disable demo data BEFORE importing the app
os.environ["SEED_DEMO_DATA"] = "false"

from fastapi.testclient import TestClient

from water_reports_api.app.core.config import settings
from water_reports_api.app.core import db
from water_reports_api.app.core.db import init_db
from water_reports_api.app.main import create_app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file for each test"""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    monkeypatch.setattr(settings, "seed_demo_data", False)
    init_db()
    yield tmp_path / "test.db"


@pytest.fixture
def client(database):
    """HTTP test client with startup hooks run"""
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def report_payload():
    """A complete, valid report submission"""
    return {
        "title": "Pipe Burst near High School",
        "details": "A major water main burst, causing flooding and service interruption.",
        "type": "Infrastructure",
        "severity": "Critical",
        "location": "123 Main St, Sector 4",
        "latitude": 40.7128,
        "longitude": -74.006,
        "reporter": "Jane Doe",
        "tags": "Water Leak,Road Hazard",
    }


@pytest.fixture
def user_payload():
    """A complete, valid citizen registration"""
    return {
        "name": "John Citizen",
        "email": "john@citizen.com",
        "password": "demo123",
        "role": "citizen",
        "department": "Community Member",
    }


class DeletingCursor:
    """Cursor that lets another connection delete the row just before the first UPDATE"""

    def __init__(self, cursor, table, row_id):
        self._cursor = cursor
        self._table = table
        self._row_id = row_id
        self._fired = False

    def execute(self, sql, params=()):
        if not self._fired and sql.lstrip().upper().startswith("UPDATE"):
            self._fired = True
            other = db.get_connection()
            try:
                other.execute(f"DELETE FROM {self._table} WHERE id = ?", (self._row_id,))
                other.commit()
            finally:
                other.close()
        return self._cursor.execute(sql, params)

    def __getattr__(self, name):
        return getattr(self._cursor, name)


class DeletingConnection:
    """Connection whose cursors lose their row to a concurrent delete"""

    def __init__(self, conn, table, row_id):
        self._conn = conn
        self._table = table
        self._row_id = row_id

    def cursor(self):
        return DeletingCursor(self._conn.cursor(), self._table, self._row_id)

    def __getattr__(self, name):
        return getattr(self._conn, name)


@pytest.fixture
def deleted_mid_update(monkeypatch):
    """Make a service module see ``row_id`` vanish between its lookup and its UPDATE"""
    def arm(service_module, table, row_id):
        monkeypatch.setattr(
            service_module,
            "get_connection",
            lambda: DeletingConnection(db.get_connection(), table, row_id),
        )
    return arm
