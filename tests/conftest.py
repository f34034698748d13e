"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- test_client: FastAPI TestClient for API integration tests
- make_assignment: builds an assignment payload with sensible defaults
- snapshot_payload / make_snapshot: a small reference data set around two events
- event_assignments: a mixed set of shifts on the first event
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from shifthours.core.models import ReportOptions, ReportSnapshot
from shifthours.main import app

TASK_TYPES = [
    {"id": "tt-open", "name": "Apertura cancelli", "kind": "ACTIVITY"},
    {"id": "tt-guard", "name": "Vigilanza", "kind": "SHIFT", "isHourlyService": True},
    {"id": "tt-steward", "name": "Steward", "kind": "SHIFT", "isHourlyService": False, "shiftHours": 8},
]

DUTIES = [
    {"id": "d-lead", "name": "Capo squadra", "code": "CS"},
    {"id": "d-gate", "name": "Addetto varchi", "code": "AV"},
]

USERS = [
    {"id": "u1", "name": "Mario", "surname": "Rossi", "code": "R01", "companyId": "c-alfa"},
    {"id": "u2", "name": "Luca", "surname": "Bianchi", "code": "B02", "companyId": "c-alfa"},
    {"id": "u3", "name": "Anna", "surname": "Verdi", "code": "V03", "companyId": "c-beta"},
    {"id": "u4", "name": "Paolo", "surname": "Neri", "code": "N04"},
]

COMPANIES = [
    {"id": "c-beta", "name": "Beta Security"},
    {"id": "c-alfa", "name": "Alfa Servizi"},
]

EVENTS = [
    {"id": "ev-1", "title": "Concerto", "locationId": "loc-1", "clientIds": ["cl-1"]},
    {"id": "ev-2", "title": "Amichevole", "locationId": "loc-2", "clientIds": '["cl-1", "cl-2"]'},
]

CLIENTS = [
    {"id": "cl-1", "name": "Comune di Milano"},
    {"id": "cl-2", "name": "Arena Srl"},
]

LOCATIONS = [
    {"id": "loc-1", "name": "Stadio", "city": "Milano"},
    {"id": "loc-2", "name": "Palazzetto", "city": "Monza"},
]

WORKDAYS = [
    {"id": "wd-1", "date": "2025-06-01", "eventId": "ev-1", "locationId": "loc-1"},
    {"id": "wd-2", "date": "2025-06-02", "eventId": "ev-1", "locationId": "loc-1"},
    {"id": "wd-3", "date": "2025-06-01", "eventId": "ev-2", "locationId": "loc-2"},
]


@pytest.fixture(scope="function")
def test_client():
    """
    Create FastAPI TestClient.

    Yields:
        TestClient: FastAPI test client for API testing
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def task_types_payload():
    """Task type records as a caller would send them."""
    return [dict(tt) for tt in TASK_TYPES]


@pytest.fixture
def make_assignment():
    """
    Factory for assignment payloads.

    Defaults to an hourly 08:00-12:00 shift on the first work-day. Extra
    keyword arguments are merged in as-is (field names or camelCase aliases).
    """

    def _make(assignment_id, workday_id="wd-1", task_type_id="tt-guard", start="08:00", end="12:00", **fields):
        data = {
            "id": assignment_id,
            "workdayId": workday_id,
            "taskTypeId": task_type_id,
            "startTime": start,
            "endTime": end,
        }
        data.update(fields)
        return data

    return _make


@pytest.fixture
def snapshot_payload():
    """Factory for a JSON report body around the given assignments."""

    def _make(assignments, **overrides):
        data = {
            "workdays": WORKDAYS,
            "assignments": assignments,
            "taskTypes": TASK_TYPES,
            "duties": DUTIES,
            "users": USERS,
            "companies": COMPANIES,
            "events": EVENTS,
            "clients": CLIENTS,
            "locations": LOCATIONS,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_snapshot(snapshot_payload):
    """Factory for a validated ReportSnapshot around the given assignments."""

    def _make(assignments, **overrides) -> ReportSnapshot:
        return ReportSnapshot.model_validate(snapshot_payload(assignments, **overrides))

    return _make


@pytest.fixture
def actual_options():
    return ReportOptions(hours_type="actual")


@pytest.fixture
def planned_options():
    return ReportOptions(hours_type="previsto")


@pytest.fixture
def event_assignments(make_assignment):
    """
    Shifts on event ev-1 plus one activity.

    - a1: hourly 08:00-12:00 on 2025-06-01, u1 as lead (4.0h), u3 at the gate (3.5h)
    - a2: shift-based 18:00-02:00 on 2025-06-01, u2 at the gate (9.0h)
    - a3: hourly 08:00-12:00 on 2025-06-02, bare user u4 without company (4.0h)
    - act: the activity window of 2025-06-01 (never reported)
    """
    return [
        make_assignment(
            "a1",
            clientId="cl-1",
            assignedUsers='[{"userId": "u1", "dutyId": "d-lead"}, {"userId": "u3", "dutyId": "d-gate"}]',
            timeEntries=[
                {"userId": "u1", "hoursWorked": 4.0, "startTime": "08:00", "endTime": "12:00"},
                {"userId": "u3", "hoursWorked": 3.5, "startTime": "08:30", "endTime": "12:00"},
            ],
        ),
        make_assignment(
            "a2",
            task_type_id="tt-steward",
            start="18:00",
            end="02:00",
            assignedUsers=[{"userId": "u2", "dutyId": "d-gate"}],
            timeEntries=[{"userId": "u2", "hoursWorked": 9.0, "startTime": "17:45", "endTime": "02:45"}],
        ),
        make_assignment(
            "a3",
            workday_id="wd-2",
            userId="u4",
            timeEntries=[{"userId": "u4", "hoursWorked": 4.0}],
        ),
        make_assignment("act", task_type_id="tt-open", start="07:00", end="03:00"),
    ]
