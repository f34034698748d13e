# tests/test_reports.py
"""
Unit tests for the report views.

Tests verify grouping, totals, duty categories and the sort order of the
daily detail trees for every view.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from shifthours.core.hours import (
    build_client_report,
    build_company_report,
    build_duty_report,
    build_employee_report,
    build_event_report,
    build_shift_hours_overview,
)
from shifthours.core.models import ReportOptions


@pytest.fixture
def event_snapshot(make_snapshot, event_assignments):
    return make_snapshot(event_assignments)


class TestCompanyReport:
    """Test the per-company view."""

    def test_companies_sorted_by_name_with_totals(self, event_snapshot, actual_options):
        """Each company with hours appears once, sorted by name."""
        report = build_company_report(event_snapshot, actual_options)

        companies = {c["companyId"]: c for c in report["companies"]}
        assert [c["companyName"] for c in report["companies"]] == ["Alfa Servizi", "Beta Security"]
        assert companies["c-alfa"]["totalHours"] == 13.0
        assert companies["c-alfa"]["totalShifts"] == 1
        assert companies["c-alfa"]["totalOvertimeHours"] == 1.0
        assert companies["c-beta"]["totalHours"] == 3.5

    def test_users_without_company_are_left_out(self, event_snapshot, actual_options):
        """u4 has no company, so wd-2 does not show up anywhere."""
        report = build_company_report(event_snapshot, actual_options)

        dates = {day["date"] for c in report["companies"] for day in c["dailyDetails"]}
        assert dates == {"2025-06-01"}

    def test_categories_split_hourly_hours_and_shifts(self, event_snapshot, actual_options):
        """Duty categories hold raw hours for hourly services and shifts for shift-based ones."""
        report = build_company_report(event_snapshot, actual_options)
        alfa = next(c for c in report["companies"] if c["companyId"] == "c-alfa")

        assert alfa["categories"] == [
            {"dutyId": "d-gate", "dutyCode": "AV", "dutyName": "Addetto varchi", "hours": 0.0, "shifts": 1, "overtimeHours": 1.0},
            {"dutyId": "d-lead", "dutyCode": "CS", "dutyName": "Capo squadra", "hours": 4.0, "shifts": 0, "overtimeHours": 0.0},
        ]

    def test_company_filter(self, event_snapshot):
        """companyId narrows the report to one company."""
        report = build_company_report(event_snapshot, ReportOptions(company_id="c-beta"))

        assert [c["companyId"] for c in report["companies"]] == ["c-beta"]

    def test_header_echoes_options(self, event_snapshot):
        """The report echoes the date range and flags."""
        options = ReportOptions(start_date="2025-06-01", end_date="2025-06-30", show_break_times=False)

        report = build_company_report(event_snapshot, options)

        assert report["startDate"] == "2025-06-01"
        assert report["endDate"] == "2025-06-30"
        assert report["showBreakTimes"] is False
        assert report["hoursType"] == "actual"

    def test_daily_details_can_be_skipped(self, event_snapshot):
        """includeDailyDetails=false keeps totals and drops the tree."""
        report = build_company_report(event_snapshot, ReportOptions(include_daily_details=False))

        assert all(c["dailyDetails"] == [] for c in report["companies"])
        assert report["companies"][0]["totalHours"] == 13.0


class TestDailyDetails:
    """Test the date -> task type -> shift tree."""

    def test_sort_order(self, make_snapshot, make_assignment, planned_options):
        """Dates ascend, task types sort by name, shifts by start time."""
        snapshot = make_snapshot(
            [
                make_assignment("late", workday_id="wd-2", start="14:00", end="18:00", userId="u1"),
                make_assignment("guard-pm", start="14:00", end="18:00", userId="u1"),
                make_assignment("guard-am", start="08:00", end="12:00", userId="u1"),
                make_assignment("steward", task_type_id="tt-steward", start="10:00", end="18:00", userId="u1"),
            ]
        )

        report = build_employee_report(snapshot, planned_options)
        days = report["employees"][0]["dailyDetails"]

        assert [d["date"] for d in days] == ["2025-06-01", "2025-06-02"]
        assert [t["taskTypeName"] for t in days[0]["taskTypes"]] == ["Steward", "Vigilanza"]
        guard = days[0]["taskTypes"][1]
        assert [s["startTime"] for s in guard["shifts"]] == ["08:00", "14:00"]
        assert guard["totalHours"] == 8.0

    def test_same_shift_buckets_merge(self, make_snapshot, make_assignment, planned_options):
        """Assignments on the same day, task type and times add up in one bucket."""
        snapshot = make_snapshot(
            [
                make_assignment("a", assignedUsers=[{"userId": "u1", "dutyId": "d-lead"}]),
                make_assignment(
                    "b",
                    assignedUsers=[{"userId": "u2", "dutyId": "d-gate"}, {"userId": "u3", "dutyId": "d-gate"}],
                ),
            ]
        )

        report = build_event_report(snapshot, "ev-1", planned_options)
        shifts = report["dailyDetails"][0]["taskTypes"][0]["shifts"]

        assert len(shifts) == 1, f"Expected a single merged bucket, got {len(shifts)}"
        bucket = shifts[0]
        assert bucket["totalHours"] == 8.0
        assert bucket["numberOfPeople"] == 3
        assert [(d["dutyName"], d["numberOfPeople"], d["totalHours"]) for d in bucket["duties"]] == [
            ("Addetto varchi", 2, 4.0),
            ("Capo squadra", 1, 4.0),
        ]

    def test_actual_mode_shows_recorded_times(self, event_snapshot, actual_options):
        """In actual mode a bucket shows the earliest recorded start and latest end."""
        report = build_event_report(event_snapshot, "ev-1", actual_options)
        day = report["dailyDetails"][0]
        guard = next(t for t in day["taskTypes"] if t["taskTypeId"] == "tt-guard")

        assert (guard["shifts"][0]["startTime"], guard["shifts"][0]["endTime"]) == ("08:00", "12:00")

        steward = next(t for t in day["taskTypes"] if t["taskTypeId"] == "tt-steward")
        assert steward["shifts"][0]["startTime"] == "17:45"
        assert steward["shifts"][0]["shifts"] == 1
        assert steward["shifts"][0]["overtimeHours"] == 1.0

    def test_actual_mode_falls_back_to_planned_times(self, event_snapshot, actual_options):
        """Entries without times leave the planned times on display."""
        report = build_event_report(event_snapshot, "ev-1", actual_options)
        second_day = report["dailyDetails"][1]

        shift = second_day["taskTypes"][0]["shifts"][0]
        assert (shift["startTime"], shift["endTime"]) == ("08:00", "12:00")

    def test_break_fields_are_carried(self, make_snapshot, make_assignment, planned_options):
        """Shift buckets carry the scheduled break."""
        snapshot = make_snapshot(
            [
                make_assignment(
                    "a",
                    userId="u1",
                    hasScheduledBreak=True,
                    scheduledBreakStartTime="10:00",
                    scheduledBreakEndTime="10:30",
                )
            ]
        )

        report = build_event_report(snapshot, "ev-1", planned_options)
        shift = report["dailyDetails"][0]["taskTypes"][0]["shifts"][0]

        assert shift["hasScheduledBreak"] is True
        assert (shift["scheduledBreakStartTime"], shift["scheduledBreakEndTime"]) == ("10:00", "10:30")


class TestEmployeeReport:
    """Test the per-employee view."""

    def test_employees_sorted_by_name(self, event_snapshot, actual_options):
        """Every user with hours appears, including users without a company."""
        report = build_employee_report(event_snapshot, actual_options)

        assert [e["userName"] for e in report["employees"]] == ["Anna Verdi", "Luca Bianchi", "Mario Rossi", "Paolo Neri"]

    def test_entries_of_shift_based_employee(self, event_snapshot, actual_options):
        """Shift-based entries carry shifts and overtime."""
        report = build_employee_report(event_snapshot, ReportOptions(user_id="u2"))
        luca = report["employees"][0]

        assert luca["hasOnlyShiftServices"] is True
        assert luca["userCode"] == "B02"
        assert luca["companyId"] == "c-alfa"
        entry = luca["entries"][0]
        assert entry["shifts"] == 1
        assert entry["overtimeHours"] == 1.0
        assert entry["eventTitle"] == "Concerto"
        assert (entry["startTime"], entry["endTime"]) == ("17:45", "02:45")

    def test_entries_of_hourly_employee(self, event_snapshot, actual_options):
        """Hourly entries have no shift fields."""
        report = build_employee_report(event_snapshot, ReportOptions(user_id="u1"))
        mario = report["employees"][0]

        assert mario["hasOnlyShiftServices"] is False
        assert mario["entries"][0]["shifts"] is None
        assert mario["entries"][0]["overtimeHours"] is None
        assert mario["totalHours"] == 4.0

    def test_entries_are_chronological(self, make_snapshot, make_assignment, actual_options):
        """Entries sort by date, then start time."""
        snapshot = make_snapshot(
            [
                make_assignment("later", workday_id="wd-2", timeEntries=[{"userId": "u1", "hoursWorked": 1}]),
                make_assignment("pm", start="14:00", end="16:00", timeEntries=[{"userId": "u1", "hoursWorked": 2}]),
                make_assignment("am", timeEntries=[{"userId": "u1", "hoursWorked": 3, "notes": "cancello nord"}]),
            ]
        )

        report = build_employee_report(snapshot, actual_options)
        entries = report["employees"][0]["entries"]

        assert [e["assignmentId"] for e in entries] == ["am", "pm", "later"]
        assert entries[0]["notes"] == "cancello nord"

    def test_company_filter(self, event_snapshot):
        """companyId keeps only that company's employees."""
        report = build_employee_report(event_snapshot, ReportOptions(company_id="c-alfa"))

        assert sorted(e["userId"] for e in report["employees"]) == ["u1", "u2"]


class TestEventReport:
    """Test the single-event view."""

    def test_totals_and_header(self, event_snapshot, actual_options):
        """The event report sums every row of the event."""
        report = build_event_report(event_snapshot, "ev-1", actual_options)

        assert report["eventTitle"] == "Concerto"
        assert report["locationName"] == "Stadio (Milano)"
        assert report["clients"] == [{"id": "cl-1", "name": "Comune di Milano"}]
        assert report["totalHours"] == 20.5
        assert report["totalShifts"] == 1
        assert report["totalOvertimeHours"] == 1.0

    def test_summary_by_duty(self, event_snapshot, actual_options):
        """Unbound users land in the unspecified duty."""
        report = build_event_report(event_snapshot, "ev-1", actual_options)

        summary = [(d["dutyName"], d["hours"], d["shifts"]) for d in report["summaryByDuty"]]
        assert summary == [("Addetto varchi", 3.5, 1), ("Capo squadra", 4.0, 0), ("Non specificato", 4.0, 0)]

    def test_client_filter(self, event_snapshot):
        """clientId limits the event to that client's assignments."""
        report = build_event_report(event_snapshot, "ev-1", ReportOptions(client_id="cl-1"))

        assert report["clientId"] == "cl-1"
        assert report["totalHours"] == 7.5

    def test_unknown_event_is_empty(self, event_snapshot, actual_options):
        """An event without assignments yields zero totals."""
        report = build_event_report(event_snapshot, "ev-404", actual_options)

        assert report["eventTitle"] == "Non specificato"
        assert report["totalHours"] == 0.0
        assert report["dailyDetails"] == []


class TestDutyReport:
    """Test the single-duty view."""

    @pytest.fixture
    def duty_snapshot(self, make_snapshot, event_assignments, make_assignment):
        open_slot = make_assignment(
            "a4",
            workday_id="wd-2",
            start="14:00",
            end="18:00",
            assignedUsers=["u1"],
            personnelRequests=[{"dutyId": "d-lead", "count": 1}, {"dutyId": "d-gate", "count": 1}],
        )
        return make_snapshot(event_assignments + [open_slot])

    def test_planned_hours_for_duty(self, duty_snapshot, planned_options):
        """Bound users count in their duty and unfilled requests count as one slot."""
        report = build_duty_report(duty_snapshot, "d-gate", planned_options)

        assert report["dutyName"] == "Addetto varchi"
        assert report["dutyCode"] == "AV"
        assert report["totalHours"] == 14.0
        assert report["totalShifts"] == 1
        assert report["dailyDetails"] == [
            {
                "date": "2025-06-01",
                "taskTypes": [
                    {
                        "taskTypeId": "tt-steward",
                        "taskTypeName": "Steward",
                        "isHourlyService": False,
                        "totalHours": 8.0,
                        "shifts": 1,
                        "overtimeHours": 0.0,
                    },
                    {
                        "taskTypeId": "tt-guard",
                        "taskTypeName": "Vigilanza",
                        "isHourlyService": True,
                        "totalHours": 2.0,
                        "shifts": 0,
                        "overtimeHours": 0.0,
                    },
                ],
            },
            {
                "date": "2025-06-02",
                "taskTypes": [
                    {
                        "taskTypeId": "tt-guard",
                        "taskTypeName": "Vigilanza",
                        "isHourlyService": True,
                        "totalHours": 4.0,
                        "shifts": 0,
                        "overtimeHours": 0.0,
                    }
                ],
            },
        ]

    def test_unfilled_request_without_planned_hours_is_skipped(self, make_snapshot, make_assignment, planned_options):
        """A requested slot whose planned times cannot be read adds no shift."""
        snapshot = make_snapshot(
            [
                make_assignment(
                    "a",
                    task_type_id="tt-steward",
                    end="",
                    personnelRequests=[{"dutyId": "d-gate", "count": 1}],
                )
            ]
        )

        report = build_duty_report(snapshot, "d-gate", planned_options)

        assert report["totalHours"] == 0.0
        assert report["totalShifts"] == 0
        assert report["dailyDetails"] == []

    def test_actual_hours_ignore_unfilled_requests(self, duty_snapshot, actual_options):
        """Recorded hours only exist for real people."""
        report = build_duty_report(duty_snapshot, "d-gate", actual_options)

        assert report["totalHours"] == 12.5

    def test_location_filter(self, duty_snapshot):
        """locationId filters on the work-day's location."""
        report = build_duty_report(duty_snapshot, "d-gate", ReportOptions(location_id="loc-2"))

        assert report["locationName"] == "Palazzetto (Monza)"
        assert report["totalHours"] == 0.0
        assert report["dailyDetails"] == []


class TestClientReport:
    """Test the per-client view."""

    def test_groups_by_day_event_and_location(self, make_snapshot, make_assignment, actual_options):
        """Groups sort by date, then event title, then location."""
        snapshot = make_snapshot(
            [
                make_assignment("c1", clientId="cl-1", timeEntries=[{"userId": "u1", "hoursWorked": 4.0}]),
                make_assignment(
                    "c2", workday_id="wd-3", clientId="cl-1", timeEntries=[{"userId": "u2", "hoursWorked": 2.0}]
                ),
                make_assignment(
                    "c3", workday_id="wd-2", clientId="cl-1", timeEntries=[{"userId": "u3", "hoursWorked": 1.5}]
                ),
                make_assignment("other", clientId="cl-2", timeEntries=[{"userId": "u4", "hoursWorked": 8.0}]),
            ]
        )

        report = build_client_report(snapshot, "cl-1", actual_options)

        assert report["clientName"] == "Comune di Milano"
        assert report["totalHours"] == 7.5
        groups = [(g["date"], g["eventTitle"], g["locationName"]) for g in report["dailyDetails"]]
        assert groups == [
            ("2025-06-01", "Amichevole", "Palazzetto (Monza)"),
            ("2025-06-01", "Concerto", "Stadio (Milano)"),
            ("2025-06-02", "Concerto", "Stadio (Milano)"),
        ]
        assert report["dailyDetails"][0]["taskTypes"][0]["totalHours"] == 2.0


class TestShiftHoursOverview:
    """Test the participant overview."""

    def test_rows_sorted_newest_first(self, make_snapshot, event_assignments, make_assignment, actual_options):
        """Rows sort by date descending, then start time, and flag missing hours."""
        open_shift = make_assignment("a4", workday_id="wd-2", start="14:00", end="18:00", assignedUsers=["u1"])
        snapshot = make_snapshot(event_assignments + [open_shift])

        report = build_shift_hours_overview(snapshot, actual_options)

        order = [(r["date"], r["startTime"], r["userId"]) for r in report["rows"]]
        assert order == [
            ("2025-06-02", "08:00", "u4"),
            ("2025-06-02", "14:00", "u1"),
            ("2025-06-01", "08:00", "u1"),
            ("2025-06-01", "08:00", "u3"),
            ("2025-06-01", "18:00", "u2"),
        ]
        assert report["missingHours"] == 1
        missing = next(r for r in report["rows"] if r["assignmentId"] == "a4")
        assert missing["timeEntry"] is None
        assert missing["dutyName"] == "Non specificato"

    def test_time_entry_is_serialized(self, event_snapshot):
        """A recorded entry is returned with camelCase keys."""
        report = build_shift_hours_overview(event_snapshot, ReportOptions(user_id="u3"))

        assert len(report["rows"]) == 1
        entry = report["rows"][0]["timeEntry"]
        assert entry["hoursWorked"] == 3.5
        assert entry["startTime"] == "08:30"
        assert report["rows"][0]["dutyName"] == "Addetto varchi"
