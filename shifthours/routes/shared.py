"""
Shared dependencies and request schemas for route modules.
"""

import datetime

from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from shifthours.core.config import (
    DEFAULT_INCLUDE_BREAKS_HOURLY,
    DEFAULT_INCLUDE_DAILY_DETAILS,
    DEFAULT_SHOW_BREAK_TIMES,
)
from shifthours.core.constants import HOURS_TYPE_ACTUAL
from shifthours.core.models import Assignment, CamelModel, ReportOptions, TaskType


def report_options(
    start_date: datetime.date | None = Query(None, alias="startDate"),
    end_date: datetime.date | None = Query(None, alias="endDate"),
    hours_type: str = Query(HOURS_TYPE_ACTUAL, alias="hoursType"),
    include_breaks_hourly: bool = Query(DEFAULT_INCLUDE_BREAKS_HOURLY, alias="includeBreaksHourly"),
    show_break_times: bool = Query(DEFAULT_SHOW_BREAK_TIMES, alias="showBreakTimes"),
    include_daily_details: bool = Query(DEFAULT_INCLUDE_DAILY_DETAILS, alias="includeDailyDetails"),
    company_id: str | None = Query(None, alias="companyId"),
    user_id: str | None = Query(None, alias="userId"),
    client_id: str | None = Query(None, alias="clientId"),
    location_id: str | None = Query(None, alias="locationId"),
) -> ReportOptions:
    """Collect the report query parameters into a validated ReportOptions."""
    try:
        return ReportOptions(
            start_date=start_date,
            end_date=end_date,
            hours_type=hours_type,
            include_breaks_hourly=include_breaks_hourly,
            show_break_times=show_break_times,
            include_daily_details=include_daily_details,
            company_id=company_id,
            user_id=user_id,
            client_id=client_id,
            location_id=location_id,
        )
    except ValidationError as e:
        # Report as a regular 422 instead of a server error
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e


# ============ Pydantic schemas ============


class AssignmentValidationRequest(CamelModel):
    assignment: Assignment
    workday_assignments: list[Assignment] = []
    task_types: list[TaskType] = []
