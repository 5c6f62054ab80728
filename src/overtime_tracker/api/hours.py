"""Month record endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from overtime_tracker.api.deps import get_container, require_user
from overtime_tracker.api.schemas import SaveHoursPayload  # noqa: TC001
from overtime_tracker.domain.hours import DayEntry, MonthReport
from overtime_tracker.services.auth import AccessClaims  # noqa: TC001
from overtime_tracker.services.hours import is_valid_month, resolve_month

if TYPE_CHECKING:
    from overtime_tracker.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hours", tags=["hours"])


@router.get("")
async def get_hours(
    request: Request,
    month: str | None = None,
    claims: AccessClaims = Depends(require_user),
) -> dict[str, object]:
    """Return the salary and entries saved for a month."""
    container: AppContainer = get_container(request)
    resolved = resolve_month(month)
    record = container.hours_service.get_month(claims.user_id, resolved)
    return {
        "salary": record.salary,
        "month": resolved,
        "days": [serialize_day(day) for day in record.days],
    }


@router.put("")
async def save_hours(
    payload: SaveHoursPayload,
    request: Request,
    month: str | None = None,
    claims: AccessClaims = Depends(require_user),
) -> dict[str, str]:
    """Replace the salary and every entry of a month."""
    if month is None or not is_valid_month(month):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid month. Use YYYY-MM.",
        )
    container: AppContainer = get_container(request)
    days = [
        DayEntry(
            date=day.date,
            start_time=day.start_time,
            end_time=day.end_time,
            project_worked=day.project_worked,
            calculation_model_id=day.calculation_model_id,
        )
        for day in payload.days
    ]
    container.hours_service.save_month(claims.user_id, month, payload.salary, days)
    return {"message": "Hours saved."}


@router.get("/summary")
async def get_summary(
    request: Request,
    month: str | None = None,
    claims: AccessClaims = Depends(require_user),
) -> dict[str, object]:
    """Return totals and chart breakdowns for a month."""
    container: AppContainer = get_container(request)
    resolved = resolve_month(month)
    report = container.hours_service.get_report(claims.user_id, resolved)
    return {"month": resolved, **serialize_report(report)}


def serialize_day(day: DayEntry) -> dict[str, str]:
    return {
        "id": day.id,
        "date": day.date,
        "startTime": day.start_time,
        "endTime": day.end_time,
        "projectWorked": day.project_worked,
        "calculationModelId": day.calculation_model_id,
    }


def serialize_report(report: MonthReport) -> dict[str, object]:
    return {
        "totals": {
            "totalHours": report.totals.total_hours,
            "totalValue": report.totals.total_value,
        },
        "dayHours": [
            {"label": point.label, "hours": point.hours} for point in report.day_hours
        ],
        "projectHours": [
            {"label": point.label, "hours": point.hours}
            for point in report.project_hours
        ],
        "projectSummary": [
            {
                "label": item.label,
                "hours": item.hours,
                "totalValue": item.total_value,
            }
            for item in report.project_summary
        ],
        "averageDailyHours": report.daily_average.average_hours,
        "workedDaysCount": report.daily_average.worked_days,
    }
