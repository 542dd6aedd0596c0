"""Hydration analytics and log lifecycle API over a posted log snapshot."""

from datetime import date, tzinfo
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query

from habittrack.api.deps import get_as_of, get_tz
from habittrack.schemas.snapshot import DrinkRequest, HydrationSnapshot, LogListRequest
from habittrack.services import hydration_analytics, hydration_log
from habittrack.services.hydration_log import HydrationLogError

router = APIRouter(tags=["hydration"])

PeriodDays = Annotated[int, Query(ge=1, le=365)]


@router.post("/analytics/hydration/today", summary="Today's intake and open drinks")
async def post_hydration_today(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: Annotated[date, Depends(get_as_of)],
) -> dict[str, Any]:
    active, _ = hydration_analytics.split_active_history(body.logs)
    intake = hydration_analytics.today_intake(body.logs, body.settings, as_of, tz)
    return {
        "date": as_of.isoformat(),
        "daily_goal": body.settings.daily_goal,
        "intake": intake,
        "progress": min(100, intake / body.settings.daily_goal * 100),
        "yesterday_intake": hydration_analytics.yesterday_intake(body.logs, body.settings, as_of, tz),
        "logs": hydration_analytics.today_logs(body.logs, as_of, tz),
        "active": active,
        "last_7_days": hydration_analytics.last_7_days_stats(body.logs, body.settings, as_of, tz),
        "presets": body.settings.serialize_presets(),
    }


@router.post("/analytics/hydration/stats", summary="Average intake and goal consistency")
async def post_hydration_stats(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> dict[str, Any]:
    return hydration_analytics.stats_for_period(body.logs, body.settings, days, as_of, tz)


@router.post("/analytics/hydration/hourly", summary="Intake by hour of day")
async def post_hydration_hourly(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: Annotated[date, Depends(get_as_of)],
    days: Annotated[int | None, Query(ge=1, le=365)] = None,
) -> dict[str, Any]:
    return hydration_analytics.hourly_distribution(body.logs, body.settings, days, as_of, tz)


@router.post("/analytics/hydration/weekday-weekend", summary="Weekday vs weekend daily intake")
async def post_hydration_weekday_weekend(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 30,
) -> dict[str, Any]:
    return hydration_analytics.weekday_vs_weekend(body.logs, body.settings, days, as_of, tz)


@router.post("/analytics/hydration/trend", summary="Daily totals for the trailing window")
async def post_hydration_trend(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> list[dict[str, Any]]:
    return hydration_analytics.daily_trend_data(body.logs, body.settings, days, as_of, tz)


@router.post("/analytics/hydration/streaks", summary="Current and longest goal streak")
async def post_hydration_streaks(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: Annotated[date, Depends(get_as_of)],
) -> dict[str, Any]:
    return hydration_analytics.streak_info(body.logs, body.settings, as_of, tz)


@router.post("/analytics/hydration/day-of-week", summary="Best and worst weekday")
async def post_hydration_day_of_week(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 30,
) -> dict[str, Any]:
    return hydration_analytics.day_of_week_stats(body.logs, body.settings, days, as_of, tz)


@router.post("/analytics/hydration/history", summary="Completed logs grouped by month and day")
async def post_hydration_history(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
) -> list[dict[str, Any]]:
    return hydration_analytics.history_by_month(body.logs, body.settings, tz)


@router.post("/analytics/hydration/heatmap", summary="Monthly calendar heatmap")
async def post_hydration_heatmap(
    body: HydrationSnapshot,
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: Annotated[date, Depends(get_as_of)],
    months: Annotated[int, Query(ge=1, le=24)] = 12,
) -> list[dict[str, Any]]:
    return hydration_analytics.calendar_heatmap(body.logs, body.settings, months, as_of, tz)


@router.post("/hydration/logs/start", summary="Start a drink (in progress)")
async def post_start_drink(body: DrinkRequest) -> dict[str, Any]:
    logs, entry = hydration_log.start_drink(body.logs, body.amount, body.label)
    return {"logs": logs, "entry": entry}


@router.post("/hydration/logs/add", summary="Log a finished drink")
async def post_add_log(body: DrinkRequest) -> dict[str, Any]:
    logs, entry = hydration_log.add_log(body.logs, body.amount, body.label)
    return {"logs": logs, "entry": entry}


@router.post("/hydration/logs/{log_id}/finish", summary="Finish a drink in progress")
async def post_finish_drink(log_id: str, body: LogListRequest) -> dict[str, Any]:
    try:
        logs, entry = hydration_log.finish_drink(body.logs, log_id)
    except HydrationLogError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"logs": logs, "entry": entry}


@router.post("/hydration/logs/{log_id}/delete", summary="Remove a drink")
async def post_delete_log(log_id: str, body: LogListRequest) -> dict[str, Any]:
    return {"logs": hydration_log.delete_log(body.logs, log_id)}
