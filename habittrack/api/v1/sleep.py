"""Sleep analytics API: per-night stats and period statistics over a posted log snapshot."""

from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from habittrack.api.deps import get_as_of
from habittrack.schemas.sleep import SleepStats
from habittrack.schemas.snapshot import SleepAddRequest, SleepEntryRequest, SleepLogListRequest, SleepSnapshot
from habittrack.services import sleep_analytics, sleep_log
from habittrack.services.sleep_metrics import calculate_sleep_stats

router = APIRouter(tags=["sleep"])

PeriodDays = Annotated[int, Query(ge=1, le=365)]


@router.post("/sleep/stats", response_model=SleepStats, summary="Stats for one night")
async def post_sleep_stats(body: SleepEntryRequest) -> SleepStats:
    """Time in bed, sleep time, efficiency, quality score and debt for a single entry."""
    return calculate_sleep_stats(body.entry, body.settings.target_hours)


@router.post("/sleep/logs/add", summary="Store last night's entry")
async def post_add_sleep_log(
    body: SleepAddRequest,
    as_of: Annotated[date, Depends(get_as_of)],
) -> dict[str, Any]:
    logs, entry = sleep_log.add_log(body.logs, body.entry, body.settings.target_hours, as_of)
    return {"logs": logs, "entry": entry}


@router.post("/sleep/logs/{log_id}/delete", summary="Remove a night")
async def post_delete_sleep_log(log_id: str, body: SleepLogListRequest) -> dict[str, Any]:
    return {"logs": sleep_log.delete_log(body.logs, log_id)}


@router.post("/analytics/sleep/stats", summary="Sleep period averages")
async def post_sleep_period_stats(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> dict[str, Any]:
    return sleep_analytics.stats_for_period(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/consistency", summary="Bedtime consistency score")
async def post_sleep_consistency(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> dict[str, Any]:
    return sleep_analytics.consistency_score(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/grogginess", summary="Average wake-up to out-of-bed minutes")
async def post_sleep_grogginess(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> dict[str, Any]:
    return sleep_analytics.grogginess_factor(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/weekday-weekend", summary="Weekday vs weekend sleep duration")
async def post_sleep_weekday_weekend(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 30,
) -> dict[str, Any]:
    return sleep_analytics.weekday_vs_weekend(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/efficiency-trend", summary="Efficiency per night, oldest first")
async def post_sleep_efficiency_trend(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> list[dict[str, Any]]:
    return sleep_analytics.efficiency_trend(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/architecture", summary="Latency / awake / sleep bars, oldest first")
async def post_sleep_architecture(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> list[dict[str, Any]]:
    return sleep_analytics.sleep_architecture_data(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/consistency-chart", summary="Lights-out to out-of-bed bars")
async def post_sleep_consistency_chart(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> list[dict[str, Any]]:
    return sleep_analytics.consistency_chart_data(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/quality-vs-duration", summary="Scatter of sleep hours vs quality")
async def post_sleep_quality_vs_duration(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 30,
) -> list[dict[str, Any]]:
    return sleep_analytics.quality_vs_duration_data(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/bedtime-quality", summary="Quality by bedtime hour heatmap")
async def post_sleep_bedtime_quality(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 30,
) -> dict[str, Any]:
    return sleep_analytics.bedtime_quality_data(body.logs, body.settings, days, as_of)


@router.post("/analytics/sleep/summary", summary="Dashboard and statistics page in one call")
async def post_sleep_summary(
    body: SleepSnapshot,
    as_of: Annotated[date, Depends(get_as_of)],
    days: PeriodDays = 7,
) -> dict[str, Any]:
    latest = sleep_analytics.latest_stats(body.logs, body.settings)
    previous = sleep_analytics.previous_stats(body.logs, body.settings)
    return {
        "latest": latest.model_dump() if latest else None,
        "previous": previous.model_dump() if previous else None,
        "average_score": sleep_analytics.weekly_average_score(body.logs, body.settings),
        "period": sleep_analytics.stats_for_period(body.logs, body.settings, days, as_of),
        "consistency": sleep_analytics.consistency_score(body.logs, body.settings, days, as_of),
        "grogginess": sleep_analytics.grogginess_factor(body.logs, body.settings, days, as_of),
        "weekday_vs_weekend": sleep_analytics.weekday_vs_weekend(body.logs, body.settings, 30, as_of),
    }
