"""Period statistics and chart series over a user's sleep logs (pure reducers, no I/O)."""

import math
from datetime import date, timedelta, tzinfo
from typing import Sequence

from habittrack.schemas.sleep import SleepLogEntry, SleepSettings, SleepStats
from habittrack.services.buckets import bedtime_quality_buckets
from habittrack.services.sleep_metrics import calculate_sleep_stats
from habittrack.services.timeutil import (
    MINUTES_PER_DAY,
    ClockRole,
    is_weekend,
    parse_clock_time,
    to_absolute_minutes,
    today,
)


def filter_period(
    logs: Sequence[SleepLogEntry],
    days: int | None,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> list[SleepLogEntry]:
    """Logs dated within the trailing `days` days ending at as_of (default: today in tz). days=None keeps all."""
    if days is None:
        return list(logs)
    end = as_of or today(tz)
    cutoff = end - timedelta(days=days)
    return [log for log in logs if cutoff < log.date <= end]


def _sorted_period(logs, days, as_of) -> list[SleepLogEntry]:
    return sorted(filter_period(logs, days, as_of), key=lambda log: log.date)


def _stats(log: SleepLogEntry, settings: SleepSettings) -> SleepStats:
    return calculate_sleep_stats(log, settings.target_hours)


def stats_for_period(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings,
    days: int = 7,
    as_of: date | None = None,
) -> dict:
    """Average quality, average sleep minutes, cumulative debt (hours) and log count."""
    period_logs = filter_period(logs, days, as_of)
    if not period_logs:
        return {"avg_quality": 0, "avg_duration": 0, "total_sleep_debt": 0, "logs_count": 0}

    total_quality = 0.0
    total_duration = 0.0
    total_debt = 0.0
    for log in period_logs:
        s = _stats(log, settings)
        total_quality += s.sleep_quality_score
        total_duration += s.total_sleep_time
        total_debt += s.sleep_debt
    n = len(period_logs)
    return {
        "avg_quality": total_quality / n,
        "avg_duration": total_duration / n,
        "total_sleep_debt": total_debt,
        "logs_count": n,
    }


def consistency_score(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings | None = None,
    days: int = 7,
    as_of: date | None = None,
) -> dict:
    """
    Bedtime regularity: 100 - stdDev/1.2, clamped to [0, 100].
    0 min stdDev -> 100, 60 min -> 50, 120 min -> 0.
    Fewer than two nights counts as perfectly consistent.
    """
    period_logs = filter_period(logs, days, as_of)
    if len(period_logs) < 2:
        return {"score": 100, "variance": 0, "std_dev": 0}

    # bedtimes after midnight but before 06:00 belong to the previous evening
    times = [to_absolute_minutes(log.lights_out, ClockRole.SLEEP) for log in period_logs]
    mean = sum(times) / len(times)
    variance = sum((t - mean) ** 2 for t in times) / len(times)
    std_dev = math.sqrt(variance)
    score = max(0, min(100, 100 - std_dev / 1.2))
    return {"score": score, "variance": variance, "std_dev": std_dev}


def wake_to_out_of_bed_minutes(wake_up: str, out_of_bed: str) -> int:
    wake = parse_clock_time(wake_up)
    out = parse_clock_time(out_of_bed)
    if out < wake:
        out += MINUTES_PER_DAY
    return out - wake


def grogginess_factor(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings | None = None,
    days: int = 7,
    as_of: date | None = None,
) -> dict:
    """Average minutes between waking up and getting out of bed."""
    period_logs = filter_period(logs, days, as_of)
    if not period_logs:
        return {"avg_minutes": 0, "logs_count": 0}
    total = sum(wake_to_out_of_bed_minutes(log.wake_up, log.out_of_bed) for log in period_logs)
    return {"avg_minutes": total / len(period_logs), "logs_count": len(period_logs)}


def weekday_vs_weekend(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings,
    days: int = 30,
    as_of: date | None = None,
) -> dict:
    """Mean sleep minutes on weekday vs weekend nights; positive difference = more sleep on weekends."""
    weekday, weekend = [], []
    for log in filter_period(logs, days, as_of):
        (weekend if is_weekend(log.date) else weekday).append(_stats(log, settings).total_sleep_time)

    weekday_avg = sum(weekday) / len(weekday) if weekday else 0
    weekend_avg = sum(weekend) / len(weekend) if weekend else 0
    return {
        "weekday_avg": weekday_avg,
        "weekend_avg": weekend_avg,
        "difference": weekend_avg - weekday_avg,
        "weekday_count": len(weekday),
        "weekend_count": len(weekend),
    }


def efficiency_trend(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings,
    days: int = 7,
    as_of: date | None = None,
) -> list[dict]:
    return [
        {"date": log.date.isoformat(), "efficiency": _stats(log, settings).sleep_efficiency}
        for log in _sorted_period(logs, days, as_of)
    ]


def sleep_architecture_data(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings,
    days: int = 7,
    as_of: date | None = None,
) -> list[dict]:
    """Stacked bar per night: latency, awake time and sleep time within time in bed."""
    out = []
    for log in _sorted_period(logs, days, as_of):
        s = _stats(log, settings)
        out.append({
            "date": log.date.isoformat(),
            "latency": log.latency,
            "awake_duration": log.awake_duration,
            "total_sleep_time": s.total_sleep_time,
            "total_time_in_bed": s.total_time_in_bed,
        })
    return out


def consistency_chart_data(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings | None = None,
    days: int = 7,
    as_of: date | None = None,
) -> list[dict]:
    """Floating bars from lights-out to out-of-bed, with positions on the overnight timeline."""
    out = []
    for log in _sorted_period(logs, days, as_of):
        start = to_absolute_minutes(log.lights_out, ClockRole.SLEEP)
        wake = to_absolute_minutes(log.wake_up, ClockRole.WAKE)
        out.append({
            "date": log.date.isoformat(),
            "lights_out": log.lights_out,
            "wake_up": log.wake_up,
            "out_of_bed": log.out_of_bed,
            "lights_out_minutes": start,
            "wake_up_minutes": wake,
            "out_of_bed_minutes": to_absolute_minutes(log.out_of_bed, ClockRole.WAKE),
            "sleep_window_minutes": wake - start,
        })
    return out


def quality_vs_duration_data(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings,
    days: int = 30,
    as_of: date | None = None,
) -> list[dict]:
    return [
        {
            "date": log.date.isoformat(),
            "duration_hours": _stats(log, settings).total_sleep_time / 60,
            "quality": log.subjective_quality,
        }
        for log in filter_period(logs, days, as_of)
    ]


def bedtime_quality_data(
    logs: Sequence[SleepLogEntry],
    settings: SleepSettings | None = None,
    days: int = 30,
    as_of: date | None = None,
) -> dict:
    """Raw points plus the 8PM-2AM bucket averages derived from them."""
    points = [
        {"date": log.date.isoformat(), "lights_out": log.lights_out, "quality": log.subjective_quality}
        for log in filter_period(logs, days, as_of)
    ]
    return {"points": points, "buckets": bedtime_quality_buckets(points)}


def weekly_average_score(logs: Sequence[SleepLogEntry], settings: SleepSettings) -> float:
    """Mean quality score over every log given (0 when empty)."""
    if not logs:
        return 0
    return sum(_stats(log, settings).sleep_quality_score for log in logs) / len(logs)


def _newest_first(logs: Sequence[SleepLogEntry]) -> list[SleepLogEntry]:
    return sorted(logs, key=lambda log: log.date, reverse=True)


def latest_stats(logs: Sequence[SleepLogEntry], settings: SleepSettings) -> SleepStats | None:
    ordered = _newest_first(logs)
    return _stats(ordered[0], settings) if ordered else None


def previous_stats(logs: Sequence[SleepLogEntry], settings: SleepSettings) -> SleepStats | None:
    """Stats of the night before the latest one (dashboard "yesterday")."""
    ordered = _newest_first(logs)
    return _stats(ordered[1], settings) if len(ordered) > 1 else None
