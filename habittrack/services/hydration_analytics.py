"""
Hydration statistics over a user's log snapshot.

Only completed entries (completed_at set) count toward totals; a drink in progress
shows up in split_active_history() and nowhere else. Days are attributed by logged_at,
so a drink started before midnight and finished after it belongs to the first day.
"""

import calendar
from datetime import date, timedelta, tzinfo
from typing import Sequence

from habittrack.schemas.hydration import HydrationLogEntry, HydrationSettings
from habittrack.services.buckets import hourly_block_shares
from habittrack.services.timeutil import (
    DAY_NAMES,
    date_key,
    day_of_week,
    is_weekend,
    round_half_up,
    to_local,
    today,
    wall_clock,
    window_start,
)

STREAK_LOOKBACK_DAYS = 365
TREND_PERCENT_CAP = 150

# hour ranges for the hourly distribution summary
PERIOD_HOURS = {
    "morning": range(6, 12),
    "afternoon": range(12, 18),
    "evening": range(18, 24),
    "night": range(0, 6),
}


def split_active_history(
    logs: Sequence[HydrationLogEntry],
) -> tuple[list[HydrationLogEntry], list[HydrationLogEntry]]:
    """(active, history): drinks in progress vs finished drinks, input order preserved."""
    active = [log for log in logs if log.is_active]
    history = [log for log in logs if not log.is_active]
    return active, history


def _history(logs: Sequence[HydrationLogEntry]) -> list[HydrationLogEntry]:
    return [log for log in logs if not log.is_active]


def _intake_on(logs, day: date, tz: tzinfo | None) -> int:
    return sum(log.amount for log in _history(logs) if date_key(log.logged_at, tz) == day)


def today_intake(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings | None = None,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> int:
    return _intake_on(logs, as_of or today(tz), tz)


def yesterday_intake(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings | None = None,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> int:
    return _intake_on(logs, (as_of or today(tz)) - timedelta(days=1), tz)


def today_logs(
    logs: Sequence[HydrationLogEntry],
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> list[HydrationLogEntry]:
    """Every entry logged today, active ones included, newest first."""
    day = as_of or today(tz)
    todays = [log for log in logs if date_key(log.logged_at, tz) == day]
    return sorted(todays, key=lambda log: wall_clock(log.logged_at, tz), reverse=True)


def daily_totals_map(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings | None = None,
    days: int | None = None,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> dict[date, int]:
    """date-key -> summed amount of completed entries. Days without logs are absent."""
    end = as_of or today(tz)
    start = window_start(end, days) if days is not None else None
    totals: dict[date, int] = {}
    for log in _history(logs):
        key = date_key(log.logged_at, tz)
        if start is not None and not (start <= key <= end):
            continue
        totals[key] = totals.get(key, 0) + log.amount
    return totals


def stats_for_period(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings,
    days: int = 7,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> dict:
    """
    avg_intake averages only days that have logs; consistency divides days at goal
    by the full window length, so unlogged days lower consistency but not the average.
    """
    totals = daily_totals_map(logs, settings, days, as_of, tz)
    days_at_goal = sum(1 for t in totals.values() if t >= settings.daily_goal)
    return {
        "avg_intake": sum(totals.values()) / len(totals) if totals else 0,
        "consistency": days_at_goal / days * 100 if days > 0 else 0,
        "days_at_goal": days_at_goal,
        "days_logged": len(totals),
    }


def hourly_distribution(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings | None = None,
    days: int | None = None,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> dict:
    """Totals and counts per hour of logged_at, the peak hour and the share of each part of the day."""
    hourly_totals = [0] * 24
    hourly_counts = [0] * 24
    end = as_of or today(tz)
    start = window_start(end, days) if days is not None else None
    for log in _history(logs):
        local = to_local(log.logged_at, tz)
        if start is not None and not (start <= local.date() <= end):
            continue
        hourly_totals[local.hour] += log.amount
        hourly_counts[local.hour] += 1

    # max() keeps the first maximum, so ties go to the earliest hour
    peak_hour = max(range(24), key=lambda h: hourly_totals[h])
    grand_total = sum(hourly_totals)
    periods = {
        name: (sum(hourly_totals[h] for h in hours) / grand_total * 100 if grand_total > 0 else 0)
        for name, hours in PERIOD_HOURS.items()
    }
    return {
        "hourly_totals": hourly_totals,
        "hourly_counts": hourly_counts,
        "peak_hour": peak_hour,
        "periods": periods,
        "blocks": hourly_block_shares(hourly_totals),
    }


def weekday_vs_weekend(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings | None = None,
    days: int = 30,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> dict:
    """Average daily total on logged weekdays vs logged weekend days."""
    weekday, weekend = [], []
    for day, total in daily_totals_map(logs, settings, days, as_of, tz).items():
        (weekend if is_weekend(day) else weekday).append(total)
    weekday_avg = sum(weekday) / len(weekday) if weekday else 0
    weekend_avg = sum(weekend) / len(weekend) if weekend else 0
    return {
        "weekday_avg": weekday_avg,
        "weekend_avg": weekend_avg,
        "difference": weekend_avg - weekday_avg,
        "weekday_count": len(weekday),
        "weekend_count": len(weekend),
    }


def daily_trend_data(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings,
    days: int = 7,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> list[dict]:
    """Exactly `days` points, oldest first, ending at as_of. Percentage is capped at 150."""
    end = as_of or today(tz)
    totals = daily_totals_map(logs, settings, days, end, tz)
    out = []
    for offset in range(days - 1, -1, -1):
        day = end - timedelta(days=offset)
        total = totals.get(day, 0)
        out.append({
            "date": day.isoformat(),
            "total": total,
            "percentage": min(total / settings.daily_goal * 100, TREND_PERCENT_CAP),
        })
    return out


def last_7_days_stats(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> list[dict]:
    """Weekly widget series: like daily_trend_data(7) but with whole percentages capped at 100."""
    return [
        {
            "date": point["date"],
            "total": point["total"],
            "percentage": min(round_half_up(point["total"] / settings.daily_goal * 100), 100),
        }
        for point in daily_trend_data(logs, settings, 7, as_of, tz)
    ]


def streak_info(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> dict:
    """
    Goal streaks over the trailing 365 days. current_streak counts back from today
    and is 0 if today is below goal; a day without logs breaks a streak.
    """
    end = as_of or today(tz)
    totals = daily_totals_map(logs, settings, STREAK_LOOKBACK_DAYS, end, tz)
    current = longest = run = 0
    for offset in range(STREAK_LOOKBACK_DAYS):
        day = end - timedelta(days=offset)
        if totals.get(day, 0) >= settings.daily_goal:
            run += 1
            longest = max(longest, run)
            if current == offset:
                current += 1
        else:
            run = 0
    return {"current_streak": current, "longest_streak": longest}


def day_of_week_stats(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings | None = None,
    days: int = 30,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> dict:
    """
    Average daily total per weekday (0 = Sunday) over the window, with the best and worst
    weekday among those that have data. Ties keep Sunday-first order.
    """
    buckets: list[list[int]] = [[] for _ in DAY_NAMES]
    for day, total in daily_totals_map(logs, settings, days, as_of, tz).items():
        buckets[day_of_week(day)].append(total)

    by_day = [
        {
            "day": i,
            "name": DAY_NAMES[i],
            "average": sum(values) / len(values) if values else 0,
            "days_logged": len(values),
        }
        for i, values in enumerate(buckets)
    ]
    # sorted() is stable with reverse=True too
    ranked = sorted((d for d in by_day if d["days_logged"]), key=lambda d: d["average"], reverse=True)
    return {
        "by_day": by_day,
        "best": ranked[0] if ranked else None,
        "worst": ranked[-1] if ranked else None,
    }


def _day_percentage(total: int, goal: int) -> int:
    return min(round_half_up(total / goal * 100), 100)


def history_by_month(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings,
    tz: tzinfo | None = None,
) -> list[dict]:
    """Completed logs grouped month -> day, newest first. Month goal = daily goal * days in month."""
    days: dict[date, dict] = {}
    for log in _history(logs):
        key = date_key(log.logged_at, tz)
        group = days.setdefault(key, {"date": key.isoformat(), "total": 0, "logs": []})
        group["logs"].append(log)
        group["total"] += log.amount

    months: dict[tuple[int, int], dict] = {}
    for key in sorted(days, reverse=True):
        group = days[key]
        group["percentage"] = _day_percentage(group["total"], settings.daily_goal)
        group["logs"].sort(key=lambda log: wall_clock(log.logged_at, tz), reverse=True)
        month = months.get((key.year, key.month))
        if month is None:
            month = months[(key.year, key.month)] = {
                "year": key.year,
                "month": key.month,
                "month_name": calendar.month_name[key.month],
                "total": 0,
                "goal": settings.daily_goal * calendar.monthrange(key.year, key.month)[1],
                "days": [],
            }
        month["days"].append(group)
        month["total"] += group["total"]
    return list(months.values())


def _heat_level(amount: int, percentage: float) -> str:
    if amount <= 0:
        return "none"
    if percentage >= 100:
        return "full"
    if percentage >= 50:
        return "medium"
    return "low"


def calendar_heatmap(
    logs: Sequence[HydrationLogEntry],
    settings: HydrationSettings,
    months: int = 12,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> list[dict]:
    """Month calendars for the trailing `months` months (current month first) with per-day intensity."""
    end = as_of or today(tz)
    totals = daily_totals_map(logs, settings, None, end, tz)
    out = []
    year, month = end.year, end.month
    for _ in range(months):
        first = date(year, month, 1)
        days_in_month = calendar.monthrange(year, month)[1]
        cells = []
        for d in range(1, days_in_month + 1):
            day = date(year, month, d)
            amount = totals.get(day, 0)
            percentage = amount / settings.daily_goal * 100
            cells.append({
                "date": day.isoformat(),
                "amount": amount,
                "percentage": percentage,
                "level": _heat_level(amount, percentage),
            })
        out.append({
            "year": year,
            "month": month,
            "month_name": calendar.month_name[month],
            "leading_blanks": day_of_week(first),
            "days": cells,
        })
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return out
