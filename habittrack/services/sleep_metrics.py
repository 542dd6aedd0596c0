"""
Per-night sleep metrics: time in bed, sleep time, efficiency, quality score and debt.

Quality score (0-100 in practice, not clamped):
    efficiency * 0.4 (max 40) + subjective quality * 4 (max 40)
    + latency points (max 10) + awake points (max 10)
"""

from habittrack.schemas.sleep import SleepLogEntry, SleepStats
from habittrack.services.timeutil import MINUTES_PER_DAY, parse_clock_time

NOON = 12 * 60


def time_in_bed_span(lights_out: str, out_of_bed: str) -> tuple[int, int]:
    """
    (start, end) in minutes for the in-bed span.
    Only an afternoon/evening lights-out followed by an earlier clock time rolls over;
    a morning lights-out with an earlier out-of-bed yields end < start (clamped to 0 later).
    """
    start = parse_clock_time(lights_out)
    end = parse_clock_time(out_of_bed)
    if start > end and start > NOON:
        end += MINUTES_PER_DAY
    return start, end


def efficiency_component(sleep_efficiency: float) -> float:
    return min(sleep_efficiency, 100) * 0.4


def feel_component(subjective_quality: float) -> float:
    return subjective_quality * 4


def latency_component(latency: float) -> float:
    # 10-25 min is the sweet spot; under 10 may indicate sleep deprivation
    if 10 <= latency <= 25:
        return 10
    if 25 < latency <= 45:
        return 5
    if latency < 10:
        return 7
    return 0


def awake_component(awakenings: int, awake_duration: float) -> float:
    """10 points minus 2 per awakening and 1 per 10 awake minutes, floored at 0."""
    return max(0, 10 - awakenings * 2 - awake_duration / 10)


def calculate_sleep_stats(entry: SleepLogEntry, target_hours: float = 8) -> SleepStats:
    """Derived stats for one night. Pure; never raises for well-formed entries."""
    start, end = time_in_bed_span(entry.lights_out, entry.out_of_bed)
    total_time_in_bed = max(0, end - start)
    total_sleep_time = max(0, total_time_in_bed - entry.latency - entry.awake_duration)
    sleep_efficiency = (total_sleep_time / total_time_in_bed) * 100 if total_time_in_bed > 0 else 0

    sleep_quality_score = (
        efficiency_component(sleep_efficiency)
        + feel_component(entry.subjective_quality)
        + latency_component(entry.latency)
        + awake_component(entry.awakenings, entry.awake_duration)
    )
    sleep_debt = target_hours - total_sleep_time / 60

    return SleepStats(
        total_time_in_bed=total_time_in_bed,
        total_sleep_time=total_sleep_time,
        sleep_efficiency=sleep_efficiency,
        sleep_quality_score=sleep_quality_score,
        sleep_debt=sleep_debt,
    )
