"""Sleep log lifecycle on an in-memory snapshot. Each call returns a new list (newest first)."""

import logging
import uuid
from datetime import date, tzinfo
from typing import Sequence

from habittrack.schemas.sleep import SleepLogEntry, SleepLogInput, SleepLogRecord
from habittrack.services.sleep_metrics import calculate_sleep_stats
from habittrack.services.timeutil import round_half_up, today

logger = logging.getLogger(__name__)


def add_log(
    logs: Sequence[SleepLogEntry],
    entry: SleepLogInput,
    target_hours: float = 8,
    as_of: date | None = None,
    tz: tzinfo | None = None,
) -> tuple[list[SleepLogEntry], SleepLogRecord]:
    """
    Store last night's entry under as_of (today in tz by default).
    Stats are computed from the values as submitted; then the numeric inputs and
    the stats are rounded half up to whole numbers for storage.
    """
    day = as_of or today(tz)
    stats = calculate_sleep_stats(SleepLogEntry(id="pending", date=day, **entry.model_dump()), target_hours)
    record = SleepLogRecord(
        id=str(uuid.uuid4()),
        date=day,
        lights_out=entry.lights_out,
        wake_up=entry.wake_up,
        out_of_bed=entry.out_of_bed,
        latency=round_half_up(entry.latency),
        awakenings=entry.awakenings,
        awake_duration=round_half_up(entry.awake_duration),
        subjective_quality=round_half_up(entry.subjective_quality),
        total_time_in_bed=round_half_up(stats.total_time_in_bed),
        total_sleep_time=round_half_up(stats.total_sleep_time),
        sleep_efficiency=round_half_up(stats.sleep_efficiency),
        sleep_quality_score=round_half_up(stats.sleep_quality_score),
        sleep_debt=round_half_up(stats.sleep_debt),
    )
    return [record, *logs], record


def delete_log(logs: Sequence[SleepLogEntry], log_id: str) -> list[SleepLogEntry]:
    """Drop the night with log_id; unknown ids leave the list unchanged."""
    out = [log for log in logs if log.id != log_id]
    if len(out) == len(logs):
        logger.debug("delete_log: no sleep entry with id=%s", log_id)
    return out
