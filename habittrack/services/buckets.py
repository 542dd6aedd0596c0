"""Fixed categorical buckets for heatmaps: bedtime hour (sleep) and 6-hour blocks (hydration)."""

import logging
from typing import Iterable

logger = logging.getLogger(__name__)

BEDTIME_LABELS = ("8 PM", "9 PM", "10 PM", "11 PM", "12 AM", "1 AM", "2 AM")

# (label, clock range, hours) in display order
HOURLY_BLOCKS = (
    ("Night", "12am-6am", range(0, 6)),
    ("Morning", "6am-12pm", range(6, 12)),
    ("Afternoon", "12pm-6pm", range(12, 18)),
    ("Evening", "6pm-12am", range(18, 24)),
)


def bedtime_bucket_index(lights_out: str) -> int | None:
    """Bucket for a lights-out time: 20:xx -> 0 ... 02:xx -> 6. None outside 8PM-2AM."""
    hour = int(lights_out.split(":")[0])
    if hour >= 20:
        return hour - 20
    if hour <= 2:
        return hour + 4
    return None


def bedtime_quality_buckets(points: Iterable[dict]) -> list[dict]:
    """
    Average subjective quality per bedtime bucket.
    points: dicts with "lights_out" and "quality". Buckets without data have average None.
    """
    grouped: list[list[float]] = [[] for _ in BEDTIME_LABELS]
    dropped = 0
    for p in points:
        idx = bedtime_bucket_index(p["lights_out"])
        if idx is None:
            dropped += 1
            continue
        grouped[idx].append(p["quality"])
    if dropped:
        logger.debug("bedtime heatmap: %d entries outside 8PM-2AM skipped", dropped)
    return [
        {
            "label": label,
            "count": len(values),
            "average": sum(values) / len(values) if values else None,
        }
        for label, values in zip(BEDTIME_LABELS, grouped)
    ]


def hourly_block_shares(hourly_totals: list[float]) -> list[dict]:
    """Sum hourly totals into the four 6-hour blocks; percentage is 0 when nothing was logged."""
    grand_total = sum(hourly_totals)
    out = []
    for label, clock_range, hours in HOURLY_BLOCKS:
        total = sum(hourly_totals[h] for h in hours)
        out.append({
            "label": label,
            "range": clock_range,
            "total": total,
            "percentage": total / grand_total * 100 if grand_total > 0 else 0,
        })
    return out
