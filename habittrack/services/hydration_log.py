"""Hydration log lifecycle on an in-memory snapshot. Each call returns a new list (newest first)."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Sequence

from habittrack.schemas.hydration import HydrationLogEntry

logger = logging.getLogger(__name__)


class HydrationLogError(Exception):
    """Invalid lifecycle transition (unknown entry, or finishing a finished drink)."""


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def start_drink(
    logs: Sequence[HydrationLogEntry],
    amount: int,
    label: str = "Quick Add",
    now: datetime | None = None,
) -> tuple[list[HydrationLogEntry], HydrationLogEntry]:
    """Open a drink in progress. It counts toward no total until finished."""
    entry = HydrationLogEntry(id=str(uuid.uuid4()), amount=amount, label=label, logged_at=_now(now))
    return [entry, *logs], entry


def add_log(
    logs: Sequence[HydrationLogEntry],
    amount: int,
    label: str = "Quick Add",
    now: datetime | None = None,
) -> tuple[list[HydrationLogEntry], HydrationLogEntry]:
    """Log a finished drink: completed_at == logged_at."""
    ts = _now(now)
    entry = HydrationLogEntry(id=str(uuid.uuid4()), amount=amount, label=label, logged_at=ts, completed_at=ts)
    return [entry, *logs], entry


def finish_drink(
    logs: Sequence[HydrationLogEntry],
    log_id: str,
    now: datetime | None = None,
) -> tuple[list[HydrationLogEntry], HydrationLogEntry]:
    """Set completed_at on an active entry. logged_at (and so the day it counts for) is unchanged."""
    for i, log in enumerate(logs):
        if log.id != log_id:
            continue
        if not log.is_active:
            raise HydrationLogError(f"Drink {log_id} is already finished")
        finished = log.model_copy(update={"completed_at": _now(now)})
        out = list(logs)
        out[i] = finished
        return out, finished
    raise HydrationLogError(f"Drink {log_id} not found")


def delete_log(logs: Sequence[HydrationLogEntry], log_id: str) -> list[HydrationLogEntry]:
    """Drop the entry with log_id; unknown ids leave the list unchanged."""
    out = [log for log in logs if log.id != log_id]
    if len(out) == len(logs):
        logger.debug("delete_log: no entry with id=%s", log_id)
    return out
