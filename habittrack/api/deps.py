"""FastAPI dependencies: timezone and reference date for analytics windows."""

from datetime import date, tzinfo
from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import Depends, HTTPException, Query

from habittrack.config import settings
from habittrack.services.timeutil import today


def get_tz(
    tz: str | None = Query(default=None, description="IANA timezone for date-keys, e.g. Europe/Berlin"),
) -> tzinfo:
    name = tz or settings.local_timezone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {name}")


def get_as_of(
    tz: Annotated[tzinfo, Depends(get_tz)],
    as_of: date | None = Query(default=None, description="Reference day (default: today in tz)"),
) -> date:
    return as_of or today(tz)
