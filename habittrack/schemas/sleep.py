"""Pydantic schemas for sleep logs, sleep settings and derived per-night stats."""

from datetime import date as date_cls

from pydantic import BaseModel, Field

from habittrack.config import settings as app_settings

# "HH:MM", optionally with seconds as returned by Postgres time columns
CLOCK_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


class SleepLogInput(BaseModel):
    """What the user submits for last night; id and date are assigned on storage."""

    lights_out: str = Field(..., pattern=CLOCK_TIME_PATTERN)
    wake_up: str = Field(..., pattern=CLOCK_TIME_PATTERN)
    out_of_bed: str = Field(..., pattern=CLOCK_TIME_PATTERN)
    latency: float = Field(0, ge=0, description="Minutes to fall asleep")
    awakenings: int = Field(0, ge=0)
    awake_duration: float = Field(0, ge=0, description="Minutes awake during the night")
    subjective_quality: float = Field(5, ge=1, le=10)


class SleepLogEntry(SleepLogInput):
    """One completed night. Analytics always recompute derived values from these fields."""

    id: str
    date: date_cls


class SleepLogRecord(SleepLogEntry):
    """Stored row: the entry plus its derived stats rounded to whole numbers."""

    total_time_in_bed: int
    total_sleep_time: int
    sleep_efficiency: int
    sleep_quality_score: int
    sleep_debt: int


class SleepSettings(BaseModel):
    target_hours: float = Field(default_factory=lambda: app_settings.default_target_hours, ge=4, le=12)
    target_bedtime: str = Field(
        default_factory=lambda: app_settings.default_target_bedtime, pattern=CLOCK_TIME_PATTERN
    )
    target_wake_time: str = Field(
        default_factory=lambda: app_settings.default_target_wake_time, pattern=CLOCK_TIME_PATTERN
    )


class SleepStats(BaseModel):
    """Per-night derived metrics. Minutes for durations, hours for debt."""

    total_time_in_bed: float
    total_sleep_time: float
    sleep_efficiency: float
    sleep_quality_score: float
    sleep_debt: float
