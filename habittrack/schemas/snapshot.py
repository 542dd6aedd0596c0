"""Request bodies for analytics endpoints: a consistent snapshot of one user's logs and settings."""

from pydantic import BaseModel, Field

from habittrack.schemas.hydration import HydrationLogEntry, HydrationSettings
from habittrack.schemas.sleep import SleepLogEntry, SleepLogInput, SleepSettings


class HydrationSnapshot(BaseModel):
    logs: list[HydrationLogEntry] = Field(default_factory=list)
    settings: HydrationSettings = Field(default_factory=HydrationSettings)


class SleepSnapshot(BaseModel):
    logs: list[SleepLogEntry] = Field(default_factory=list)
    settings: SleepSettings = Field(default_factory=SleepSettings)


class SleepEntryRequest(BaseModel):
    """Body for POST /sleep/stats: one night plus the settings holding target_hours."""

    entry: SleepLogEntry
    settings: SleepSettings = Field(default_factory=SleepSettings)


class DrinkRequest(BaseModel):
    """Body for starting or adding a drink on top of the current log list."""

    logs: list[HydrationLogEntry] = Field(default_factory=list)
    amount: int = Field(..., gt=0)
    label: str = Field("Quick Add", min_length=1, max_length=128)


class LogListRequest(BaseModel):
    logs: list[HydrationLogEntry] = Field(default_factory=list)


class SleepAddRequest(BaseModel):
    """Body for storing last night's entry on top of the current log list."""

    logs: list[SleepLogEntry] = Field(default_factory=list)
    entry: SleepLogInput
    settings: SleepSettings = Field(default_factory=SleepSettings)


class SleepLogListRequest(BaseModel):
    logs: list[SleepLogEntry] = Field(default_factory=list)
