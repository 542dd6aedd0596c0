"""Pydantic schemas for hydration logs and settings (snapshot rows from the data store)."""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from habittrack.config import settings as app_settings

logger = logging.getLogger(__name__)


class HydrationLogEntry(BaseModel):
    """One drink. completed_at is None while the drink is still in progress."""

    id: str
    amount: int = Field(..., gt=0, description="Volume in ml")
    label: str = "Quick Add"
    logged_at: datetime
    completed_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.completed_at is None


class Preset(BaseModel):
    """Quick-add button definition."""

    amount: int = Field(..., gt=0)
    label: str | None = None


def normalize_presets(raw: Any) -> list[dict]:
    """Turn a stored presets value into a list of {amount, label?} dicts.

    Older rows hold a plain list of numbers ([250, 500]); newer rows hold objects.
    Both shapes may be mixed in one list.
    """
    if raw is None:
        return []
    out = []
    legacy = 0
    for item in raw:
        if isinstance(item, bool):
            raise ValueError("preset must be a number or an object with an amount")
        if isinstance(item, float) and not item.is_integer():
            raise ValueError(f"preset amount must be a whole number of ml, got {item}")
        if isinstance(item, (int, float)):
            out.append({"amount": int(item)})
            legacy += 1
        elif isinstance(item, Preset):
            out.append(item.model_dump(exclude_none=True))
        elif isinstance(item, dict):
            out.append(item)
        else:
            raise ValueError("preset must be a number or an object with an amount")
    if legacy:
        logger.debug("normalized %d legacy numeric preset(s)", legacy)
    return out


def _default_presets() -> list[Preset]:
    return [Preset(amount=a) for a in app_settings.default_preset_amounts]


class HydrationSettings(BaseModel):
    daily_goal: int = Field(default_factory=lambda: app_settings.default_daily_goal, gt=0)
    presets: list[Preset] = Field(default_factory=_default_presets)

    @field_validator("presets", mode="before")
    @classmethod
    def _normalize_presets(cls, v: Any) -> Any:
        return normalize_presets(v)

    def serialize_presets(self) -> list[dict]:
        """Presets in storage shape; unlabelled presets are written as {"amount": n}."""
        return [p.model_dump(exclude_none=True) for p in self.presets]
