from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Defaults applied when the data store has no settings row for the user yet
    default_daily_goal: int = 2500  # ml
    default_presets: str = "250,500,750"  # comma-separated ml amounts
    default_target_hours: float = 8.0
    default_target_bedtime: str = "23:00"
    default_target_wake_time: str = "07:00"

    # IANA zone used for date-keys and hour-of-day when the request does not pass ?tz=
    local_timezone: str = "UTC"

    cors_origins: str = "http://localhost:5173,http://localhost:4173"
    rate_limit_default: str = "200/minute"
    log_level: str = "INFO"
    debug: bool = False

    @property
    def default_preset_amounts(self) -> list[int]:
        """Parsed default_presets; blank items are skipped."""
        return [int(p.strip()) for p in self.default_presets.split(",") if p.strip()]


settings = Settings()
