"""Library Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting overridable through CHAINLAUNCH_* environment variables or .env
    - get_settings() is cached (lru_cache), single instance per process
    - Durations are non-negative; step_timeout_seconds=None means no deadline

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box with no environment
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """chainlaunch settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CHAINLAUNCH_", case_sensitive=False, extra="ignore",
    )

    # Launch timing
    launch_time_safety_margin_seconds: int = 30

    # Deadline applied to every external step (params query, broadcast, build, fetch...)
    step_timeout_seconds: float | None = None

    # Genesis
    genesis_fetch_timeout_seconds: float = 30.0
    genesis_moniker: str = "moniker"

    # Events
    event_queue_size: int = 256

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator(
        "launch_time_safety_margin_seconds", "genesis_fetch_timeout_seconds",
        "step_timeout_seconds",
    )
    @classmethod
    def non_negative(cls, v: float | None) -> float | None:
        if v is not None and v < 0:
            raise ValueError("must be >= 0")
        return v

    @field_validator("log_format")
    @classmethod
    def known_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def launch_time_safety_margin(self) -> timedelta:
        return timedelta(seconds=self.launch_time_safety_margin_seconds)


@lru_cache
def get_settings() -> Settings:
    return Settings()
