# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""Runtime settings for the conduit container."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from conduit.logging.level import LogLevel

# Two years of minutes, counting leap years.
DEFAULT_SCHEDULE_HORIZON_MINUTES = 2 * 366 * 24 * 60


class ConduitSettings(BaseSettings):
    """
    Configuration for a conduit container.

    Loaded from ``CONDUIT_*`` environment variables when not given explicitly.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONDUIT_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    default_singleton: bool = Field(
        default=True,
        description="Lifecycle used by register() when singleton is not given",
    )
    schedule_horizon_minutes: int = Field(
        default=DEFAULT_SCHEDULE_HORIZON_MINUTES,
        gt=0,
        description="How far ahead a calendar schedule is searched for a match",
    )
    scheduler_backend: Literal["auto", "asyncio", "thread"] = Field(
        default="auto",
        description="Timer implementation used to arm scheduled jobs",
    )
    listener_error_level: str = Field(
        default=LogLevel.ERROR.value,
        description="Log level used when an event listener raises",
    )

    @field_validator("listener_error_level", mode="before")
    @classmethod
    def validate_level(cls, v: object) -> str:
        if not isinstance(v, (str, int)):
            raise ValueError(f"Log level must be a name or number, got {type(v).__name__}")
        return LogLevel.coerce(v).value

    @classmethod
    def load(cls) -> ConduitSettings:
        """Load settings from the environment or defaults."""
        return cls()
