# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Phase = Literal["before", "after", "both"]


class TelemetryOptions(BaseModel):
    """Options for ``@telemetry``."""

    model_config = ConfigDict(frozen=True)

    logging: bool = Field(
        default=False, description="Log one line per invocation"
    )


class PublisherOptions(BaseModel):
    """Options for ``@publisher``."""

    model_config = ConfigDict(frozen=True)

    event: str = Field(min_length=1, description="Event name emitted on the container")
    phase: Phase = Field(
        default="after", description="When to emit relative to the call"
    )
    logging: bool = Field(
        default=False, description="Log one line per invocation"
    )

    @property
    def emits_before(self) -> bool:
        return self.phase in ("before", "both")

    @property
    def emits_after(self) -> bool:
        return self.phase in ("after", "both")
