"""Time window value type used by every period check."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from pydantic import AwareDatetime, BaseModel, ConfigDict, model_validator


def utc_now() -> datetime:
    """Default clock for the core."""
    return datetime.now(timezone.utc)


class TimeWindow(BaseModel):
    """Closed interval ``[start, end]`` of timezone-aware instants."""
    model_config = ConfigDict(frozen=True)

    start: AwareDatetime
    end: AwareDatetime

    @model_validator(mode="after")
    def _check_order(self) -> TimeWindow:
        if self.end < self.start:
            raise ValueError("end must not precede start")
        return self

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def contains_now(self, clock: Callable[[], datetime] = utc_now) -> bool:
        return self.contains(clock())
