"""Wall clock access for stamping transaction records."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


class Clock:
    """
    Clock handed to the engine for stamping transaction records.

    Engines never read the system time directly, so swapping in a
    MockClock makes every record timestamp deterministic.
    """

    def now_utc(self) -> datetime:
        """Get current UTC datetime."""
        return datetime.now(timezone.utc)


class MockClock(Clock):
    """
    Mock clock for testing.

    Allows manual control of time for deterministic tests.
    """

    def __init__(self, initial_time: datetime | None = None) -> None:
        self._wall_time = initial_time or datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

    def now_utc(self) -> datetime:
        """Get current (mocked) UTC datetime."""
        return self._wall_time

    def advance(self, seconds: float) -> None:
        """Advance time by the given number of seconds."""
        self._wall_time += timedelta(seconds=seconds)
