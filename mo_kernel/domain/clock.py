"""
Clock -- Deterministic time abstraction.

Responsibility:
    Provides an injectable clock interface so that domain and service
    code never call ``datetime.now()`` or ``date.today()`` directly.
    Records store their last-modified date as an 8-digit YYYYMMDD
    integer; ``today_y8()`` is the single place that conversion happens.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (except SystemClock,
    which is the one sanctioned I/O boundary for time).

Failure modes:
    - None at runtime.  ``to_y8`` accepts any ``date``/``datetime``.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone


def to_y8(value: date) -> int:
    """Convert a date to its 8-digit YYYYMMDD integer form."""
    return value.year * 10000 + value.month * 100 + value.day


class Clock(ABC):
    """
    Abstract clock interface.

    Contract:
        All services that need the current date must receive a Clock
        instance via constructor injection.

    Guarantees:
        - ``now()`` returns a timezone-aware ``datetime``.
        - ``today_y8()`` returns the date part of ``now()`` as YYYYMMDD.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...

    def today(self) -> date:
        """Get the current date."""
        return self.now().date()

    def today_y8(self) -> int:
        """Get the current date as an 8-digit integer (YYYYMMDD)."""
        return to_y8(self.today())


class SystemClock(Clock):
    """
    Production clock that returns actual system time.

    The date is taken in the local timezone of the host, which is the
    date the invoking user sees.
    """

    def now(self) -> datetime:
        """Get current system time with timezone."""
        return datetime.now().astimezone()


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    Guarantees:
        - ``now()`` returns the same value on repeated calls until
          ``advance()`` or ``set_time()`` is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        """
        Initialize with optional fixed time.

        Args:
            fixed_time: If provided, clock always returns this time.
                       If None, uses a default epoch time.
        """
        self._fixed_time = fixed_time or datetime(
            2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc
        )
        self._advance_seconds = 0

    def now(self) -> datetime:
        """Get the fixed/controlled time."""
        return self._fixed_time + timedelta(seconds=self._advance_seconds)

    def set_time(self, time: datetime) -> None:
        """Set the clock to a specific time."""
        self._fixed_time = time
        self._advance_seconds = 0

    def advance(self, seconds: int = 1) -> None:
        """Advance the clock by the specified seconds."""
        self._advance_seconds += seconds
