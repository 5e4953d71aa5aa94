"""Source of "now" for date validation.

Managers never call ``datetime.now`` directly so tests can pin the date.
"""

from datetime import date, datetime

import pytz

from config import TIMEZONE


class Clock:
    """Wall clock in the configured timezone."""

    def __init__(self, timezone: str = TIMEZONE):
        self.tz = pytz.timezone(timezone)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()

    def to_local_date(self, value) -> date:
        """Normalize a date or datetime to a calendar day.

        Aware datetimes are converted to the clock's timezone first; naive
        datetimes keep their own calendar day.
        """
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(self.tz)
            return value.date()
        if isinstance(value, date):
            return value
        raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


class FixedClock(Clock):
    """Clock frozen on a given day, for tests and scripted runs."""

    def __init__(self, today: date, timezone: str = TIMEZONE):
        super().__init__(timezone)
        self._today = today

    def now(self) -> datetime:
        return self.tz.localize(datetime.combine(self._today, datetime.min.time()))

    def today(self) -> date:
        return self._today
