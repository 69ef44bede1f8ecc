"""Calendar-day helpers.

Workouts are stored with a full timestamp but grouped and compared by the
local calendar day they fall on.
"""

from datetime import date, datetime, time, timedelta


def calendar_day(value: datetime | date) -> date:
    """Local calendar date of a timestamp, ignoring time of day.

    Timezone-aware values are converted to local time first.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def start_of_week(today: date | datetime) -> date:
    """The Sunday on or before ``today``."""
    day = calendar_day(today)
    # weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_dates(week_start: date | datetime) -> list[date]:
    """Seven consecutive dates beginning at ``week_start``."""
    first = calendar_day(week_start)
    return [first + timedelta(days=offset) for offset in range(7)]


def week_range(week_start: date | datetime) -> tuple[datetime, datetime]:
    """First and last instant of the week, as naive local datetimes."""
    first = calendar_day(week_start)
    last = first + timedelta(days=6)
    return datetime.combine(first, time.min), datetime.combine(last, time.max)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as stored in the database."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_day(value: date, fmt: str = "%a %b %d") -> str:
    return value.strftime(fmt)
