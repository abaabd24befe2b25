"""
Week calculator.

Derives ISO-8601 calendar-week boundaries (UTC, weeks start on Monday) used
to bucket weekly fragments.
"""

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta

from expeditions.config.constants import WEEK_DATE_FORMAT, WEEK_DATE_PATTERN
from expeditions.utils.datetime_utils import ensure_utc, utc_now

_WEEK_DATE_RE = re.compile(WEEK_DATE_PATTERN)


@dataclass(frozen=True)
class WeekInformation:
    """
    Boundaries of one ISO week.

    Attributes:
        week_number: ISO week number (1-53)
        year: ISO week-numbering year
        week_date: Human label, e.g. ``2026-W42``
        start_date: Monday 00:00 UTC (inclusive)
        end_date: Next Monday 00:00 UTC (exclusive)
    """

    week_number: int
    year: int
    week_date: str
    start_date: datetime
    end_date: datetime

    def shift(self, weeks: int) -> "WeekInformation":
        """
        Get the week ``weeks`` away from this one.

        Computed from dates, so year boundaries roll over: week 1 of 2027
        shifted by -1 is week 53 of 2026.
        """
        return get_week_information(self.start_date + timedelta(weeks=weeks))


def _from_monday(monday: date) -> WeekInformation:
    iso_year, iso_week, _ = monday.isocalendar()
    start = datetime.combine(monday, time.min, tzinfo=UTC)
    return WeekInformation(
        week_number=iso_week,
        year=iso_year,
        week_date=WEEK_DATE_FORMAT.format(year=iso_year, week=iso_week),
        start_date=start,
        end_date=start + timedelta(days=7),
    )


def get_week_information(now: datetime | None = None) -> WeekInformation:
    """
    Get information about the week containing ``now``.

    Args:
        now: Reference instant (defaults to current UTC time)

    Returns:
        WeekInformation of the ISO week
    """
    day = ensure_utc(now or utc_now()).date()
    return _from_monday(day - timedelta(days=day.weekday()))


def parse_week_date(label: str) -> WeekInformation:
    """
    Parse a ``YYYY-Www`` label.

    Args:
        label: Week label as produced by ``get_week_information``

    Returns:
        WeekInformation for the labelled week

    Raises:
        ValueError: If label is malformed or the week does not exist
    """
    match = _WEEK_DATE_RE.match(label.strip()) if label else None
    if not match:
        raise ValueError(f"Invalid week label: {label!r}. Expected YYYY-Www")

    year = int(match.group("year"))
    week = int(match.group("week"))
    try:
        monday = date.fromisocalendar(year, week, 1)
    except ValueError as exc:
        raise ValueError(f"Week {week} does not exist in {year}") from exc

    return _from_monday(monday)
