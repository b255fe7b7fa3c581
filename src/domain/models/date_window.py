"""Date window calculator for the named due-date filters.

Periods:

- ``today``: ``[start of day, start of day + 24h)``
- ``week``: ISO week, Monday 00:00 through Sunday 23:59:59.999999 inclusive
- ``month``: first instant through last instant of the calendar month, inclusive

Any other token (or none) means no filtering. Calendar boundaries are taken
in the supplied time zone; a naive reference instant is interpreted in it.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo

from domain.enums import DatePeriod

from .task_predicate import AnyOf, FieldInRange, FieldIsAbsent, TaskPredicate

DUE_DATE_FIELD = "due_date"
_ONE_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True)
class DateWindow:
    """A computed due-date interval."""

    period: DatePeriod
    start: datetime
    end: datetime
    end_inclusive: bool = True

    def contains(self, instant: datetime) -> bool:
        if instant < self.start:
            return False
        return instant <= self.end if self.end_inclusive else instant < self.end

    def to_predicate(self, include_undated: bool = True) -> TaskPredicate:
        """Build the due-date filter.

        Undated tasks count as perpetually due and are included unless
        ``include_undated`` is False.
        """
        in_window = FieldInRange(DUE_DATE_FIELD, self.start, self.end, self.end_inclusive)
        if not include_undated:
            return in_window
        return AnyOf.of(in_window, FieldIsAbsent(DUE_DATE_FIELD))


def parse_period(token: str | DatePeriod | None) -> DatePeriod | None:
    """Return the period for a filter token, or None when unrecognized."""
    if token is None or isinstance(token, DatePeriod):
        return token
    try:
        return DatePeriod(token.strip().lower())
    except ValueError:
        return None


def start_of_day(reference: datetime) -> datetime:
    return reference.replace(hour=0, minute=0, second=0, microsecond=0)


def window_for(token: str | DatePeriod | None, reference: datetime, zone: tzinfo = UTC) -> DateWindow | None:
    """Compute the window for ``token`` around ``reference``.

    Args:
        token: ``today``, ``week`` or ``month`` (case-insensitive)
        reference: The instant the window is computed for
        zone: Time zone in which day, week and month boundaries are drawn

    Returns:
        The DateWindow, or None when the token is absent or unrecognized
    """
    period = parse_period(token)
    if period is None:
        return None

    local = reference.replace(tzinfo=zone) if reference.tzinfo is None else reference.astimezone(zone)
    day = start_of_day(local)

    match period:
        case DatePeriod.TODAY:
            # Exactly 24 elapsed hours, even across a DST change
            end = day.astimezone(UTC) + timedelta(hours=24)
            return DateWindow(period, day, end, end_inclusive=False)

        case DatePeriod.WEEK:
            monday = day - timedelta(days=day.weekday())
            next_monday = monday + timedelta(days=7)
            return DateWindow(period, monday, next_monday - _ONE_MICROSECOND)

        case DatePeriod.MONTH:
            first = day.replace(day=1)
            if first.month == 12:
                next_first = first.replace(year=first.year + 1, month=1)
            else:
                next_first = first.replace(month=first.month + 1)
            return DateWindow(period, first, next_first - _ONE_MICROSECOND)

    return None
