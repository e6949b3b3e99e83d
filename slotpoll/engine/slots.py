"""Slot key domains for schedule and calendar polls.

A slot key is the opaque string identifying one votable unit of a poll:

- schedule polls: ``"{day}-{hour}"``, e.g. ``"Mon-07:00:00"``
- calendar polls: an ISO date, e.g. ``"2025-03-14"``

Schedule polls have a fixed grid (poll days x working hours) that is
enumerated up front so a tally always covers every cell. Calendar polls are
open-ended within their date range; their slots appear as votes reference
them.
"""
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from slotpoll.core.constants import (
    CALENDAR_VOTES,
    DAYS_OF_WEEK,
    DEFAULT_DAY_END,
    DEFAULT_DAY_START,
    DEFAULT_SLOT_MINUTES,
    POLL_KIND_CALENDAR,
    POLL_KIND_SCHEDULE,
    SCHEDULE_VOTES,
)

KEY_SEPARATOR = "-"


def working_hours(
    start: str = DEFAULT_DAY_START,
    end: str = DEFAULT_DAY_END,
    step_minutes: int = DEFAULT_SLOT_MINUTES,
) -> List[str]:
    """
    Enumerate the slot start times of one schedule day.

    Args:
        start: First slot, ``HH:MM``
        end: Last slot, ``HH:MM`` (inclusive)
        step_minutes: Slot granularity

    Returns:
        Ordered ``HH:MM:SS`` strings. The defaults give 07:00:00 .. 17:30:00
        (22 slots).
    """
    if step_minutes <= 0:
        raise ValueError("Slot length must be positive")

    current = datetime.strptime(start, "%H:%M")
    last = datetime.strptime(end, "%H:%M")
    if last < current:
        raise ValueError("Schedule day must end after it starts")

    hours = []
    while current <= last:
        hours.append(current.strftime("%H:%M:%S"))
        current += timedelta(minutes=step_minutes)
    return hours


def schedule_key(day: str, hour: str) -> str:
    return f"{day}{KEY_SEPARATOR}{hour}"


def split_schedule_key(slot_key: str) -> tuple:
    """Split ``"Mon-07:00:00"`` into ``("Mon", "07:00:00")``."""
    day, sep, hour = slot_key.partition(KEY_SEPARATOR)
    if not sep or not day or not hour:
        raise ValueError(f"Malformed schedule slot: {slot_key!r}")
    return day, hour


def calendar_key(value: date) -> str:
    return value.isoformat()


def parse_calendar_key(slot_key: str) -> date:
    """Parse a calendar slot; only the ``YYYY-MM-DD`` spelling is a valid key."""
    try:
        value = date.fromisoformat(slot_key)
    except (TypeError, ValueError):
        raise ValueError(f"Malformed calendar slot: {slot_key!r}")
    # fromisoformat also takes "20250302" and "2025-W09-7" on newer Pythons
    if calendar_key(value) != slot_key:
        raise ValueError(f"Malformed calendar slot: {slot_key!r}")
    return value


def schedule_slot_keys(days: Sequence[str], hours: Sequence[str]) -> List[str]:
    """Cross product of days and hours, in day-then-hour order."""
    return [schedule_key(day, hour) for day in days for hour in hours]


def calendar_dates(start: date, end: date) -> List[date]:
    """Every date in [start, end]; empty if end precedes start."""
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def parse_days(value: Optional[Any]) -> List[str]:
    """
    Parse a poll's stored day list.

    Accepts the comma-joined storage form (``"Mon, Tue"``) or a list.
    Blank entries are dropped; order is preserved.
    """
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [day.strip() for day in value if day and day.strip()]


def normalize_days(days: Iterable[str]) -> List[str]:
    """
    Validate weekday labels and return them de-duplicated in week order.

    Raises:
        ValueError: If a label is not one of Mon..Sun or the list is empty
    """
    selected = set()
    for day in days:
        label = day.strip().capitalize()
        if label not in DAYS_OF_WEEK:
            raise ValueError(f"Unknown day: {day!r}")
        selected.add(label)

    if not selected:
        raise ValueError("Please select at least one day for schedule poll")

    return [day for day in DAYS_OF_WEEK if day in selected]


class SlotDomain:
    """Universe of valid slot keys for one poll, plus record <-> key mapping."""

    kind: str = ""
    vote_collection: str = ""

    def seed_keys(self) -> List[str]:
        """Keys that exist in the tally before any vote is loaded."""
        return []

    def key_for(self, record: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def components(self, slot_key: str) -> Dict[str, Any]:
        """Vote record fields identifying the slot."""
        raise NotImplementedError

    def contains(self, slot_key: str) -> bool:
        raise NotImplementedError

    def ordered_keys(self) -> List[str]:
        """Every slot in display order."""
        raise NotImplementedError


class ScheduleDomain(SlotDomain):
    """Weekly grid: poll days x working hours."""

    kind = POLL_KIND_SCHEDULE
    vote_collection = SCHEDULE_VOTES

    def __init__(self, days: Sequence[str], hours: Optional[Sequence[str]] = None):
        self.days = list(days)
        self.hours = list(hours) if hours is not None else working_hours()
        self._keys = schedule_slot_keys(self.days, self.hours)
        self._key_set = frozenset(self._keys)

    def seed_keys(self) -> List[str]:
        return list(self._keys)

    def key_for(self, record: Mapping[str, Any]) -> str:
        return schedule_key(record["day"], _format_hour(record["hour"]))

    def components(self, slot_key: str) -> Dict[str, Any]:
        day, hour = split_schedule_key(slot_key)
        return {"day": day, "hour": hour}

    def contains(self, slot_key: str) -> bool:
        return slot_key in self._key_set

    def ordered_keys(self) -> List[str]:
        return list(self._keys)


class CalendarDomain(SlotDomain):
    """One slot per calendar day in [start, end]."""

    kind = POLL_KIND_CALENDAR
    vote_collection = CALENDAR_VOTES

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end

    def key_for(self, record: Mapping[str, Any]) -> str:
        return calendar_key(_as_date(record["vote_date"]))

    def components(self, slot_key: str) -> Dict[str, Any]:
        return {"vote_date": parse_calendar_key(slot_key)}

    def contains(self, slot_key: str) -> bool:
        try:
            value = parse_calendar_key(slot_key)
        except ValueError:
            return False
        return self.start <= value <= self.end

    def ordered_keys(self) -> List[str]:
        return [calendar_key(day) for day in calendar_dates(self.start, self.end)]


def domain_for(poll: Mapping[str, Any], hours: Optional[Sequence[str]] = None) -> SlotDomain:
    """
    Build the slot domain for a poll record.

    Args:
        poll: Poll record (``kind`` plus ``days`` or ``start_date``/``end_date``)
        hours: Working hours override for schedule polls

    Raises:
        ValueError: If the poll kind is unknown
    """
    kind = poll.get("kind")
    if kind == POLL_KIND_SCHEDULE:
        return ScheduleDomain(parse_days(poll.get("days")), hours)
    if kind == POLL_KIND_CALENDAR:
        return CalendarDomain(_as_date(poll["start_date"]), _as_date(poll["end_date"]))
    raise ValueError(f"Unknown poll kind: {kind!r}")


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_calendar_key(str(value))


def _format_hour(value: Any) -> str:
    # Time columns come back as datetime.time; text columns as "HH:MM:SS"
    if hasattr(value, "strftime"):
        return value.strftime("%H:%M:%S")
    return str(value)
