"""
Sample data for the Anyteam scenarios.

Account, profile and meeting values come from settings (and therefore from
the environment or ``.env``); this module adds the fixed sample values and
the date/time formatting the calendar UIs expect.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from .config import Settings, get_settings


class Emails:
    """Sample e-mail addresses used by the login page checks."""

    VALID_BUSINESS = "test@company.com"
    VALID_PERSONAL = "test@gmail.com"
    INVALID = "invalid-email"
    EMPTY = ""


_CLOCK_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([ap]\.?m\.?)?\s*$", re.IGNORECASE)


def parse_clock(text: str) -> time:
    """
    Parse a Google Calendar time such as ``2:00pm``, ``2pm`` or ``14:00``.

    Raises:
        ValueError: If the text is not a recognizable time.
    """
    match = _CLOCK_RE.match(text)
    if not match:
        raise ValueError(f"Unrecognized time: {text!r}")

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").replace(".", "").lower()

    if meridiem:
        if not 1 <= hour <= 12:
            raise ValueError(f"Hour out of range for 12-hour time: {text!r}")
        hour = hour % 12 + (12 if meridiem == "pm" else 0)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Time out of range: {text!r}")
    return time(hour, minute)


def format_clock_12h(value: time) -> str:
    """Format a time as ``2:00pm``."""
    hour = value.hour % 12 or 12
    suffix = "pm" if value.hour >= 12 else "am"
    return f"{hour}:{value.minute:02d}{suffix}"


def time_slot_variants(start: str, end: str) -> List[str]:
    """
    Return the ways the Anyteam calendar may render a meeting's time slot.

    >>> time_slot_variants("2:00pm", "3:00pm")
    ['14:00 - 15:00', '2:00pm - 3:00pm']
    """
    start_t, end_t = parse_clock(start), parse_clock(end)
    return [
        f"{start_t:%H:%M} - {end_t:%H:%M}",
        f"{format_clock_12h(start_t)} - {format_clock_12h(end_t)}",
    ]


def format_event_date(value: date) -> str:
    """Format a date the way the event editor's date field accepts it, e.g. ``Tuesday, October 20``."""
    return f"{value:%A}, {value:%B} {value.day}"


def meeting_date(days_ahead: int = 1, today: Optional[date] = None) -> date:
    """Date of the scheduled meeting, ``days_ahead`` days from today."""
    return (today or date.today()) + timedelta(days=days_ahead)


def is_tomorrow(value: date, today: Optional[date] = None) -> bool:
    return value == (today or date.today()) + timedelta(days=1)


@dataclass
class MeetingDetails:
    """A meeting to create in Google Calendar and find in Anyteam."""

    title: str
    date: date
    start_time: str
    end_time: str
    guests: List[str] = field(default_factory=list)

    @property
    def time_slots(self) -> List[str]:
        return time_slot_variants(self.start_time, self.end_time)

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, parse_clock(self.start_time))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None,
                      today: Optional[date] = None) -> "MeetingDetails":
        settings = settings or get_settings()
        meeting = settings.meeting
        return cls(
            title=meeting.title,
            date=meeting_date(meeting.days_ahead, today),
            start_time=meeting.start_time,
            end_time=meeting.end_time,
            guests=[meeting.guest_email] if meeting.guest_email else [],
        )
