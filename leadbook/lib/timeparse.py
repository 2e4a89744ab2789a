"""
Human date parsing for --when, --deadline and friends.

Everything comes back as an aware UTC datetime. Naive input is taken as UTC.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from leadbook.lib.errors import ConfigError

ACCEPTED_FORMATS = "now, today, yesterday, tomorrow, +7d, -2h, 3d ago, in 1w, YYYY-MM-DD [HH:MM[:SS]]"

UNITS = {
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}

_OFFSET = re.compile(r'^([+-]?)(\d+)\s*([mhdw])$')
_AGO = re.compile(r'^(\d+)\s*([mhdw])\s+ago$')
_IN = re.compile(r'^in\s+(\d+)\s*([mhdw])$')

_WORDS = {
    "now": timedelta(0),
    "today": timedelta(0),
    "yesterday": timedelta(days=-1),
    "tomorrow": timedelta(days=1),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_iso(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    A trailing "Z" is accepted on every supported Python. Naive values are UTC.

    Raises:
        ValueError: if `value` isn't ISO 8601
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _delta(amount: str, unit: str) -> timedelta:
    return timedelta(**{UNITS[unit]: int(amount)})


def _relative(text: str, now: datetime) -> Optional[datetime]:
    """Apply a relative offset to `now`, or None if `text` isn't one."""
    match = _OFFSET.match(text)
    if match:
        sign, amount, unit = match.groups()
        delta = _delta(amount, unit)
        return now + delta if sign == "+" else now - delta

    match = _AGO.match(text)
    if match:
        return now - _delta(*match.groups())

    match = _IN.match(text)
    if match:
        return now + _delta(*match.groups())

    return None


def parse_when(value: str, now: Optional[datetime] = None) -> datetime:
    """
    Parse a human date string relative to `now`.

    A bare offset such as "2d" counts backwards, like "2d ago". Use "+2d" or
    "in 2d" for the future.

    Raises:
        ConfigError: if the value matches none of the accepted formats, or
            lands outside the representable date range
    """
    if now is None:
        now = utc_now()
    text = value.strip().lower()

    try:
        if text in _WORDS:
            return now + _WORDS[text]
        relative = _relative(text, now)
    except OverflowError:
        raise ConfigError(f"Date '{value}' is out of range") from None
    if relative is not None:
        return relative

    try:
        return parse_iso(value)
    except ValueError:
        raise ConfigError(f"Invalid date '{value}'. Expected one of: {ACCEPTED_FORMATS}") from None


def parse_optional(value: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """Like parse_when, but None stays None."""
    if value is None:
        return None
    return parse_when(value, now)
