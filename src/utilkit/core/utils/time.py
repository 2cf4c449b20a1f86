"""Timezone-aware time helpers and human-readable date formatting.

ISO 8601 rendering choices are drawn from YAML config (``time.iso8601``).
Date names are always English, independent of the process locale.
"""
from __future__ import annotations

import asyncio
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Sequence, Union

from utilkit.core.exceptions import ConfigError, InvalidArgumentError

DateLike = Union[datetime, date, str, int, float]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DATE_FORMATS = ("long", "medium", "short", "digits-slash", "digits-dot")


def _cfg() -> Dict[str, Any]:
    """Return the ``time.iso8601`` settings.

    Raises:
        ConfigError: If the section is missing or incomplete
    """
    from utilkit.core.config.domains import TimeConfig

    config = TimeConfig().iso8601
    required_fields = ["timespec", "use_z_suffix", "strip_microseconds"]
    missing_fields = [f for f in required_fields if f not in config]
    if missing_fields:
        raise ConfigError(
            f"time.iso8601 configuration missing required fields: {missing_fields}",
            context={"missing": missing_fields},
        )
    return config


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime using config-driven precision."""
    cfg = _cfg()
    now = datetime.now(timezone.utc)
    if cfg["strip_microseconds"]:
        now = now.replace(microsecond=0)
    return now


def utc_timestamp() -> str:
    """Return ISO 8601 UTC timestamp according to YAML configuration."""
    cfg = _cfg()
    dt = utc_now()
    ts = dt.isoformat(timespec=cfg["timespec"]) if cfg["timespec"] else dt.isoformat()
    if cfg["use_z_suffix"]:
        ts = ts.replace("+00:00", "Z")
    return ts


def _from_iso(text: str) -> datetime:
    ts = text.strip()
    if ts.endswith(("Z", "z")):
        ts = ts[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(ts)
    except ValueError as exc:
        raise InvalidArgumentError(f"Not an ISO 8601 date: {text!r}", context={"value": text}) from exc


def parse_iso8601(timestamp_str: str) -> datetime:
    """Parse an ISO 8601 timestamp string into a UTC datetime."""
    cfg = _cfg()
    dt = _from_iso(timestamp_str)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    if cfg["strip_microseconds"]:
        dt = dt.replace(microsecond=0)
    return dt


def parse_date(value: DateLike) -> datetime:
    """Turn a date-like value into a ``datetime``.

    - ``datetime``: returned as provided
    - ``date``: midnight of that day (naive)
    - ``str``: ISO 8601, a trailing ``Z`` is accepted
    - ``int``/``float``: milliseconds since the UNIX epoch (UTC). Multiply
      UNIX seconds by 1000 first.

    Raises:
        InvalidArgumentError: For any other input or an unparseable string
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return _from_iso(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise InvalidArgumentError(f"Not a finite timestamp: {value!r}", context={"value": value})
        return _EPOCH + timedelta(milliseconds=value)
    raise InvalidArgumentError(
        f"Cannot parse a date from {type(value).__name__}",
        context={"type": type(value).__name__},
    )


def _instant(value: DateLike) -> datetime:
    dt = parse_date(value)
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def dates_equal(dates: Sequence[DateLike]) -> bool:
    """Return True when all ``dates`` denote the same instant.

    Naive datetimes are read as UTC.

    Raises:
        InvalidArgumentError: If fewer than two dates are given
    """
    if len(dates) < 2:
        raise InvalidArgumentError("At least two dates are required.", context={"count": len(dates)})
    first = _instant(dates[0])
    return all(_instant(d) == first for d in dates[1:])


def _clock(dt: datetime, *, spaced: bool) -> str:
    hour = dt.hour % 12 or 12
    period = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d}{' ' if spaced else ''}{period}"


def _ordinal(day: int) -> str:
    if day % 10 == 1 and day % 100 != 11:
        return f"{day}st"
    if day % 10 == 2 and day % 100 != 12:
        return f"{day}nd"
    if day % 10 == 3 and day % 100 != 13:
        return f"{day}rd"
    return f"{day}th"


def format_time(value: DateLike) -> str:
    """Format the time of day as ``2:05 PM``."""
    return _clock(parse_date(value), spaced=True)


def format_date(value: DateLike, into: str = "long", *, with_time: bool = False) -> str:
    """Format a date, e.g. for Thursday 3 January 2019, 14:00:

    - ``long``: ``Thursday, January 3rd 2019``
    - ``medium``: ``Thu Jan 3rd 2019``
    - ``short``: ``Jan 3, 2019``
    - ``digits-slash``: ``01/03/2019``
    - ``digits-dot``: ``01.03.2019``

    ``with_time`` appends `` at 2:00PM`` to the word formats and ``, 2:00PM``
    to the digit formats.

    Raises:
        InvalidArgumentError: For an unknown format name
    """
    if into not in DATE_FORMATS:
        raise InvalidArgumentError(
            f"Unknown date format {into!r}; expected one of {', '.join(DATE_FORMATS)}",
            context={"format": into},
        )
    dt = parse_date(value)
    weekday = _DAYS[dt.weekday()]
    month = _MONTHS[dt.month - 1]

    if into == "long":
        text = f"{weekday}, {month} {_ordinal(dt.day)} {dt.year}"
    elif into == "medium":
        text = f"{weekday[:3]} {month[:3]} {_ordinal(dt.day)} {dt.year}"
    elif into == "short":
        text = f"{month[:3]} {dt.day}, {dt.year}"
    else:
        sep = "/" if into == "digits-slash" else "."
        text = f"{dt.month:02d}{sep}{dt.day:02d}{sep}{dt.year}"
        return f"{text}, {_clock(dt, spaced=False)}" if with_time else text

    return f"{text} at {_clock(dt, spaced=False)}" if with_time else text


def _as_seconds(seconds: Union[int, float, str]) -> float:
    try:
        return float(seconds)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Not a number of seconds: {seconds!r}", context={"value": str(seconds)}) from exc


def secs_to_hhmmss(seconds: Union[int, float, str], *, as_mapping: bool = False) -> Union[str, Dict[str, int]]:
    """Split seconds into hours, minutes and seconds.

    Example:
        >>> secs_to_hhmmss(3661)
        '01:01:01'
        >>> secs_to_hhmmss(3661, as_mapping=True)
        {'hrs': 1, 'mins': 1, 'secs': 1}
    """
    total = _as_seconds(seconds)
    hrs = math.floor(total / 3600)
    mins = math.floor((total - hrs * 3600) / 60)
    secs = math.floor(total - hrs * 3600 - mins * 60)
    if as_mapping:
        return {"hrs": hrs, "mins": mins, "secs": secs}
    return f"{hrs:02d}:{mins:02d}:{secs:02d}"


def secs_to_mins(seconds: Union[int, float, str]) -> int:
    """Whole minutes in ``seconds`` (floored)."""
    return math.floor(_as_seconds(seconds) / 60)


async def wait(seconds: float) -> None:
    """Sleep for ``seconds`` without blocking the event loop."""
    await asyncio.sleep(seconds)


__all__ = [
    "DATE_FORMATS",
    "utc_now",
    "utc_timestamp",
    "parse_iso8601",
    "parse_date",
    "dates_equal",
    "format_time",
    "format_date",
    "secs_to_hhmmss",
    "secs_to_mins",
    "wait",
]
