"""
Time conversion helpers shared by the issue and time-entry normalizers.
Spreadsheet serial dates are resolved against a fixed local anchor; hour quantities are
rendered as "Hh Mm" display strings.
"""
import math
from datetime import date, datetime, timedelta
from typing import Union

# serial value 45499 is 2022-07-26 00:00 local time in the timesheet exports
ANCHOR_SERIAL = 45499
ANCHOR_DATETIME = datetime(2022, 7, 26, 0, 0, 0)
MILLISECONDS_PER_DAY = 24 * 60 * 60 * 1000


def serial_date_to_timestamp(serial: Union[int, float]) -> int:
    """Convert a spreadsheet serial date to a unix timestamp in milliseconds."""
    anchor_ms = int(ANCHOR_DATETIME.timestamp() * 1000)
    return anchor_ms + int(round((float(serial) - ANCHOR_SERIAL) * MILLISECONDS_PER_DAY))


def serial_date_to_datetime(serial: Union[int, float]) -> datetime:
    """Return the naive local datetime for a spreadsheet serial date."""
    return ANCHOR_DATETIME + timedelta(days=float(serial) - ANCHOR_SERIAL)


def datetime_to_serial(value: Union[date, datetime]) -> float:
    """Convert a date-typed cell back to the spreadsheet serial it was stored as."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    value = value.replace(tzinfo=None)
    return ANCHOR_SERIAL + (value - ANCHOR_DATETIME) / timedelta(days=1)


def format_long_date(value: datetime) -> str:
    """Render a date like 'July 26, 2022'."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_duration(hours: float) -> str:
    """
    Format a fractional hour quantity as 'Hh Mm'.
    Zero segments are omitted, so 2.0 -> '2h', 0.5 -> '30m' and 0 -> ''.
    """
    hours = float(hours or 0.0)
    if not math.isfinite(hours):
        return ""
    whole_hours = int(math.floor(hours))
    minutes = _round_half_up((hours - whole_hours) * 60)
    if minutes == 60:
        whole_hours += 1
        minutes = 0

    parts = []
    if whole_hours != 0:
        parts.append(f"{whole_hours}h")
    if minutes != 0:
        parts.append(f"{minutes}m")
    return " ".join(parts)
