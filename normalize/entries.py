"""
Time-entry normalization.
Only rows whose description references a tracker key are kept; their parent and task keys
are parsed out of the description and the result is sorted deterministically.
"""
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple
from correlate.linker import extract_task_ids, references_task
from normalize.models import (
    TimeEntry,
    ENTRY_DATE_COLUMN,
    ENTRY_DESCRIPTION_COLUMN,
    ENTRY_INVOICEABLE_COLUMN,
    ENTRY_PROJECT_COLUMN,
    ENTRY_QUANTITY_COLUMN,
    ENTRY_TASK_COLUMN,
)
from normalize.timeutil import (
    datetime_to_serial,
    format_duration,
    format_long_date,
    serial_date_to_datetime,
    serial_date_to_timestamp,
)
from normalize.util import to_bool, to_number, to_text

logger = logging.getLogger(__name__)


def _date_serial(value: Any) -> float:
    # date-formatted cells arrive as datetimes (pandas.Timestamp is one)
    if isinstance(value, date):
        return datetime_to_serial(value)
    return to_number(value) or 0.0


def _date_fields(value: Any) -> Tuple[int, str]:
    """Return the millisecond timestamp and long date string for a raw Date cell."""
    serial = _date_serial(value)
    try:
        return serial_date_to_timestamp(serial), format_long_date(serial_date_to_datetime(serial))
    except (OverflowError, ValueError):
        logger.warning("Date value %r is out of range, using serial 0", value)
        return serial_date_to_timestamp(0), format_long_date(serial_date_to_datetime(0))


def normalize_time_entry(raw: Dict[str, Any]) -> TimeEntry:
    """Build a TimeEntry from a raw timesheet row and attach the parsed keys."""
    timestamp, formatted_date = _date_fields(raw.get(ENTRY_DATE_COLUMN))
    quantity = to_number(raw.get(ENTRY_QUANTITY_COLUMN)) or 0.0
    description = to_text(raw.get(ENTRY_DESCRIPTION_COLUMN), strip=False)
    parent_id, task_id = extract_task_ids(description)
    return TimeEntry(
        date=timestamp,
        formatted_date=formatted_date,
        description=description,
        is_invoiceable=to_bool(raw.get(ENTRY_INVOICEABLE_COLUMN)),
        project=to_text(raw.get(ENTRY_PROJECT_COLUMN)),
        quantity=quantity,
        time_spent=format_duration(quantity),
        task=to_text(raw.get(ENTRY_TASK_COLUMN)),
        parent_id=parent_id,
        task_id=task_id,
    )


def sort_time_entries(entries: Iterable[TimeEntry]) -> List[TimeEntry]:
    """Sort ascending by parent key, then task key, then description (stable, code-point order)."""
    return sorted(entries, key=lambda e: (e.parent_id, e.task_id, e.description))


def normalize_time_entries(rows: Iterable[Dict[str, Any]], task_marker: Optional[str] = None) -> List[TimeEntry]:
    """Normalize raw timesheet rows into sorted TimeEntry objects.

    Rows whose description does not contain the task marker are dropped before any parsing.
    """
    entries: List[TimeEntry] = []
    dropped = 0
    for raw in rows or []:
        if not isinstance(raw, dict):
            dropped += 1
            continue
        description = to_text(raw.get(ENTRY_DESCRIPTION_COLUMN), strip=False)
        if not references_task(description, task_marker):
            dropped += 1
            continue
        entry = normalize_time_entry(raw)
        if not entry.task_id:
            logger.warning("Could not parse a task key from description %r", description[:100])
        entries.append(entry)
    logger.debug("Normalized %d time entries, dropped %d row(s) without a task reference", len(entries), dropped)
    return sort_time_entries(entries)
