"""
Normalization utility helpers.
Small helpers to turn raw spreadsheet rows into normalize.models entities. Missing or
unparseable values fall back to defaults; a single bad row never raises.
"""
import logging
import math
from typing import Dict, Any, Optional
from normalize.models import (
    Issue,
    IssueType,
    IssueStatus,
    ISSUE_ID_COLUMN,
    ISSUE_KEY_COLUMN,
    ISSUE_TYPE_COLUMN,
    ISSUE_SUMMARY_COLUMN,
    ISSUE_ASSIGNEE_COLUMN,
    ISSUE_ASSIGNEE_ID_COLUMN,
    ISSUE_STATUS_COLUMN,
    ISSUE_PARENT_COLUMN,
    ISSUE_PARENT_SUMMARY_COLUMN,
    ISSUE_STORY_POINT_COLUMN,
)

logger = logging.getLogger(__name__)

TRUTHY_STRINGS = ('true', 'yes', 'y', '1')


def to_number(value: Any) -> Optional[float]:
    """Coerce a cell value to float; None for blanks, NaN and unparseable text."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_int(value: Any) -> Optional[int]:
    number = to_number(value)
    return int(number) if number is not None else None


def to_text(value: Any, strip: bool = True) -> str:
    """Coerce a cell value to a string; blanks and NaN become ''."""
    if value is None:
        return ''
    if isinstance(value, float):
        if math.isnan(value):
            return ''
        # ids read from spreadsheets often arrive as 1234.0
        if value.is_integer():
            return str(int(value))
    text = str(value)
    return text.strip() if strip else text


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return to_number(value) not in (None, 0.0)
    return to_text(value).lower() in TRUTHY_STRINGS


def normalize_issue(raw: Dict[str, Any]) -> Issue:
    """Create a normalized Issue from a raw issue-tracker export row.
    The estimate is left at 0; issues.normalize_issues fills in base estimates and roll-up.
    """
    raw = raw if isinstance(raw, dict) else {}
    raw_type = raw.get(ISSUE_TYPE_COLUMN)
    issue_type = IssueType.parse(raw_type)
    if issue_type is None:
        logger.debug("Unknown issue type %r, treating as Task", raw_type)
        issue_type = IssueType.TASK
    status = IssueStatus.parse(raw.get(ISSUE_STATUS_COLUMN)) or IssueStatus.BACKLOG
    parent_id = to_int(raw.get(ISSUE_PARENT_COLUMN))
    return Issue(
        id=to_int(raw.get(ISSUE_ID_COLUMN)) or 0,
        task_id=to_text(raw.get(ISSUE_KEY_COLUMN)),
        type=issue_type,
        name=to_text(raw.get(ISSUE_SUMMARY_COLUMN)),
        assignee_name=to_text(raw.get(ISSUE_ASSIGNEE_COLUMN)),
        assignee_id=to_text(raw.get(ISSUE_ASSIGNEE_ID_COLUMN)),
        status=status,
        parent_id=parent_id or None,
        parent_name=to_text(raw.get(ISSUE_PARENT_SUMMARY_COLUMN)),
        story_point=to_number(raw.get(ISSUE_STORY_POINT_COLUMN)),
    )
