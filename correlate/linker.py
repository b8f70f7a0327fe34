"""
Linker helpers to associate time-entry descriptions with issue keys.
Descriptions are expected to start with '[<parent key>][<task key>]', e.g.
'[EPIC-9][SG-42] fixed bug'.
"""
import re
from typing import List, Optional, Tuple

DEFAULT_TASK_MARKER = "SG-"

# one bracketed group without nested brackets
BRACKET_GROUP = re.compile(r"\[([^\[\]]*)\]")


def references_task(description: str, task_marker: Optional[str] = None) -> bool:
    """True when the description mentions the tracker project key marker (case-sensitive)."""
    marker = DEFAULT_TASK_MARKER if task_marker is None else task_marker
    return bool(description) and marker in description


def find_bracket_groups(text: str) -> List[str]:
    if not text:
        return []
    return [m.group(1).strip() for m in BRACKET_GROUP.finditer(text)]


def extract_task_ids(description: str) -> Tuple[str, str]:
    """
    Return (parent_id, task_id) from the first two bracket groups of a description.
    A missing group yields an empty string.
    """
    groups = find_bracket_groups(description)
    parent_id = groups[0] if len(groups) > 0 else ""
    task_id = groups[1] if len(groups) > 1 else ""
    return parent_id, task_id
