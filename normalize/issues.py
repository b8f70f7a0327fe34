"""
Issue normalization: base time estimates from story points and the parent roll-up pass.

Issues live in a single owned list. Lookups by numeric id and by issue key resolve to
positions in that list, and the roll-up mutates records through those positions.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional
from normalize.models import Issue, IssueType
from normalize.util import normalize_issue

logger = logging.getLogger(__name__)

# Task/Bug story points -> hours. Larger tasks are estimated bottom-up from their subtasks.
STORY_POINT_HOURS = {1: 2.0, 2: 4.0, 3: 8.0}


def calculate_time_estimation(issue_type: IssueType, story_point: Optional[float]) -> float:
    """Return the base estimate in hours for a single issue."""
    if issue_type is IssueType.EPIC:
        return 0.0
    # for a subtask, 1 SP = 1 hour
    if issue_type is IssueType.SUBTASK:
        return float(story_point or 0.0)
    if story_point is None or float(story_point) not in STORY_POINT_HOURS:
        return 0.0
    return STORY_POINT_HOURS[int(story_point)]


class IssueIndex:
    """Owned collection of issues with id and key lookups."""

    def __init__(self, issues: Optional[List[Issue]] = None):
        self.issues: List[Issue] = []
        self.index_by_id: Dict[int, int] = {}
        self.index_by_key: Dict[str, int] = {}
        for issue in issues or []:
            self.add(issue)

    def add(self, issue: Issue) -> int:
        position = len(self.issues)
        self.issues.append(issue)
        self.index_by_id[issue.id] = position
        if issue.task_id:
            self.index_by_key[issue.task_id] = position
        return position

    def get_by_id(self, issue_id: int) -> Optional[Issue]:
        position = self.index_by_id.get(issue_id)
        return self.issues[position] if position is not None else None

    def get_by_key(self, key: str) -> Optional[Issue]:
        position = self.index_by_key.get(key)
        return self.issues[position] if position is not None else None

    def keys(self) -> List[str]:
        return list(self.index_by_key.keys())

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self):
        return iter(self.issues)


def roll_up_estimates(index: IssueIndex) -> None:
    """
    Add every child's base estimate to its direct parent, once.
    Only one level is summed: a grandchild's estimate does not reach its grandparent.
    Children pointing at an unknown parent id are skipped.
    """
    base_estimates = [issue.time_estimation_hours for issue in index.issues]
    missing = 0
    for position, issue in enumerate(index.issues):
        if not issue.parent_id:
            continue
        parent_position = index.index_by_id.get(issue.parent_id)
        if parent_position is None:
            missing += 1
            continue
        index.issues[parent_position].time_estimation_hours += base_estimates[position]
    if missing:
        logger.info("Skipped %d issue(s) whose parent is not in the export", missing)


def normalize_issues(rows: Iterable[Dict[str, Any]]) -> IssueIndex:
    """Normalize raw issue rows, compute base estimates and run the roll-up pass."""
    index = IssueIndex()
    for raw in rows or []:
        issue = normalize_issue(raw)
        issue.time_estimation_hours = calculate_time_estimation(issue.type, issue.story_point)
        index.add(issue)
    roll_up_estimates(index)
    logger.debug("Normalized %d issue(s)", len(index))
    return index
