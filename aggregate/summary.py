"""
Aggregation of filtered time entries into per-task and overall work summaries.
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple
from aggregate.classifier import ActivityFilters, filter_entries
from correlate.models import TaskSummary, WorkSummary, RATIO_NOT_AVAILABLE
from normalize.issues import IssueIndex
from normalize.models import IssueStatus, TimeEntry
from normalize.timeutil import format_duration

logger = logging.getLogger(__name__)


def _quantity_per_task(entries: Iterable[TimeEntry]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for e in entries:
        totals[e.task_id] = totals.get(e.task_id, 0.0) + float(e.quantity or 0.0)
    return totals


def _task_summary(task_id: str, actual_quantity: float, issues: IssueIndex) -> TaskSummary:
    issue = issues.get_by_key(task_id) if task_id else None
    if issue is None:
        return TaskSummary(
            task_id=task_id,
            name='',
            status=IssueStatus.BACKLOG,
            actual_estimation=0.0,
            time_estimation='',
            actual_quantity=actual_quantity,
            time_spent=format_duration(actual_quantity),
        )
    estimation = issue.time_estimation_hours or 0.0
    return TaskSummary(
        task_id=task_id,
        name=issue.name or '',
        status=issue.status or IssueStatus.BACKLOG,
        actual_estimation=estimation,
        time_estimation=format_duration(estimation),
        actual_quantity=actual_quantity,
        time_spent=format_duration(actual_quantity),
    )


def summarize_tasks(entries: Iterable[TimeEntry], issues: IssueIndex) -> List[TaskSummary]:
    """Group entries by task key (first-seen order) and join each group with its issue."""
    totals = _quantity_per_task(entries or [])
    summaries = [_task_summary(task_id, quantity, issues) for task_id, quantity in totals.items()]
    unmatched = sum(1 for s in summaries if s.task_id and issues.get_by_key(s.task_id) is None)
    if unmatched:
        logger.info("%d task key(s) have no matching issue in the export", unmatched)
    return summaries


def format_ratio(total_quantity: float, total_estimation: float) -> Tuple[str, Optional[float]]:
    """Return the display ratio and its numeric value; N/A and None when nothing was estimated."""
    if not total_estimation:
        return RATIO_NOT_AVAILABLE, None
    value = total_quantity * 100 / total_estimation
    return f"{value:.2f} %", value


def summarize_work(summaries: List[TaskSummary]) -> WorkSummary:
    total_quantity = sum(s.actual_quantity for s in summaries)
    total_estimation = sum(s.actual_estimation for s in summaries)
    ratio, ratio_value = format_ratio(total_quantity, total_estimation)
    return WorkSummary(
        total_tasks=len(summaries),
        total_estimation=format_duration(total_estimation),
        total_time_spent=format_duration(total_quantity),
        ratio=ratio,
        total_estimation_hours=total_estimation,
        total_time_spent_hours=total_quantity,
        ratio_value=ratio_value,
    )


def derive_summaries(entries: List[TimeEntry], issues: IssueIndex, filters: Optional[ActivityFilters] = None) -> Tuple[List[TaskSummary], WorkSummary]:
    """
    Full re-derivation: filter the normalized entries, aggregate per task and overall.
    Call again whenever the entries, issues or filters change.
    """
    filters = filters or ActivityFilters()
    kept = filter_entries(entries, filters)
    logger.debug("Activity filters %r kept %d of %d entries", filters, len(kept), len(entries or []))
    summaries = summarize_tasks(kept, issues)
    return summaries, summarize_work(summaries)
