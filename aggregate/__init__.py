"""
Aggregate package: activity filtering and task/work summaries.
"""

from .classifier import ActivityFilters, filter_entries
from .summary import derive_summaries, summarize_tasks, summarize_work

__all__ = ["ActivityFilters", "filter_entries", "derive_summaries", "summarize_tasks", "summarize_work"]
