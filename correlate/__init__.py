"""
Correlate package: link time-entry descriptions to issue keys and hold the summary models.
"""

from .linker import extract_task_ids, references_task
from .models import TaskSummary, WorkSummary, RATIO_NOT_AVAILABLE

__all__ = ["extract_task_ids", "references_task", "TaskSummary", "WorkSummary", "RATIO_NOT_AVAILABLE"]
