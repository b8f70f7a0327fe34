"""
Data models for per-task and overall work summaries.
"""

from typing import Optional
from normalize.models import IssueStatus

# reported instead of a ratio when nothing was estimated
RATIO_NOT_AVAILABLE = "N/A"


class TaskSummary:
    """
    Time spent on one task key joined with the matching issue's estimate.
    """
    def __init__(self, task_id: str, name: str, status: IssueStatus, actual_estimation: float, time_estimation: str, actual_quantity: float, time_spent: str):
        self.task_id = task_id
        self.name = name
        self.status = status
        self.actual_estimation = actual_estimation  # e.g. 4
        self.time_estimation = time_estimation  # e.g. "4h"
        self.actual_quantity = actual_quantity  # e.g. 2.5
        self.time_spent = time_spent  # e.g. "2h 30m"

    def to_dict(self) -> dict:
        return {
            'task_id': self.task_id,
            'name': self.name,
            'status': self.status.value,
            'actual_estimation': self.actual_estimation,
            'time_estimation': self.time_estimation,
            'actual_quantity': self.actual_quantity,
            'time_spent': self.time_spent,
        }

    def __str__(self):
        return f"{self.task_id}\t{self.name}\t{self.status.value}\t{self.time_estimation}\t{self.time_spent}"


class WorkSummary:
    """
    Aggregate over all task summaries.
    """
    def __init__(self, total_tasks: int, total_estimation: str, total_time_spent: str, ratio: str, total_estimation_hours: float = 0.0, total_time_spent_hours: float = 0.0, ratio_value: Optional[float] = None):
        self.total_tasks = total_tasks
        self.total_estimation = total_estimation
        self.total_time_spent = total_time_spent
        self.ratio = ratio  # e.g. "50.00 %" or RATIO_NOT_AVAILABLE
        self.total_estimation_hours = total_estimation_hours
        self.total_time_spent_hours = total_time_spent_hours
        self.ratio_value = ratio_value

    @property
    def ratio_available(self) -> bool:
        return self.ratio_value is not None

    def to_dict(self) -> dict:
        return {
            'total_tasks': self.total_tasks,
            'total_estimation': self.total_estimation,
            'total_time_spent': self.total_time_spent,
            'ratio': self.ratio,
            'total_estimation_hours': self.total_estimation_hours,
            'total_time_spent_hours': self.total_time_spent_hours,
            'ratio_value': self.ratio_value,
        }

    def __str__(self):
        return (
            f"Total Tasks: {self.total_tasks}\n"
            f"Total Estimation: {self.total_estimation}\n"
            f"Total Time Spent: {self.total_time_spent}\n"
            f"Ratio (Spent / Estimation): {self.ratio}"
        )
