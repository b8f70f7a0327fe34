"""
Normalized entities for issue-tracker records and time-tracking entries.
Raw spreadsheet rows are plain dicts keyed by the export column headers listed below.
"""

from enum import Enum
from typing import Optional

# issue-tracker export headers
ISSUE_ID_COLUMN = "Issue id"
ISSUE_KEY_COLUMN = "Issue key"
ISSUE_TYPE_COLUMN = "Issue Type"
ISSUE_SUMMARY_COLUMN = "Summary"
ISSUE_ASSIGNEE_COLUMN = "Assignee"
ISSUE_ASSIGNEE_ID_COLUMN = "Assignee Id"
ISSUE_STATUS_COLUMN = "Status"
ISSUE_PARENT_COLUMN = "Parent"
ISSUE_PARENT_SUMMARY_COLUMN = "Parent summary"
ISSUE_STORY_POINT_COLUMN = "Custom field (Story point estimate)"

# time-tracking export headers
ENTRY_DATE_COLUMN = "Date"
ENTRY_DESCRIPTION_COLUMN = "Description"
ENTRY_INVOICEABLE_COLUMN = "Is Invoiceable"
ENTRY_PROJECT_COLUMN = "Project"
ENTRY_QUANTITY_COLUMN = "Quantity"
ENTRY_TASK_COLUMN = "Task"


class IssueType(Enum):
    BUG = "Bug"
    EPIC = "Epic"
    TASK = "Task"
    SUBTASK = "Subtask"

    @classmethod
    def parse(cls, value) -> Optional["IssueType"]:
        """Match a tracker label case-insensitively; 'Sub-task' is accepted. Returns None when unknown."""
        label = str(value or "").strip().lower().replace("-", "").replace(" ", "")
        for member in cls:
            if member.value.lower() == label:
                return member
        return None


class IssueStatus(Enum):
    BACKLOG = "Backlog"
    IN_PROGRESS = "In Progress"
    TO_BE_MERGED = "To be Merged"
    IN_DEV = "IN DEV"
    IN_STAGING = "IN STAGING"
    DONE = "Done"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value) -> Optional["IssueStatus"]:
        label = " ".join(str(value or "").split()).lower()
        for member in cls:
            if member.value.lower() == label:
                return member
        return None


class Issue:
    """
    Normalized issue record. time_estimation_hours starts as the base estimate
    and is increased once by the parent roll-up pass.
    """
    def __init__(self, id: int, task_id: str, type: IssueType, name: str, assignee_name: str, assignee_id: str, status: IssueStatus, parent_id: Optional[int], parent_name: str, story_point: Optional[float], time_estimation_hours: float = 0.0):
        self.id = id
        self.task_id = task_id  # issue key, e.g. SG-42
        self.type = type
        self.name = name
        self.assignee_name = assignee_name
        self.assignee_id = assignee_id
        self.status = status
        self.parent_id = parent_id
        self.parent_name = parent_name
        self.story_point = story_point
        self.time_estimation_hours = time_estimation_hours

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'task_id': self.task_id,
            'type': self.type.value,
            'name': self.name,
            'assignee_name': self.assignee_name,
            'assignee_id': self.assignee_id,
            'status': self.status.value,
            'parent_id': self.parent_id,
            'parent_name': self.parent_name,
            'story_point': self.story_point,
            'time_estimation_hours': self.time_estimation_hours,
        }


class TimeEntry:
    """
    Normalized time-tracking entry that references an issue through its description.
    """
    def __init__(self, date: int, formatted_date: str, description: str, is_invoiceable: bool, project: str, quantity: float, time_spent: str, task: str, parent_id: str = "", task_id: str = ""):
        self.date = date  # unix milliseconds
        self.formatted_date = formatted_date
        self.description = description
        self.is_invoiceable = is_invoiceable
        self.project = project
        self.quantity = quantity
        self.time_spent = time_spent  # e.g. 1h 30m
        self.task = task  # task-category label from the timesheet
        self.parent_id = parent_id
        self.task_id = task_id

    def to_dict(self) -> dict:
        return {
            'date': self.date,
            'formatted_date': self.formatted_date,
            'description': self.description,
            'is_invoiceable': self.is_invoiceable,
            'project': self.project,
            'quantity': self.quantity,
            'time_spent': self.time_spent,
            'task': self.task,
            'parent_id': self.parent_id,
            'task_id': self.task_id,
        }
