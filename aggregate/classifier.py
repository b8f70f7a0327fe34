"""
Activity classification of time entries by keywords in their description.
"""
from typing import Dict, Iterable, List
from normalize.models import TimeEntry
from normalize.util import to_bool

CODE_REVIEW_KEYWORD = "code review"
ASSIST_KEYWORD = "assist"
DEPLOYMENT_KEYWORD = "deploy"
ANALYSIS_KEYWORD = "pm"

CATEGORY_KEYWORDS = (CODE_REVIEW_KEYWORD, ASSIST_KEYWORD, DEPLOYMENT_KEYWORD, ANALYSIS_KEYWORD)


class ActivityFilters:
    """
    Five independent include/exclude toggles. Planning/analysis is off by default.
    """
    FIELDS = ('task', 'code_review', 'assist', 'deployment', 'analysis')

    def __init__(self, task: bool = True, code_review: bool = True, assist: bool = True, deployment: bool = True, analysis: bool = False):
        self.task = task
        self.code_review = code_review
        self.assist = assist
        self.deployment = deployment
        self.analysis = analysis

    def replace(self, **changes) -> "ActivityFilters":
        """Return a copy with the given toggles changed; unknown names raise ValueError."""
        unknown = set(changes) - set(self.FIELDS)
        if unknown:
            raise ValueError(f"Unknown activity filter(s): {', '.join(sorted(unknown))}")
        values = self.to_dict()
        values.update({k: to_bool(v) for k, v in changes.items() if v is not None})
        return ActivityFilters(**values)

    def to_dict(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name in self.FIELDS}

    def __eq__(self, other):
        if not isinstance(other, ActivityFilters):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        toggles = ", ".join(f"{k}={v}" for k, v in self.to_dict().items())
        return f"ActivityFilters({toggles})"


def is_included(entry: TimeEntry, filters: ActivityFilters) -> bool:
    """Apply each exclusion rule independently; failing any one drops the entry."""
    text = (entry.description or "").lower()
    is_code_review = CODE_REVIEW_KEYWORD in text
    is_assist = ASSIST_KEYWORD in text
    is_deployment = DEPLOYMENT_KEYWORD in text
    is_analysis = ANALYSIS_KEYWORD in text

    if not filters.code_review and is_code_review:
        return False
    if not filters.assist and is_assist:
        return False
    if not filters.deployment and is_deployment:
        return False
    if not filters.analysis and is_analysis:
        return False
    # ordinary task: matches none of the specific categories
    if not filters.task and not (is_code_review or is_assist or is_deployment or is_analysis):
        return False
    return True


def filter_entries(entries: Iterable[TimeEntry], filters: ActivityFilters) -> List[TimeEntry]:
    """Return the entries that pass the activity filters, preserving order."""
    return [e for e in entries or [] if is_included(e, filters)]
