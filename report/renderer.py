"""
Report renderer: generate text/Markdown/CSV/HTML/JSON work-progress reports from task summaries.
HTML is rendered with Jinja2 using report/templates/report.html.j2.
"""

from typing import Optional, List, Dict, Any
import os
import json
import io
import csv
from jinja2 import Environment, FileSystemLoader, select_autoescape
from aggregate.classifier import ActivityFilters
from aggregate.summary import summarize_work
from correlate.models import TaskSummary, WorkSummary
from normalize.models import Issue, TimeEntry
from normalize.timeutil import format_duration

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), 'templates')
HTML_TEMPLATE = 'report.html.j2'

CSV_HEADER = ['task_id', 'name', 'status', 'estimation_hours', 'actual_hours', 'estimation', 'actual']

FILTER_LABELS = {
    'task': 'Task',
    'code_review': 'Code Review',
    'assist': 'Assist',
    'deployment': 'Deployment',
    'analysis': 'Planning/Analysis',
}


def render_text(summaries: List[TaskSummary], work: WorkSummary) -> str:
    """Render a plain-text summary followed by one tab-separated line per task."""
    lines = [str(work)]
    if summaries:
        lines.append("")
        lines.append("Task ID\tName\tStatus\tEstimation\tActual")
        lines.extend(str(s) for s in summaries)
    return "\n".join(lines)


def _md_cell(value: Any) -> str:
    return str(value if value is not None else '').replace('|', '\\|')


def render_markdown(summaries: List[TaskSummary], work: WorkSummary) -> str:
    """Render the work summary and task table as Markdown."""
    md = []
    md.append("# Work Summary\n")
    md.append(f"- Total Tasks: **{work.total_tasks}**")
    md.append(f"- Total Estimation: **{work.total_estimation or '-'}**")
    md.append(f"- Total Time Spent: **{work.total_time_spent or '-'}**")
    md.append(f"- Ratio (Spent / Estimation): **{work.ratio}**")
    if summaries:
        md.append("\n## Task Summary\n")
        md.append("| Task ID | Name | Status | Estimation | Actual |")
        md.append("|---|---|---|---|---|")
        for s in summaries:
            cells = [s.task_id, s.name, s.status.value, s.time_estimation, s.time_spent]
            md.append("| " + " | ".join(_md_cell(c) for c in cells) + " |")
    return "\n".join(md)


def _format_summary_csv_row(s: TaskSummary) -> list:
    return [s.task_id, s.name, s.status.value, s.actual_estimation, s.actual_quantity, s.time_estimation, s.time_spent]


def render_csv(summaries: List[TaskSummary]) -> str:
    """Render one CSV row per task summary with a header."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)
    for s in summaries or []:
        writer.writerow(_format_summary_csv_row(s))
    return output.getvalue()


def render_json(
    summaries: List[TaskSummary],
    work: WorkSummary,
    issues: Optional[List[Issue]] = None,
    entries: Optional[List[TimeEntry]] = None,
    filters: Optional[ActivityFilters] = None,
) -> str:
    """Export the work summary, task summaries and optional detail tables as JSON."""
    doc: Dict[str, Any] = {
        'work_summary': work.to_dict(),
        'tasks': [s.to_dict() for s in summaries or []],
    }
    if filters is not None:
        doc['filters'] = filters.to_dict()
    if issues is not None:
        doc['issues'] = [i.to_dict() for i in issues]
    if entries is not None:
        doc['entries'] = [e.to_dict() for e in entries]
    return json.dumps(doc, indent=2)


def _issue_rows(issues: Optional[List[Issue]]) -> List[Dict[str, Any]]:
    return [
        {
            'task_id': i.task_id,
            'name': i.name,
            'type': i.type.value,
            'assignee': i.assignee_name,
            'status': i.status.value,
            'estimation': format_duration(i.time_estimation_hours),
        }
        for i in issues or []
    ]


def _filter_rows(filters: Optional[ActivityFilters]) -> List[Dict[str, Any]]:
    if filters is None:
        return []
    return [{'label': FILTER_LABELS[k], 'enabled': v} for k, v in filters.to_dict().items()]


def render_html(
    summaries: List[TaskSummary],
    work: WorkSummary,
    issues: Optional[List[Issue]] = None,
    entries: Optional[List[TimeEntry]] = None,
    filters: Optional[ActivityFilters] = None,
    generated_at: Optional[str] = None,
    scope: Optional[str] = None,
) -> str:
    """Render the HTML report via the Jinja2 template."""
    env = Environment(loader=FileSystemLoader(TEMPLATE_DIR), autoescape=select_autoescape(['html', 'xml', 'html.j2']))
    tmpl = env.get_template(HTML_TEMPLATE)
    context = {
        'work': work,
        'tasks': summaries or [],
        'issues': _issue_rows(issues),
        'entries': entries or [],
        'filters': _filter_rows(filters),
        'generated_at': generated_at,
        'scope': scope,
    }
    return tmpl.render(**context)


def render(
    summaries: Optional[List[TaskSummary]] = None,
    work: Optional[WorkSummary] = None,
    fmt: str = 'text',
    issues: Optional[List[Issue]] = None,
    entries: Optional[List[TimeEntry]] = None,
    filters: Optional[ActivityFilters] = None,
    generated_at: Optional[str] = None,
    scope: Optional[str] = None,
) -> str:
    """Main render function.

    Detail tables (issues, entries, filters) are only used by the html and json formats.
    """
    summaries = summaries or []
    work = work or summarize_work([])
    fmt_l = (fmt or 'text').lower()
    if fmt_l in ('md', 'markdown'):
        return render_markdown(summaries, work)
    if fmt_l == 'csv':
        return render_csv(summaries)
    if fmt_l in ('html', 'htm'):
        return render_html(summaries, work, issues=issues, entries=entries, filters=filters, generated_at=generated_at, scope=scope)
    if fmt_l in ('json', 'js'):
        return render_json(summaries, work, issues=issues, entries=entries, filters=filters)
    return render_text(summaries, work)
