"""
CLI entry point for worklog-recon. Wires the pipeline: ingest -> normalize -> classify -> aggregate -> report
"""

import argparse
import json
import logging
import os
import sys
import webbrowser
from datetime import datetime, timezone
from aggregate.classifier import ActivityFilters
from aggregate.summary import derive_summaries
from aggregate.utils import load_filters, load_preset, list_presets, load_task_marker, default_config_path
from ingest.spreadsheet import IngestError, read_rows
from normalize.entries import normalize_time_entries
from normalize.issues import normalize_issues
from report.export import export_task_summaries
from report.renderer import render

logger = logging.getLogger("worklog_recon")

OUTPUT_FORMATS = ("text", "md", "csv", "html", "json")
# file extension per output format
EXTENSIONS = {"text": "txt", "md": "md", "csv": "csv", "html": "html", "json": "json"}


def _print_json(obj):
    print(json.dumps(obj, indent=2, default=str))


def _configure_logging(level_name: str):
    level = getattr(logging, (level_name or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")


def _resolve_filters(args) -> ActivityFilters:
    """Defaults < config file < preset < individual toggle flags."""
    config_path = args.config or default_config_path()
    filters = load_preset(args.preset, config_path) if args.preset else load_filters(config_path)
    return filters.replace(
        task=args.task,
        code_review=args.code_review,
        assist=args.assist,
        deployment=args.deployment,
        analysis=args.analysis,
    )


def _resolve_task_marker(args) -> str:
    if args.task_marker:
        return args.task_marker
    return load_task_marker(args.config or default_config_path())


def run_pipeline(args):
    """Execute ingest -> normalize -> classify -> aggregate -> render and return (fmt, rendered, summaries)."""
    filters = _resolve_filters(args)
    marker = _resolve_task_marker(args)

    issue_rows = read_rows(args.issues, sheet=args.sheet)
    entry_rows = read_rows(args.timesheet, sheet=args.sheet)

    issues = normalize_issues(issue_rows)
    entries = normalize_time_entries(entry_rows, task_marker=marker)
    summaries, work = derive_summaries(entries, issues, filters)
    logger.info("Derived %d task summaries from %d issue(s) and %d time entries", len(summaries), len(issues), len(entries))

    fmt = (args.output or "text").lower()
    rendered = render(
        summaries,
        work,
        fmt=fmt,
        issues=issues.issues,
        entries=entries,
        filters=filters,
        generated_at=datetime.now(timezone.utc).isoformat(),
        scope=f"{os.path.basename(args.issues)} + {os.path.basename(args.timesheet)}",
    )
    return fmt, rendered, summaries


def _open_file_in_browser(path: str):
    """Open a file URL in the system default web browser."""
    webbrowser.open("file://" + os.path.abspath(path))


def _write_report_file(path_base: str, ext: str, content: str, open_html: bool = False) -> str:
    """Write the rendered content to a file and optionally open HTML in the browser."""
    out_path = path_base if path_base.lower().endswith(f".{ext}") else f"{path_base}.{ext}"
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    # newline='' is safe for CSV on Windows and harmless for other formats
    with open(out_path, 'w', encoding='utf-8', newline='') as fh:
        fh.write(content)
    print(f"Wrote report to {out_path}")
    if open_html:
        try:
            _open_file_in_browser(out_path)
        except webbrowser.Error:
            print('Failed to open browser automatically; file saved at', out_path)
    return out_path


def write_output(fmt: str, rendered: str, args):
    """Write output to a file (when --out-file is given or the format is html) or stdout."""
    out_file = (args.out_file or "").strip()
    if out_file or fmt == "html":
        base = out_file or f"worklog_report_{datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%SZ')}"
        _write_report_file(base, EXTENSIONS.get(fmt, "txt"), rendered, open_html=(args.open and fmt == "html"))
    else:
        print(rendered)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reconcile a timesheet export against an issue-tracker export")
    parser.add_argument("--issues", type=str, default="", help="Issue-tracker export (.xlsx/.xls/.csv)")
    parser.add_argument("--timesheet", type=str, default="", help="Time-tracking export (.xlsx/.xls/.csv)")
    parser.add_argument("--sheet", type=str, default=None, help="Worksheet name to read (defaults to the first sheet)")
    parser.add_argument("--output", type=str, choices=OUTPUT_FORMATS, default="text", help="Output format")
    parser.add_argument("--out-file", type=str, default="", help="Output file path. If omitted, text formats go to stdout and html gets a default name")
    parser.add_argument("--open", action="store_true", help="Open the generated HTML report in the default browser")
    parser.add_argument("--export", type=str, default="", help="Also export the task summary to <NAME>.xlsx")
    parser.add_argument("--config", type=str, default="", help="Filter config YAML (overrides WORKLOG_CONFIG env)")
    parser.add_argument("--preset", type=str, default="", help="Named filter preset from the config file")
    parser.add_argument("--list-presets", action="store_true", help="List filter presets from the config file and exit")
    parser.add_argument("--task-marker", type=str, default="", help="Substring that marks timesheet rows linked to issues (default from config, 'SG-')")
    parser.add_argument("--task", action=argparse.BooleanOptionalAction, default=None, help="Include ordinary task entries")
    parser.add_argument("--code-review", action=argparse.BooleanOptionalAction, default=None, help="Include code review entries")
    parser.add_argument("--assist", action=argparse.BooleanOptionalAction, default=None, help="Include assist entries")
    parser.add_argument("--deployment", action=argparse.BooleanOptionalAction, default=None, help="Include deployment entries")
    parser.add_argument("--analysis", action=argparse.BooleanOptionalAction, default=None, help="Include planning/analysis entries")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if args.list_presets:
        _print_json(list_presets(args.config or default_config_path()))
        return 0

    if not args.issues or not args.timesheet:
        parser.error("both --issues and --timesheet are required")

    try:
        fmt, rendered, summaries = run_pipeline(args)
    except IngestError as exc:
        print(f"Failed to read input: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        # bad preset or config
        parser.error(str(exc))

    write_output(fmt, rendered, args)
    if args.export:
        path = export_task_summaries(summaries, args.export)
        print(f"Exported task summary to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
