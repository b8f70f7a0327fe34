"""
Export of the task summary as a flat row list (ID, Name, Status, Estimation, Actual).
"""

import csv
import logging
import os
from typing import Dict, Iterable, List, Optional
import pandas as pd
from correlate.models import TaskSummary

logger = logging.getLogger(__name__)

EXPORT_HEADERS = ['ID', 'Name', 'Status', 'Estimation', 'Actual']
SHEET_NAME = 'Sheet1'


def stringify_number(value) -> str:
    """Render a number the way a spreadsheet shows it: 4.0 -> '4', 3.5 -> '3.5'."""
    if value is None:
        return ''
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def build_export_rows(summaries: Iterable[TaskSummary]) -> List[Dict[str, str]]:
    return [
        {
            'ID': s.task_id,
            'Name': s.name,
            'Status': s.status.value,
            'Estimation': stringify_number(s.actual_estimation),
            'Actual': stringify_number(s.actual_quantity),
        }
        for s in summaries or []
    ]


def _export_path(file_name: str, ext: str, directory: Optional[str] = None) -> str:
    out_path = file_name if file_name.lower().endswith(f".{ext}") else f"{file_name}.{ext}"
    if directory:
        out_path = os.path.join(directory, out_path)
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    return out_path


def export_rows_to_excel(rows: List[Dict[str, str]], file_name: str, directory: Optional[str] = None) -> str:
    """Write rows to '<file_name>.xlsx' on a single worksheet and return the path."""
    out_path = _export_path(file_name, 'xlsx', directory)
    df = pd.DataFrame(rows, columns=EXPORT_HEADERS)
    with pd.ExcelWriter(out_path, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
    logger.info("Exported %d row(s) to %s", len(rows), out_path)
    return out_path


def export_rows_to_csv(rows: List[Dict[str, str]], file_name: str, directory: Optional[str] = None) -> str:
    out_path = _export_path(file_name, 'csv', directory)
    # newline='' is safe for CSV on Windows and harmless elsewhere
    with open(out_path, 'w', encoding='utf-8', newline='') as fh:
        writer = csv.DictWriter(fh, fieldnames=EXPORT_HEADERS)
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Exported %d row(s) to %s", len(rows), out_path)
    return out_path


def export_task_summaries(summaries: Iterable[TaskSummary], file_name: str, directory: Optional[str] = None) -> str:
    """Build the export rows and write them as an Excel workbook."""
    return export_rows_to_excel(build_export_rows(summaries), file_name, directory)
