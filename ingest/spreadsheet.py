"""
Spreadsheet ingestion for the issue-tracker and timesheet exports.
Reads the first worksheet (or a CSV file) into a list of row dicts keyed by column header.
Any failure to read or parse a file is raised as IngestError.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Union
import pandas as pd

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = ('.xls', '.xlsx', '.xlsm')
CSV_EXTENSIONS = ('.csv', '.txt')


class IngestError(Exception):
    """An input file could not be read or parsed."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


def read_table(path: str, sheet: Union[int, str] = 0) -> pd.DataFrame:
    """Load an Excel worksheet or CSV file into a DataFrame with stripped headers."""
    if not os.path.exists(path):
        raise IngestError(path, "file not found")
    ext = os.path.splitext(path)[1].lower()
    try:
        if ext in EXCEL_EXTENSIONS:
            df = pd.read_excel(path, sheet_name=sheet)
        elif ext in CSV_EXTENSIONS:
            df = pd.read_csv(path, low_memory=False)
        else:
            raise IngestError(path, f"unsupported file type '{ext or '(none)'}'")
    except IngestError:
        raise
    except Exception as exc:
        raise IngestError(path, f"failed to parse spreadsheet: {exc}") from exc
    df.columns = [str(c).strip() for c in df.columns]
    return df


def _clean_value(value: Any) -> Any:
    # NaN/NaT cells become None so the normalizers see a missing value
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, 'item'):
        # numpy scalar -> python scalar
        return value.item()
    return value


def dataframe_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    records = df.to_dict(orient='records')
    return [{str(k): _clean_value(v) for k, v in rec.items()} for rec in records]


def read_rows(path: str, sheet: Optional[Union[int, str]] = None) -> List[Dict[str, Any]]:
    """Return the rows of the first worksheet (or the named one) as plain dicts."""
    df = read_table(path, sheet=0 if sheet is None else sheet)
    rows = dataframe_to_rows(df)
    logger.info("Read %d row(s) from %s", len(rows), path)
    return rows
