"""
Ingest package: read spreadsheet exports into raw row dicts.
"""

from .spreadsheet import IngestError, read_rows

__all__ = ["IngestError", "read_rows"]
