from datetime import datetime

import pandas as pd
import pytest

from ingest.spreadsheet import IngestError, read_rows
from normalize.entries import normalize_time_entries
from normalize.issues import normalize_issues


def test_read_rows_from_csv(tmp_path, issue_rows):
    path = tmp_path / 'issues.csv'
    pd.DataFrame(issue_rows).to_csv(path, index=False)
    rows = read_rows(str(path))
    assert len(rows) == 5
    assert rows[0]['Issue key'] == 'SG-1'
    # blank cells come through as None, not NaN
    assert rows[0]['Parent'] is None
    assert rows[0]['Custom field (Story point estimate)'] is None
    index = normalize_issues(rows)
    assert index.get_by_key('SG-1').time_estimation_hours == 4.0


def test_read_rows_from_xlsx(tmp_path, entry_rows):
    path = tmp_path / 'timesheet.xlsx'
    pd.DataFrame(entry_rows).to_excel(path, index=False, engine='openpyxl')
    rows = read_rows(str(path))
    assert len(rows) == len(entry_rows)
    assert rows[0]['Description'] == '[SG-3][SG-4] implement endpoint'
    assert rows[0]['Quantity'] == 2.0
    assert rows[0]['Is Invoiceable'] is True


def test_headers_are_stripped(tmp_path):
    path = tmp_path / 'padded.csv'
    path.write_text(' Description ,Quantity\n[A][SG-1] x,1\n', encoding='utf-8')
    rows = read_rows(str(path))
    assert rows == [{'Description': '[A][SG-1] x', 'Quantity': 1}]


def test_missing_file_raises_ingest_error(tmp_path):
    with pytest.raises(IngestError) as info:
        read_rows(str(tmp_path / 'nope.xlsx'))
    assert info.value.path.endswith('nope.xlsx')


def test_unsupported_extension(tmp_path):
    path = tmp_path / 'issues.pdf'
    path.write_bytes(b'%PDF-1.4')
    with pytest.raises(IngestError):
        read_rows(str(path))


def test_corrupt_workbook(tmp_path):
    path = tmp_path / 'broken.xlsx'
    path.write_bytes(b'this is not a zip archive')
    with pytest.raises(IngestError):
        read_rows(str(path))


def test_date_formatted_cells_normalize_to_the_same_day(tmp_path):
    path = tmp_path / 'dated.xlsx'
    pd.DataFrame([
        {'Date': datetime(2022, 7, 27), 'Description': '[SG-1][SG-2] build form', 'Quantity': 1.5},
    ]).to_excel(path, index=False, engine='openpyxl')
    rows = read_rows(str(path))
    assert isinstance(rows[0]['Date'], datetime)
    assert not isinstance(rows[0]['Date'], pd.Timestamp)
    entry = normalize_time_entries(rows)[0]
    assert entry.formatted_date == 'July 27, 2022'
