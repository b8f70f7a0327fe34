import logging
from datetime import date, datetime

import pandas as pd

from normalize.entries import normalize_time_entries, normalize_time_entry, sort_time_entries
from normalize.models import TimeEntry
from normalize.timeutil import format_long_date, serial_date_to_datetime, serial_date_to_timestamp


def _entry(parent_id, task_id, description):
    return TimeEntry(0, '', description, False, '', 1.0, '1h', '', parent_id=parent_id, task_id=task_id)


def test_normalize_time_entry_fields():
    raw = {
        'Date': 45500,
        'Description': '[EPIC-9][SG-42] fixed bug',
        'Is Invoiceable': 'Yes',
        'Project': 'Storefront',
        'Quantity': 1.5,
        'Task': 'Development',
    }
    entry = normalize_time_entry(raw)
    assert entry.parent_id == 'EPIC-9'
    assert entry.task_id == 'SG-42'
    assert entry.quantity == 1.5
    assert entry.time_spent == '1h 30m'
    assert entry.formatted_date == 'July 27, 2022'
    assert entry.date == int(datetime(2022, 7, 26).timestamp() * 1000) + 86_400_000
    assert entry.is_invoiceable is True
    assert entry.project == 'Storefront'
    assert entry.task == 'Development'


def test_rows_without_marker_are_dropped():
    rows = [
        {'Description': 'Team lunch', 'Quantity': 1},
        {'Description': '[EPIC-9][SG-42] fixed bug', 'Quantity': 2},
        {'Quantity': 3},
    ]
    entries = normalize_time_entries(rows)
    assert [e.task_id for e in entries] == ['SG-42']


def test_unparseable_description_is_kept_with_empty_ids():
    entries = normalize_time_entries([{'Description': 'SG-42 no brackets', 'Quantity': 0.5}])
    assert len(entries) == 1
    assert entries[0].parent_id == ''
    assert entries[0].task_id == ''


def test_missing_numbers_default_to_zero():
    entry = normalize_time_entries([{'Description': '[A][SG-1] x', 'Quantity': None, 'Date': ''}])[0]
    assert entry.quantity == 0.0
    assert entry.time_spent == ''


def test_sort_by_parent_then_task_then_description():
    entries = sort_time_entries([
        _entry('B', 'SG-1', 'same'),
        _entry('A', 'SG-1', 'same'),
    ])
    assert [e.parent_id for e in entries] == ['A', 'B']

    entries = sort_time_entries([
        _entry('A', 'SG-2', 'a'),
        _entry('A', 'SG-1', 'z'),
        _entry('A', 'SG-1', 'b'),
    ])
    assert [(e.task_id, e.description) for e in entries] == [('SG-1', 'b'), ('SG-1', 'z'), ('SG-2', 'a')]


def test_sort_uses_code_point_order():
    entries = sort_time_entries([_entry('a', '', ''), _entry('B', '', '')])
    assert [e.parent_id for e in entries] == ['B', 'a']


def test_sample_rows(entry_rows):
    entries = normalize_time_entries(entry_rows)
    assert len(entries) == 6
    assert [(e.parent_id, e.task_id) for e in entries] == [
        ('SG-1', 'SG-2'),
        ('SG-1', 'SG-2'),
        ('SG-1', 'SG-9'),
        ('SG-3', 'SG-4'),
        ('SG-3', 'SG-4'),
        ('SG-3', 'SG-5'),
    ]
    assert entries[0].description == '[SG-1][SG-2] build form'


def test_custom_task_marker():
    rows = [{'Description': '[OPS-1][OPS-2] rotate keys', 'Quantity': 1}, {'Description': '[SG-1][SG-2] x', 'Quantity': 1}]
    entries = normalize_time_entries(rows, task_marker='OPS-')
    assert [e.task_id for e in entries] == ['OPS-2']


def test_out_of_range_date_falls_back_to_serial_zero(caplog):
    with caplog.at_level(logging.WARNING, logger='normalize.entries'):
        entries = normalize_time_entries([{'Date': 99999999, 'Description': '[A][SG-1] x', 'Quantity': 1.0}])
    assert len(entries) == 1
    assert entries[0].formatted_date == format_long_date(serial_date_to_datetime(0))
    assert entries[0].date == serial_date_to_timestamp(0)
    assert entries[0].time_spent == '1h'
    assert 'out of range' in caplog.text


def test_date_typed_cells_are_read_as_serials():
    for value in (datetime(2022, 7, 27), pd.Timestamp('2022-07-27'), date(2022, 7, 27)):
        entry = normalize_time_entry({'Date': value, 'Description': '[A][SG-1] x', 'Quantity': 1})
        assert entry.formatted_date == 'July 27, 2022'
        assert entry.date == serial_date_to_timestamp(45500)


def test_description_is_kept_verbatim():
    entries = normalize_time_entries([
        {'Description': '[A][SG-1] b  ', 'Quantity': 1},
        {'Description': ' [A][SG-1] z', 'Quantity': 1},
    ])
    assert [e.description for e in entries] == [' [A][SG-1] z', '[A][SG-1] b  ']
    assert all(e.task_id == 'SG-1' for e in entries)
