import sys
import os

import pytest

# Add project root to sys.path so tests can import top-level packages like 'normalize', 'aggregate', 'report', etc.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def _issue(issue_id, key, issue_type, summary, status, parent=None, story_points=None):
    return {
        'Issue id': issue_id,
        'Issue key': key,
        'Issue Type': issue_type,
        'Summary': summary,
        'Assignee': 'Dana Reyes',
        'Assignee Id': 'acc-7',
        'Status': status,
        'Parent': parent,
        'Parent summary': '',
        'Custom field (Story point estimate)': story_points,
    }


def _entry(description, quantity, date=45499, project='Storefront', task='Development'):
    return {
        'Date': date,
        'Description': description,
        'Is Invoiceable': True,
        'Project': project,
        'Quantity': quantity,
        'Task': task,
    }


@pytest.fixture
def issue_rows():
    # SG-1 epic > SG-2 task (2 SP) and SG-3 task (5 SP) > SG-4/SG-5 subtasks
    return [
        _issue(100, 'SG-1', 'Epic', 'Checkout revamp', 'In Progress'),
        _issue(101, 'SG-2', 'Task', 'Payment form', 'Done', parent=100, story_points=2),
        _issue(102, 'SG-3', 'Task', 'Order history', 'IN DEV', parent=100, story_points=5),
        _issue(103, 'SG-4', 'Subtask', 'History API', 'Done', parent=102, story_points=3),
        _issue(104, 'SG-5', 'Subtask', 'History UI', 'In Progress', parent=102, story_points=2),
    ]


@pytest.fixture
def entry_rows():
    return [
        _entry('[SG-3][SG-4] implement endpoint', 2.0, date=45500),
        _entry('[SG-1][SG-2] code review form', 0.5),
        _entry('Team lunch', 1.0),
        _entry('[SG-1][SG-9] PM planning', 1.0),
        _entry('[SG-3][SG-5] assist with layout', 1.0),
        _entry('[SG-1][SG-2] build form', 1.5),
        _entry('[SG-3][SG-4] deploy to staging', 0.25, date=45501),
    ]
