import json
import unittest
from aggregate.classifier import ActivityFilters
from aggregate.summary import summarize_work
from correlate.models import TaskSummary
from normalize.issues import normalize_issues
from normalize.models import IssueStatus, TimeEntry
from report.renderer import render, render_csv, render_html, render_markdown


def _summaries():
    return [
        TaskSummary('SG-2', 'Payment form', IssueStatus.DONE, 4.0, '4h', 2.0, '2h'),
        TaskSummary('SG-9', 'Fix <script> | pipes', IssueStatus.BACKLOG, 0.0, '', 1.5, '1h 30m'),
    ]


class TestRenderer(unittest.TestCase):
    def test_markdown_and_csv(self):
        summaries = _summaries()
        work = summarize_work(summaries)
        md = render_markdown(summaries, work)
        self.assertIn('# Work Summary', md)
        self.assertIn('Ratio (Spent / Estimation): **87.50 %**', md)
        self.assertIn('| SG-2 | Payment form | Done | 4h | 2h |', md)
        self.assertIn('Fix <script> \\| pipes', md)
        csv_out = render_csv(summaries)
        self.assertTrue(csv_out.startswith('task_id,name,status,estimation_hours'))
        self.assertIn('SG-2,Payment form,Done,4.0,2.0,4h,2h', csv_out)

    def test_render_text(self):
        summaries = _summaries()
        text = render(summaries, summarize_work(summaries), fmt='text')
        self.assertIn('Total Tasks: 2', text)
        self.assertIn('Total Time Spent: 3h 30m', text)
        self.assertIn('SG-2\tPayment form\tDone\t4h\t2h', text)

    def test_render_html_escapes_and_includes_details(self):
        summaries = _summaries()
        issues = normalize_issues([{'Issue id': 1, 'Issue key': 'SG-2', 'Issue Type': 'Task', 'Summary': 'Payment form', 'Status': 'Done', 'Custom field (Story point estimate)': 2}])
        entries = [TimeEntry(0, 'July 26, 2022', '[SG-1][SG-2] build form', True, 'Storefront', 2.0, '2h', 'Development', 'SG-1', 'SG-2')]
        html = render_html(summaries, summarize_work(summaries), issues=issues.issues, entries=entries, filters=ActivityFilters(), scope='issues.xlsx + timesheet.xlsx')
        self.assertIn('<html', html)
        self.assertIn('Work Summary', html)
        self.assertIn('Fix &lt;script&gt;', html)
        self.assertNotIn('<script>', html)
        self.assertIn('Planning/Analysis: off', html)
        self.assertIn('July 26, 2022', html)
        self.assertIn('issues.xlsx + timesheet.xlsx', html)

    def test_render_json(self):
        summaries = _summaries()
        doc = json.loads(render(summaries, summarize_work(summaries), fmt='json', filters=ActivityFilters()))
        self.assertEqual(doc['work_summary']['total_tasks'], 2)
        self.assertEqual(doc['tasks'][0]['status'], 'Done')
        self.assertEqual(doc['filters']['analysis'], False)
        self.assertNotIn('issues', doc)

    def test_render_empty(self):
        text = render(fmt='text')
        self.assertIn('Total Tasks: 0', text)
        self.assertIn('N/A', text)
        html = render(fmt='html')
        self.assertIn('No time entries matched', html)
        self.assertEqual(render(fmt='csv').strip(), 'task_id,name,status,estimation_hours,actual_hours,estimation,actual')


if __name__ == '__main__':
    unittest.main()
