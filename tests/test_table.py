"""
Tests for the text table layout
"""

from datetime import date

from chores.due import status
from chores.models import Task
from chores.table import render_table

TODAY = date(2017, 10, 21)


def _rows(*tasks):
    return [(task, status(task, TODAY)) for task in tasks]


class TestRenderTable:
    """render_table(rows)"""

    def test_layout(self):
        lines = render_table(_rows(
            Task('water plants', 7, TODAY),
            Task('clean house', 7, date(2017, 1, 1)),
            Task('taxes', 365),
        ))

        assert [line.text for line in lines] == [
            'Task               Last completed',
            '===                ===',
            'water plants   7d  2017-10-21             Today  (Due in 7 days)',
            'clean house    7d  2017-01-01      293 days ago  (286 days overdue!)',
            'taxes        365d  Never',
        ]

    def test_styles(self):
        lines = render_table(_rows(
            Task('fresh', 7, TODAY),
            Task('due', 7, date(2017, 10, 14)),
            Task('late', 7, date(2017, 1, 1)),
            Task('never', 7),
        ))

        assert [line.style for line in lines] == [None, None, 'green', 'yellow', 'red', 'red']

    def test_header_width_when_names_are_short(self):
        lines = render_table(_rows(Task('a', 1, TODAY)))
        assert lines[0].text == 'Task     Last completed'
        assert lines[2].text.startswith('a    1d  2017-10-21')

    def test_keeps_given_order(self):
        lines = render_table(_rows(Task('b', 1), Task('a', 1), Task('c', 1)))
        assert [line.text.split()[0] for line in lines[2:]] == ['b', 'a', 'c']

    def test_empty(self):
        lines = render_table([])
        assert lines[0].text == 'Task   Last completed'
        assert lines[1].text == '===    ==='
        assert lines[2].text.startswith('No tasks yet.')
