"""
Tests for due status calculation
"""

from datetime import date

from chores.due import DUE, NEVER, OK, OVERDUE, format_ago, status, urgency_key
from chores.models import Task


class TestStatus:
    """status(task, today)"""

    def test_never_done(self):
        due = status(Task('water plants', 7), date(2017, 10, 21))
        assert due.last_completed_display == 'Never'
        assert due.ago_display is None
        assert due.due_display is None
        assert due.level == NEVER

    def test_done_today(self):
        due = status(Task('water plants', 7, date(2017, 10, 21)), date(2017, 10, 21))
        assert due.ago_display == 'Today'
        assert due.due_display == 'Due in 7 days'
        assert due.level == OK

    def test_due_today(self):
        due = status(Task('water plants', 7, date(2017, 10, 14)), date(2017, 10, 21))
        assert due.days_until_due == 0
        assert due.due_display == 'Due today'
        assert due.level == DUE

    def test_long_overdue(self):
        due = status(Task('clean house', 7, date(2017, 1, 1)), date(2017, 10, 21))
        assert due.last_completed_display == '2017-01-01'
        assert due.days_since == 293
        assert due.ago_display == '293 days ago'
        assert due.due_display == '286 days overdue!'
        assert due.level == OVERDUE

    def test_one_day_overdue(self):
        due = status(Task('water lawn', 3, date(2017, 10, 17)), date(2017, 10, 21))
        assert due.due_display == '1 days overdue!'

    def test_completed_in_future(self):
        due = status(Task('water plants', 7, date(2017, 10, 24)), date(2017, 10, 21))
        assert due.ago_display == 'In 3 days'
        assert due.due_display == 'Due in 10 days'

    def test_crosses_leap_day(self):
        due = status(Task('taxes', 365, date(2016, 2, 1)), date(2017, 2, 1))
        assert due.days_since == 366
        assert due.due_display == '1 days overdue!'


class TestFormatAgo:
    def test_values(self):
        assert format_ago(0) == 'Today'
        assert format_ago(1) == '1 day ago'
        assert format_ago(12) == '12 days ago'
        assert format_ago(-1) == 'Tomorrow'


class TestUrgencyKey:
    """Ordering for `list --sort due`"""

    def test_never_then_most_overdue(self):
        today = date(2017, 10, 21)
        tasks = [
            Task('fresh', 7, today),
            Task('late', 7, date(2017, 1, 1)),
            Task('never', 7),
            Task('slightly late', 7, date(2017, 10, 10)),
        ]
        ordered = sorted(tasks, key=lambda t: urgency_key(status(t, today)))
        assert [t.name for t in ordered] == ['never', 'late', 'slightly late', 'fresh']
