from datetime import date, time

import pytest

from dayplan.config import PlannerPrefs
from dayplan.models import Priority, Task, TimetableEntry

MONDAY = date(2025, 11, 3)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def workday():
    return PlannerPrefs(day_start=time(9, 0), day_end=time(17, 0))


def entry(id, start, end, day_of_week=1, title=None):
    return TimetableEntry(
        id=id,
        title=title or f"entry-{id}",
        day_of_week=day_of_week,
        start_time=time(*start),
        end_time=time(*end),
    )


def task(id, priority=Priority.MEDIUM, **kw):
    return Task(id=id, title=kw.pop("title", f"task-{id}"), priority=priority, **kw)
