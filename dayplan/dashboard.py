# dayplan/dashboard.py
from datetime import date, datetime
from typing import Iterable, List, Optional

from .config import PlannerPrefs
from .models import DaySummary, Priority, Task, TimetableEntry
from .scheduler import compute_schedule

MAX_PRIORITY_TASKS = 3
MAX_UPCOMING_EVENTS = 2


def greeting_for(hour: int) -> str:
    if 5 <= hour <= 11:
        return "Good Morning"
    if 12 <= hour <= 17:
        return "Good Afternoon"
    return "Good Evening"


def _epoch_ms(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def build_day_summary(tasks: Iterable[Task],
                      commitments: Iterable[TimetableEntry],
                      today: date,
                      now: datetime,
                      prefs: Optional[PlannerPrefs] = None) -> DaySummary:
    """
    Everything the day view shows: counts, the tasks needing attention,
    the next commitments and the suggested plan.
    """
    tasks = list(tasks)
    commitments = list(commitments)
    now_ms = _epoch_ms(now)

    pending = sum(1 for t in tasks if not t.is_completed)
    attention: List[Task] = sorted(
        (t for t in tasks
         if not t.is_completed and (t.is_overdue(now_ms) or t.priority is Priority.HIGH)),
        key=lambda t: (t.due_ms is not None, t.due_ms or 0),  # no due date sorts first
    )
    todays_events = sorted(
        (e for e in commitments if e.day_of_week == today.isoweekday()),
        key=lambda e: e.start_time,
    )

    return DaySummary(
        greeting=greeting_for(now.hour),
        date_label=f"{today:%A}, {today:%B} {today.day}",
        pending_count=pending,
        completed_count=len(tasks) - pending,
        priority_tasks=attention[:MAX_PRIORITY_TASKS],
        upcoming_events=todays_events[:MAX_UPCOMING_EVENTS],
        plan=compute_schedule(tasks, todays_events, today, prefs),
    )
