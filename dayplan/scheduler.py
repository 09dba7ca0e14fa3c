# dayplan/scheduler.py
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from .config import PlannerPrefs
from .free_time import calculate_free_time_slots
from .metrics import SCHEDULE_TIME, TASKS_UNPLACED
from .models import Schedule, Task, TimeSlot, TimetableEntry
from .placer import place_tasks_with_leftovers

SCHEDULE_COLUMNS = ["id", "title", "start", "end", "priority", "duration_minutes"]
FREE_COLUMNS = ["start", "end", "minutes"]


def _plan(tasks: Iterable[Task],
          commitments: Iterable[TimetableEntry],
          day: date,
          prefs: PlannerPrefs) -> Tuple[Schedule, List[TimeSlot], List[Task]]:
    free = calculate_free_time_slots(day.isoweekday(), prefs.day_start, prefs.day_end, commitments)
    schedule, unplaced = place_tasks_with_leftovers(tasks, free, prefs)
    return schedule, free, unplaced


def compute_schedule(tasks: Iterable[Task],
                     commitments: Iterable[TimetableEntry],
                     day: date,
                     prefs: Optional[PlannerPrefs] = None) -> Schedule:
    """
    Suggested plan for one calendar day.

    Completed tasks are dropped and only commitments recurring on the weekday
    of `day` block time. Inputs are never mutated.

    Returns:
        list of (TimeSlot, Task) sorted by slot start; empty when nothing fits.
    """
    schedule, _, _ = _plan(tasks, commitments, day, prefs or PlannerPrefs())
    return schedule


def _stamp(day: date, t: time) -> pd.Timestamp:
    return pd.Timestamp(datetime.combine(day, t))


def schedule_to_frame(schedule: Schedule, day: date) -> pd.DataFrame:
    rows = [(
        task.id,
        task.title,
        _stamp(day, slot.start),
        _stamp(day, slot.end),
        task.priority.value,
        slot.duration_minutes,
    ) for slot, task in schedule]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS).sort_values("start").reset_index(drop=True)


def free_slots_to_frame(free_slots: Iterable[TimeSlot], day: date) -> pd.DataFrame:
    rows = [(_stamp(day, s.start), _stamp(day, s.end), s.duration_minutes) for s in free_slots]
    return pd.DataFrame(rows, columns=FREE_COLUMNS)


def generate_schedule(tasks: Iterable[Task],
                      commitments: Iterable[TimetableEntry],
                      day: date,
                      prefs: Optional[PlannerPrefs] = None) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Tabular day plan for display.

    Returns:
        scheduled_df with columns: id, title, start, end, priority, duration_minutes
        free_df with columns: start, end, minutes
    """
    with SCHEDULE_TIME.time():
        schedule, free, unplaced = _plan(tasks, commitments, day, prefs or PlannerPrefs())
    if unplaced:
        TASKS_UNPLACED.inc(len(unplaced))
    return schedule_to_frame(schedule, day), free_slots_to_frame(free, day)
