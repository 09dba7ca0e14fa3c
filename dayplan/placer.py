# dayplan/placer.py
import logging
from typing import Iterable, List, Optional, Tuple

from .config import PlannerPrefs
from .models import Schedule, Task, TimeSlot, minutes_ceil, minutes_of, time_of

logger = logging.getLogger(__name__)

DEFAULT_TASK_MINUTES = 60


def pending_in_priority_order(tasks: Iterable[Task]) -> List[Task]:
    """Drop completed tasks; HIGH before MEDIUM before LOW, stable within a priority."""
    return sorted((t for t in tasks if not t.is_completed), key=lambda t: t.priority.rank)


def block_minutes(task: Task, prefs: PlannerPrefs) -> int:
    if prefs.fixed_task_minutes is not None:
        return prefs.fixed_task_minutes
    if task.duration_minutes and task.duration_minutes > 0:
        return task.duration_minutes
    return DEFAULT_TASK_MINUTES


def place_tasks_with_leftovers(tasks: Iterable[Task],
                               free_slots: Iterable[TimeSlot],
                               prefs: Optional[PlannerPrefs] = None) -> Tuple[Schedule, List[Task]]:
    """
    Greedy slot-based placement.

    Free intervals are consumed in chronological order. Within an interval the
    task at the front of the queue is placed while it fits the remaining
    capacity; a break is charged after every placement. When the front task no
    longer fits, the next interval is tried with the same task still in front,
    unless it is longer than everything left in the day, in which case it is
    set aside and the task behind it gets its turn.

    Returns:
        (schedule, unplaced) where unplaced keeps queue order.
    """
    prefs = prefs or PlannerPrefs()
    queue = pending_in_priority_order(tasks)
    intervals = []
    for free in sorted(free_slots):
        start, end = minutes_ceil(free.start), minutes_of(free.end)
        if end > start:
            intervals.append((start, end))

    # later_room[i]: longest interval after interval i
    later_room = [0] * len(intervals)
    for i in range(len(intervals) - 2, -1, -1):
        s, e = intervals[i + 1]
        later_room[i] = max(later_room[i + 1], e - s)

    schedule: Schedule = []
    unplaced: List[Task] = []
    head = 0

    for i, (cursor, end) in enumerate(intervals):
        while head < len(queue):
            task = queue[head]
            need = block_minutes(task, prefs)
            remaining = end - cursor
            if need > remaining:
                if need > later_room[i]:
                    logger.debug("task %s (%d min) fits nowhere in the rest of the day",
                                 task.id, need)
                    unplaced.append(task)
                    head += 1
                    continue
                logger.debug("task %s (%d min) does not fit %d min left before %s",
                             task.id, need, max(remaining, 0), time_of(end))
                break
            slot = TimeSlot(time_of(cursor), time_of(cursor + need))
            schedule.append((slot, task))
            logger.debug("placed task %s at %s", task.id, slot.label())
            cursor += need + prefs.break_minutes
            head += 1

    return schedule, unplaced + queue[head:]


def place_tasks(tasks: Iterable[Task],
                free_slots: Iterable[TimeSlot],
                prefs: Optional[PlannerPrefs] = None) -> Schedule:
    schedule, _ = place_tasks_with_leftovers(tasks, free_slots, prefs)
    return schedule
