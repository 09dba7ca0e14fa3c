# dayplan/free_time.py
from datetime import time
from typing import Iterable, List, Tuple

from .models import TimeSlot, TimetableEntry, minutes_ceil, minutes_of, time_of


def _window(day_start: time, day_end: time) -> Tuple[int, int]:
    # whole minutes strictly inside the configured window
    return minutes_ceil(day_start), minutes_of(day_end)


def _clipped_blocks(day_of_week: int,
                    window_start: int,
                    window_end: int,
                    commitments: Iterable[TimetableEntry]) -> List[Tuple[int, int]]:
    """(start, end) minute pairs for the day's commitments, clipped to the window."""
    blocks = []
    for c in commitments:
        if c.day_of_week != day_of_week:
            continue
        if c.end_time <= c.start_time:
            # malformed entry, blocks nothing
            continue
        # widen to whole minutes so a partial minute still counts as busy
        s, e = minutes_of(c.start_time), minutes_ceil(c.end_time)
        s, e = max(s, window_start), min(e, window_end)
        if e <= s:
            continue
        blocks.append((s, e))
    blocks.sort()
    return blocks


def calculate_free_time_slots(day_of_week: int,
                              day_start: time,
                              day_end: time,
                              commitments: Iterable[TimetableEntry]) -> List[TimeSlot]:
    """
    Open intervals left in the active window once the day's fixed commitments
    are blocked out.

    Entries for other weekdays are ignored, so the full timetable can be passed.

    Returns:
        TimeSlots ordered by start, non-overlapping, each of positive length.
    """
    window_start, window_end = _window(day_start, day_end)
    if window_end <= window_start:
        return []

    free = []
    cursor = window_start
    for s, e in _clipped_blocks(day_of_week, window_start, window_end, commitments):
        if s > cursor:
            free.append(TimeSlot(time_of(cursor), time_of(s)))
        cursor = max(cursor, e)
    if cursor < window_end:
        free.append(TimeSlot(time_of(cursor), time_of(window_end)))
    return free


def busy_slots(day_of_week: int,
               day_start: time,
               day_end: time,
               commitments: Iterable[TimetableEntry]) -> List[TimeSlot]:
    """Merged busy intervals inside the window (complement of the free list)."""
    window_start, window_end = _window(day_start, day_end)
    if window_end <= window_start:
        return []

    merged: List[List[int]] = []
    for s, e in _clipped_blocks(day_of_week, window_start, window_end, commitments):
        if merged and s <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], e)
        else:
            merged.append([s, e])
    return [TimeSlot(time_of(s), time_of(e)) for s, e in merged]
