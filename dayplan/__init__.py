from .config import PlannerPrefs, parse_hhmm
from .dashboard import build_day_summary
from .free_time import busy_slots, calculate_free_time_slots
from .live import LatestResult, PlanRecomputer
from .models import (
    DaySummary,
    Difficulty,
    Priority,
    Schedule,
    Task,
    TimeSlot,
    TimetableEntry,
    schedule_as_dict,
)
from .placer import place_tasks, place_tasks_with_leftovers
from .scheduler import compute_schedule, generate_schedule

__all__ = [
    "DaySummary",
    "Difficulty",
    "LatestResult",
    "PlanRecomputer",
    "PlannerPrefs",
    "Priority",
    "Schedule",
    "Task",
    "TimeSlot",
    "TimetableEntry",
    "build_day_summary",
    "busy_slots",
    "calculate_free_time_slots",
    "compute_schedule",
    "generate_schedule",
    "parse_hhmm",
    "place_tasks",
    "place_tasks_with_leftovers",
    "schedule_as_dict",
]
