# dayplan/models.py
from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Priority(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        # HIGH sorts first
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class Difficulty(Enum):
    HARD = "HARD"
    MEDIUM = "MEDIUM"
    EASY = "EASY"


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    priority: Priority = Priority.MEDIUM
    difficulty: Difficulty = Difficulty.MEDIUM
    due_ms: Optional[int] = None       # epoch millis, None = no deadline
    description: Optional[str] = None
    is_completed: bool = False
    created_ms: int = 0
    duration_minutes: int = 60         # estimate

    def is_overdue(self, now_ms: int) -> bool:
        return not self.is_completed and self.due_ms is not None and self.due_ms < now_ms


@dataclass(frozen=True)
class TimetableEntry:
    id: int
    title: str
    day_of_week: int  # ISO weekday, 1 = Monday
    start_time: time
    end_time: time
    venue: Optional[str] = None
    details: Optional[str] = None


def minutes_of(t: time) -> int:
    return t.hour * 60 + t.minute


def minutes_ceil(t: time) -> int:
    """Like minutes_of, but any seconds round up to the next whole minute."""
    partial = 1 if (t.second or t.microsecond) else 0
    return minutes_of(t) + partial


def time_of(minutes: int) -> time:
    """Inverse of minutes_of; 24:00 and later are pinned to 23:59."""
    minutes = max(0, min(minutes, 24 * 60 - 1))
    return time(minutes // 60, minutes % 60)


@dataclass(frozen=True, order=True)
class TimeSlot:
    start: time
    end: time

    @property
    def duration_minutes(self) -> int:
        return minutes_of(self.end) - minutes_of(self.start)

    def overlaps(self, other: "TimeSlot") -> bool:
        return self.start < other.end and self.end > other.start

    def label(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


# Ordered by slot start. A plain list keeps ordering and duplicates explicit.
Schedule = List[Tuple[TimeSlot, Task]]


def schedule_as_dict(schedule: Schedule) -> Dict[TimeSlot, Task]:
    return {slot: task for slot, task in schedule}


@dataclass
class DaySummary:
    greeting: str
    date_label: str
    pending_count: int = 0
    completed_count: int = 0
    priority_tasks: List[Task] = field(default_factory=list)
    upcoming_events: List[TimetableEntry] = field(default_factory=list)
    plan: Schedule = field(default_factory=list)
