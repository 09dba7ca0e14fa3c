# dayplan/config.py
import os
from dataclasses import dataclass
from datetime import time
from typing import Optional


def parse_hhmm(value: str) -> time:
    """Parse "HH:MM" (24h) into a time, raising ValueError on anything else."""
    try:
        hh, mm = value.strip().split(":")
        return time(int(hh), int(mm))
    except (AttributeError, TypeError, ValueError):
        raise ValueError(f"expected HH:MM, got {value!r}") from None


@dataclass
class PlannerPrefs:
    tz: str = "America/New_York"
    day_start: time = time(6, 0)
    day_end: time = time(23, 0)
    break_minutes: int = 15             # gap after each placed task
    fixed_task_minutes: Optional[int] = 60  # None = use each task's estimate

    def __post_init__(self):
        if self.break_minutes < 0:
            raise ValueError("break_minutes must be >= 0")
        if self.fixed_task_minutes is not None and self.fixed_task_minutes <= 0:
            raise ValueError("fixed_task_minutes must be positive or None")

    @classmethod
    def from_env(cls) -> "PlannerPrefs":
        """
        Build prefs from DAYPLAN_* environment variables, falling back to the
        dataclass defaults for anything unset.

        DAYPLAN_TASK_MINUTES=estimate switches to per-task duration estimates.
        """
        defaults = cls()
        task_minutes = os.getenv("DAYPLAN_TASK_MINUTES")
        if task_minutes is None:
            fixed = defaults.fixed_task_minutes
        elif task_minutes.strip().lower() == "estimate":
            fixed = None
        else:
            fixed = _int_env("DAYPLAN_TASK_MINUTES", task_minutes)

        start = os.getenv("DAYPLAN_DAY_START")
        end = os.getenv("DAYPLAN_DAY_END")
        brk = os.getenv("DAYPLAN_BREAK_MINUTES")
        return cls(
            tz=os.getenv("DAYPLAN_TZ") or defaults.tz,
            day_start=parse_hhmm(start) if start else defaults.day_start,
            day_end=parse_hhmm(end) if end else defaults.day_end,
            break_minutes=_int_env("DAYPLAN_BREAK_MINUTES", brk) if brk else defaults.break_minutes,
            fixed_task_minutes=fixed,
        )


def _int_env(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
