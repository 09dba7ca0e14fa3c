# main.py
import logging
from datetime import date, time

import matplotlib.pyplot as plt

from dayplan.config import PlannerPrefs
from dayplan.free_time import busy_slots
from dayplan.models import Difficulty, Priority, Task, TimetableEntry, minutes_of
from dayplan.scheduler import generate_schedule


def _hours(t: time) -> float:
    return minutes_of(t) / 60.0


def main():
    logging.basicConfig(level=logging.DEBUG)

    day = date(2025, 11, 3)  # a Monday
    prefs = PlannerPrefs(day_start=time(9, 0), day_end=time(17, 0))

    timetable = [
        TimetableEntry(id=1, title="OS Class", day_of_week=1,
                       start_time=time(10, 0), end_time=time(11, 0), venue="Room 204"),
        TimetableEntry(id=2, title="Gym", day_of_week=1,
                       start_time=time(13, 0), end_time=time(14, 0)),
        TimetableEntry(id=3, title="Team Sync", day_of_week=2,
                       start_time=time(18, 30), end_time=time(19, 30)),
    ]

    tasks = [
        Task(id=1, title="Deep Work: Project", priority=Priority.HIGH, difficulty=Difficulty.HARD),
        Task(id=2, title="Study: OS", priority=Priority.MEDIUM, duration_minutes=120),
        Task(id=3, title="Laundry", priority=Priority.LOW, difficulty=Difficulty.EASY),
        Task(id=4, title="Email backlog", priority=Priority.HIGH),
        Task(id=5, title="Old essay", priority=Priority.HIGH, is_completed=True),
    ]

    scheduled_df, free_df = generate_schedule(tasks, timetable, day, prefs)

    print("=== Free time ===")
    print(free_df)
    print("=== Schedule ===")
    print(scheduled_df)

    # Day timeline: commitments, free windows and the planned tasks
    busy = busy_slots(day.isoweekday(), prefs.day_start, prefs.day_end, timetable)
    free = [(r.start.hour + r.start.minute / 60, r.minutes / 60) for r in free_df.itertuples()]
    planned = [(r.start.hour + r.start.minute / 60, r.duration_minutes / 60)
               for r in scheduled_df.itertuples()]

    fig, ax = plt.subplots(figsize=(10, 2.5))
    ax.broken_barh([(_hours(s.start), s.duration_minutes / 60) for s in busy], (20, 8), color="#7f7f7f")
    ax.broken_barh(free, (10, 8), color="#2ca02c")
    ax.broken_barh(planned, (0, 8), color="#1f77b4")
    ax.set_yticks([4, 14, 24], labels=["Planned", "Free", "Fixed"])
    ax.set_xlim(_hours(prefs.day_start), _hours(prefs.day_end))
    ax.set_xlabel("Hour of day")
    ax.set_title(f"Plan for {day:%A %d %b}")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
