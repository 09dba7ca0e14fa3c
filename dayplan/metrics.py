# dayplan/metrics.py
from prometheus_client import Counter, Summary

SCHEDULE_TIME = Summary(
    "day_plan_generation_seconds",
    "Time spent computing a daily plan",
)

TASKS_UNPLACED = Counter(
    "day_plan_tasks_unplaced_total",
    "Pending tasks left out of a daily plan because the day ran out of room",
)
