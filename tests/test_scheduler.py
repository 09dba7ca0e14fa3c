import itertools
import random
from datetime import date, time

import pandas as pd
from conftest import entry, task

from dayplan.config import PlannerPrefs
from dayplan.models import Priority, TimeSlot, schedule_as_dict
from dayplan.scheduler import FREE_COLUMNS, SCHEDULE_COLUMNS, compute_schedule, generate_schedule


def _assert_no_overlaps(schedule, commitments, day):
    slots = [s for s, _ in schedule]
    for a, b in itertools.combinations(slots, 2):
        assert not a.overlaps(b)
    blocked = [TimeSlot(c.start_time, c.end_time) for c in commitments
               if c.day_of_week == day.isoweekday() and c.end_time > c.start_time]
    for s in slots:
        assert not any(s.overlaps(b) for b in blocked)


def test_single_task_lands_in_first_gap(monday, workday):
    schedule = compute_schedule([task(1, Priority.HIGH)], [entry(1, (9, 0), (12, 0))], monday, workday)
    assert schedule == [(TimeSlot(time(12, 0), time(13, 0)), task(1, Priority.HIGH))]


def test_full_day_block_gives_empty_schedule(monday, workday):
    tasks = [task(i, Priority.HIGH) for i in range(10)]
    assert compute_schedule(tasks, [entry(1, (9, 0), (17, 0))], monday, workday) == []


def test_commitments_for_other_days_do_not_block(monday, workday):
    tuesday_block = entry(1, (9, 0), (17, 0), day_of_week=2)
    schedule = compute_schedule([task(1)], [tuesday_block], monday, workday)
    assert schedule[0][0] == TimeSlot(time(9, 0), time(10, 0))

    assert compute_schedule([task(1)], [tuesday_block], date(2025, 11, 4), workday) == []


def test_default_window_is_six_to_eleven(monday):
    schedule = compute_schedule([task(1)], [], monday)
    assert schedule[0][0].start == time(6, 0)


def test_degenerate_window_gives_empty_schedule(monday):
    prefs = PlannerPrefs(day_start=time(17, 0), day_end=time(9, 0))
    assert compute_schedule([task(1)], [], monday, prefs) == []


def test_each_task_placed_at_most_once(monday, workday):
    tasks = [task(i, Priority.HIGH) for i in range(20)]
    schedule = compute_schedule(tasks, [entry(1, (12, 0), (13, 0))], monday, workday)
    ids = [t.id for _, t in schedule]
    assert len(ids) == len(set(ids))
    assert len(schedule_as_dict(schedule)) == len(schedule)


def test_randomised_timetables_never_overlap(monday):
    rng = random.Random(7)
    prefs = PlannerPrefs(fixed_task_minutes=None, break_minutes=10)
    for _ in range(50):
        commitments = []
        for i in range(rng.randint(0, 6)):
            start = rng.randint(5 * 60, 22 * 60)
            length = rng.randint(-30, 180)
            end = min(start + length, 23 * 60 + 59)
            commitments.append(entry(i, divmod(start, 60), divmod(end, 60), day_of_week=rng.randint(1, 2)))
        tasks = [task(i, rng.choice(list(Priority)), duration_minutes=rng.randint(10, 200),
                      is_completed=rng.random() < 0.2)
                 for i in range(rng.randint(0, 15))]

        schedule = compute_schedule(tasks, commitments, monday, prefs)

        _assert_no_overlaps(schedule, commitments, monday)
        assert all(not t.is_completed for _, t in schedule)
        assert [s for s, _ in schedule] == sorted(s for s, _ in schedule)
        assert schedule == compute_schedule(tasks, commitments, monday, prefs)


def test_idempotent_and_inputs_untouched(monday, workday):
    tasks = [task(3, Priority.LOW), task(1, Priority.HIGH), task(2)]
    commitments = [entry(2, (13, 0), (14, 0)), entry(1, (10, 0), (11, 0))]
    before = (list(tasks), list(commitments))

    first = compute_schedule(tasks, commitments, monday, workday)
    second = compute_schedule(tasks, commitments, monday, workday)

    assert first == second
    assert (tasks, commitments) == before


def test_generate_schedule_frames(monday, workday):
    tasks = [task(1, Priority.LOW, title="Laundry"), task(2, Priority.HIGH, title="Essay")]
    scheduled_df, free_df = generate_schedule(tasks, [entry(1, (10, 0), (11, 0))], monday, workday)

    assert list(scheduled_df.columns) == SCHEDULE_COLUMNS
    assert list(free_df.columns) == FREE_COLUMNS

    assert scheduled_df["title"].tolist() == ["Essay", "Laundry"]
    assert scheduled_df["priority"].tolist() == ["HIGH", "LOW"]
    assert scheduled_df.loc[0, "start"] == pd.Timestamp("2025-11-03 09:00")
    assert scheduled_df.loc[1, "start"] == pd.Timestamp("2025-11-03 11:00")
    assert scheduled_df["start"].is_monotonic_increasing

    assert free_df["minutes"].tolist() == [60, 360]
    assert free_df.loc[1, "end"] == pd.Timestamp("2025-11-03 17:00")


def test_generate_schedule_empty(monday, workday):
    scheduled_df, free_df = generate_schedule([], [entry(1, (9, 0), (17, 0))], monday, workday)
    assert scheduled_df.empty
    assert free_df.empty
    assert list(scheduled_df.columns) == SCHEDULE_COLUMNS


def test_commitment_ending_mid_minute_still_blocks(monday, workday):
    commitments = [entry(1, (9, 0), (11, 0, 30))]
    schedule = compute_schedule([task(1, Priority.HIGH)], commitments, monday, workday)

    assert schedule[0][0] == TimeSlot(time(11, 1), time(12, 1))
    assert not schedule[0][0].overlaps(TimeSlot(time(9, 0), time(11, 0, 30)))


def test_window_start_with_seconds_is_not_moved_earlier(monday):
    prefs = PlannerPrefs(day_start=time(9, 0, 45), day_end=time(17, 0))
    schedule = compute_schedule([task(1)], [], monday, prefs)
    assert schedule[0][0].start == time(9, 1)


def test_second_precision_timetables_never_overlap(monday):
    rng = random.Random(11)
    prefs = PlannerPrefs(day_start=time(8, 0), day_end=time(20, 0), break_minutes=0)
    for _ in range(50):
        commitments = []
        for i in range(rng.randint(1, 6)):
            start = rng.randint(8 * 3600, 19 * 3600)
            end = start + rng.randint(1, 3 * 3600)
            commitments.append(entry(
                i,
                (start // 3600, start % 3600 // 60, start % 60),
                (min(end // 3600, 23), end % 3600 // 60, end % 60),
            ))
        tasks = [task(i) for i in range(12)]

        schedule = compute_schedule(tasks, commitments, monday, prefs)
        _assert_no_overlaps(schedule, commitments, monday)
