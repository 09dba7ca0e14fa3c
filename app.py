from datetime import datetime, time

import pandas as pd
import plotly.express as px
import streamlit as st
from prometheus_client import start_http_server
from streamlit_calendar import calendar

from dayplan.config import PlannerPrefs
from dayplan.dashboard import build_day_summary
from dayplan.models import Difficulty, Priority, Task, TimetableEntry
from dayplan.scheduler import generate_schedule

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


# ✅ Start metrics server only once
if "metrics_started" not in st.session_state:
    start_http_server(8000)
    st.session_state.metrics_started = True

# Session State Setup
if "prefs" not in st.session_state:
    st.session_state.prefs = PlannerPrefs.from_env()

if "timetable" not in st.session_state:
    st.session_state.timetable = []  # list[TimetableEntry]

if "tasks" not in st.session_state:
    st.session_state.tasks = []      # list[Task]

prefs: PlannerPrefs = st.session_state.prefs
now = pd.Timestamp.now(tz=prefs.tz)


# Sidebar: Inputs
st.sidebar.title("Daily Planner")

plan_date = st.sidebar.date_input("Plan for", value=now.date())

st.sidebar.subheader("Preferences")
day_start = st.sidebar.time_input("Day starts", value=prefs.day_start)
day_end = st.sidebar.time_input("Day ends", value=prefs.day_end)
break_minutes = st.sidebar.number_input("Break after each task (minutes)", 0, 120,
                                        value=prefs.break_minutes)
use_estimates = st.sidebar.checkbox("Use each task's own duration",
                                    value=prefs.fixed_task_minutes is None)

prefs.day_start = day_start
prefs.day_end = day_end
prefs.break_minutes = int(break_minutes)
prefs.fixed_task_minutes = None if use_estimates else 60

# Add Timetable Entry
st.sidebar.subheader("Add Timetable Entry")
with st.sidebar.form("timetable_form"):
    te_title = st.text_input("Title", key="te_title")
    te_day = st.selectbox("Day", WEEKDAYS, key="te_day")
    te_start = st.time_input("Start", value=time(9, 0), key="te_start")
    te_end = st.time_input("End", value=time(10, 0), key="te_end")
    te_venue = st.text_input("Venue", key="te_venue")
    if st.form_submit_button("Add Entry"):
        if te_title and te_end > te_start:
            st.session_state.timetable.append(TimetableEntry(
                id=len(st.session_state.timetable) + 1,
                title=te_title,
                day_of_week=WEEKDAYS.index(te_day) + 1,
                start_time=te_start,
                end_time=te_end,
                venue=te_venue or None,
            ))
        else:
            st.sidebar.error("Please enter a title and ensure end > start")

# Add Task
st.sidebar.subheader("Add Task")
with st.sidebar.form("task_form"):
    t_title = st.text_input("Task title", key="t_title")
    t_priority = st.selectbox("Priority", [p.value for p in Priority], key="t_priority")
    t_difficulty = st.selectbox("Difficulty", [d.value for d in Difficulty], index=1, key="t_difficulty")
    t_minutes = st.number_input("Estimated minutes", min_value=15, max_value=480, step=15, value=60)
    t_deadline_enable = st.checkbox("Has deadline?", key="t_deadline_enable")
    t_deadline = st.date_input("Due", key="t_deadline") if t_deadline_enable else None
    if st.form_submit_button("Add Task"):
        if t_title:
            due_ms = None
            if t_deadline:
                due = pd.Timestamp(datetime.combine(t_deadline, time(23, 59))).tz_localize(prefs.tz)
                due_ms = int(due.timestamp() * 1000)
            st.session_state.tasks.append(Task(
                id=len(st.session_state.tasks) + 1,
                title=t_title,
                priority=Priority(t_priority),
                difficulty=Difficulty(t_difficulty),
                due_ms=due_ms,
                duration_minutes=int(t_minutes),
                created_ms=int(now.timestamp() * 1000),
            ))
        else:
            st.sidebar.error("Please enter a task title.")


# Main: Day summary
summary = build_day_summary(
    st.session_state.tasks,
    st.session_state.timetable,
    plan_date,
    now.to_pydatetime(),
    prefs,
)

st.title(summary.greeting)
st.caption(summary.date_label)

col1, col2 = st.columns(2)
col1.metric("Pending", summary.pending_count)
col2.metric("Completed", summary.completed_count)

col1, col2 = st.columns(2)
with col1:
    st.markdown("### Needs attention")
    if summary.priority_tasks:
        for t in summary.priority_tasks:
            st.write(f"**{t.title}** ({t.priority.value})")
    else:
        st.write("Nothing urgent.")

with col2:
    st.markdown("### Up next")
    if summary.upcoming_events:
        for e in summary.upcoming_events:
            where = f" @ {e.venue}" if e.venue else ""
            st.write(f"**{e.start_time:%H:%M}** {e.title}{where}")
    else:
        st.write("No commitments today.")


# Today's plan
st.markdown("## Today's Plan")
scheduled_df, free_df = generate_schedule(
    st.session_state.tasks,
    st.session_state.timetable,
    plan_date,
    prefs,
)

if scheduled_df.empty:
    st.info("No plan possible: add tasks, or free up some time in the day.")
else:
    st.dataframe(scheduled_df)

    def priority_color(p):
        if p == Priority.HIGH.value:
            return "#d62728"  # red
        if p == Priority.MEDIUM.value:
            return "#1f77b4"  # blue
        return "#2ca02c"      # green

    events = []
    for _, row in scheduled_df.iterrows():
        events.append({
            "title": row["title"],
            "start": row["start"].isoformat(),
            "end": row["end"].isoformat(),
            "id": f"task-{row['id']}",
            "color": priority_color(row["priority"]),
        })

    todays_entries = [e for e in st.session_state.timetable
                      if e.day_of_week == plan_date.isoweekday()]
    for entry in todays_entries:
        events.append({
            "title": entry.title,
            "start": datetime.combine(plan_date, entry.start_time).isoformat(),
            "end": datetime.combine(plan_date, entry.end_time).isoformat(),
            "id": f"entry-{entry.id}",
            "color": "#7f7f7f",  # grey
        })

    cal_options = {
        "initialView": "timeGridDay",
        "initialDate": plan_date.isoformat(),
        "slotMinTime": prefs.day_start.strftime("%H:%M:00"),
        "slotMaxTime": prefs.day_end.strftime("%H:%M:00"),
        "allDaySlot": False,
        "nowIndicator": True,
    }
    calendar(events=events, options=cal_options, key="calendar")

if not free_df.empty:
    st.markdown("### Free Time")
    fig = px.timeline(free_df.assign(kind="Free"), x_start="start", x_end="end", y="kind",
                      labels={"start": "From", "end": "To", "kind": ""})
    st.plotly_chart(fig, use_container_width=True)

placed_ids = {task.id for _, task in summary.plan}
unplaced = [t for t in st.session_state.tasks
            if not t.is_completed and t.id not in placed_ids]
if unplaced:
    st.caption("Didn't fit today: " + ", ".join(t.title for t in unplaced))
