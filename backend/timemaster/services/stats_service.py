"""Query and aggregation helpers over already-loaded records.

All functions are pure: callers pass the records plus "today"/"now" taken
from ``timemaster.clock``. Dates are compared as ``YYYY-MM-DD`` strings, and a
session's day is the date part of its ``started_at`` timestamp.
"""
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional

from timemaster import clock

Record = dict[str, Any]

DAY_LABELS = ("Dim", "Lun", "Mar", "Mer", "Jeu", "Ven", "Sam")  # Sunday first

DEFAULT_REMINDER_MINUTES = 10
UNCATEGORIZED_ID = 0


def _day(value: date) -> str:
    return value.isoformat()


def trailing_days(today: date, count: int = 7) -> list[date]:
    """The ``count`` days ending with ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def day_label(day: date) -> str:
    return DAY_LABELS[(day.weekday() + 1) % 7]


# ── Filtering and joins ────────────────────────────────────────────


def tasks_due_on(tasks: Iterable[Record], day: date) -> list[Record]:
    wanted = _day(day)
    return [t for t in tasks if t.get("due_date") == wanted]


def filter_tasks(
    tasks: Iterable[Record],
    status: Optional[str] = None,
    category_id: Optional[int] = None,
    due_date: Optional[str] = None,
) -> list[Record]:
    result = list(tasks)
    if status:
        result = [t for t in result if t.get("status") == status]
    if category_id is not None:
        result = [t for t in result if t.get("category_id") == category_id]
    if due_date:
        result = [t for t in result if t.get("due_date") == due_date]
    return result


def join_category(record: Record, categories: Iterable[Record]) -> Record:
    """Copy of ``record`` with ``category_name``/``category_color``; None when the category is gone."""
    category = find_by_id(categories, record.get("category_id"))
    return {
        **record,
        "category_name": category["name"] if category else None,
        "category_color": category["color"] if category else None,
    }


def join_task_title(session: Record, tasks: Iterable[Record]) -> Record:
    task = find_by_id(tasks, session.get("task_id"))
    return {**session, "task_title": task["title"] if task else None}


def find_by_id(records: Iterable[Record], record_id: Optional[int]) -> Optional[Record]:
    if record_id is None:
        return None
    for record in records:
        if record.get("id") == record_id:
            return record
    return None


def sort_by_priority(tasks: Iterable[Record]) -> list[Record]:
    """Highest priority first; input order is kept among equals."""
    return sorted(tasks, key=lambda t: -(t.get("priority") or 0))


def sort_for_today(tasks: Iterable[Record]) -> list[Record]:
    """Timed tasks first by due time, then untimed ones; ties by descending priority."""
    return sorted(
        tasks,
        key=lambda t: (t.get("due_time") is None, t.get("due_time") or "", -(t.get("priority") or 0)),
    )


def blocks_overlapping(blocks: Iterable[Record], start: str, end: str) -> list[Record]:
    return [
        b for b in blocks
        if (b.get("end_datetime") or "") >= start and (b.get("start_datetime") or "") <= end
    ]


# ── Reminders ──────────────────────────────────────────────────────


def reminder_instant(task: Record, tz=None) -> Optional[datetime]:
    """When the reminder for ``task`` should ring, or None if it has no usable due date/time."""
    due_date, due_time = task.get("due_date"), task.get("due_time")
    if not due_date or not due_time:
        return None
    try:
        naive = datetime.fromisoformat(f"{due_date}T{due_time}")
    except ValueError:
        return None
    due = (tz or clock.server_tz()).localize(naive)
    lead = task.get("reminder_minutes_before")
    if lead is None:
        lead = DEFAULT_REMINDER_MINUTES
    return due - timedelta(minutes=lead)


def upcoming_reminders(
    tasks: Iterable[Record], now: datetime, window_minutes: int = 60, tz=None
) -> list[Record]:
    """Pending voice-reminder tasks whose reminder falls in ``[now, now + window)``."""
    horizon = now + timedelta(minutes=window_minutes)
    result = []
    for task in tasks:
        if task.get("status") == "completed" or not task.get("voice_reminder"):
            continue
        ring_at = reminder_instant(task, tz)
        if ring_at is not None and now <= ring_at < horizon:
            result.append(task)
    return result


# ── Task statistics ────────────────────────────────────────────────


def _category_buckets(
    tasks: Iterable[Record],
    categories: list[Record],
    fallback_name: str,
    fallback_color: str,
    count_key: str,
) -> list[Record]:
    buckets: dict[int, Record] = {}
    for task in tasks:
        cid = task.get("category_id") or UNCATEGORIZED_ID
        if cid not in buckets:
            category = find_by_id(categories, cid)
            buckets[cid] = {
                "category_id": cid,
                "name": category["name"] if category else fallback_name,
                "color": category["color"] if category else fallback_color,
                count_key: 0,
            }
        buckets[cid][count_key] += 1
    return list(buckets.values())


def daily_stats(tasks: Iterable[Record], categories: list[Record], today: date) -> Record:
    todays = tasks_due_on(tasks, today)
    completed = sum(1 for t in todays if t.get("status") == "completed")
    return {
        "total": len(todays),
        "completed": completed,
        "pending": len(todays) - completed,
        "by_category": _category_buckets(todays, categories, "Sans catégorie", "#666", "task_count"),
    }


def weekly_stats(tasks: Iterable[Record], categories: list[Record], today: date) -> Record:
    """Completed tasks per due day over the trailing week, plus an all-time category split."""
    tasks = list(tasks)
    days = trailing_days(today)
    counts = []
    for day in days:
        counts.append(sum(1 for t in tasks_due_on(tasks, day) if t.get("status") == "completed"))
    return {
        "days": counts,
        "labels": [_day(d) for d in days],
        "categories": _category_buckets(tasks, categories, "Autre", "#999", "count"),
    }


# ── Pomodoro statistics ────────────────────────────────────────────


def started_on(sessions: Iterable[Record], day: date) -> list[Record]:
    prefix = _day(day)
    return [s for s in sessions if (s.get("started_at") or "").startswith(prefix)]


def focus_minutes(sessions: Iterable[Record]) -> int:
    return sum(s.get("duration_minutes") or 0 for s in sessions if s.get("completed"))


def focus_stats(sessions: Iterable[Record], today: date) -> Record:
    sessions = list(sessions)
    days = trailing_days(today)
    return {
        "days": [day_label(d) for d in days],
        "minutes": [focus_minutes(started_on(sessions, d)) for d in days],
    }


def completed_session_days(sessions: Iterable[Record]) -> set[str]:
    return {s["started_at"][:10] for s in sessions if s.get("completed") and s.get("started_at")}


def streak(sessions: Iterable[Record], today: date) -> int:
    """Consecutive days, walking back from today, with at least one completed session."""
    days = completed_session_days(sessions)
    length = 0
    day = today
    while _day(day) in days:
        length += 1
        day -= timedelta(days=1)
    return length


def pomodoro_summary(sessions: Iterable[Record], today: date) -> Record:
    sessions = list(sessions)
    todays = [s for s in started_on(sessions, today) if s.get("completed")]
    return {
        "today": {"completed": len(todays), "total_minutes": focus_minutes(todays)},
        "streak": {"length": streak(sessions, today)},
    }
