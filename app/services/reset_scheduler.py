"""Decide which completed task instances roll back to pending."""

from datetime import date, datetime
from typing import Iterable

from app.models.task import TaskFrequency, TaskType
from app.services.completion_engine import parse_frequency


def days_since(earlier: date, later: date) -> int:
    return (later - earlier).days


def months_since(earlier: date, later: date) -> int:
    """Calendar-month difference (Jan 31 -> Feb 1 is one month)."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def _as_day(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def is_due_for_reset(task, now: datetime) -> bool:
    if task.last_completed is None:
        return False

    today = _as_day(now)
    last_day = _as_day(task.last_completed)
    freq = parse_frequency(task.frequency)

    if freq == TaskFrequency.daily:
        return last_day < today
    if freq == TaskFrequency.weekdays:
        return today.weekday() < 5 and last_day < today  # Mon-Fri
    if freq == TaskFrequency.weekends:
        return today.weekday() >= 5 and last_day < today  # Sat, Sun
    if freq in (TaskFrequency.three_times_week, TaskFrequency.twice_week):
        return days_since(last_day, today) >= 1
    if freq == TaskFrequency.weekly:
        return days_since(last_day, today) >= 7
    if freq == TaskFrequency.biweekly:
        return days_since(last_day, today) >= 14
    if freq == TaskFrequency.monthly:
        return months_since(last_day, today) >= 1
    # once, and anything unrecognised
    return False


def tasks_to_reset(tasks: Iterable, now: datetime) -> list:
    """Recurring tasks whose recurrence window has elapsed as of ``now``."""
    return [
        task
        for task in tasks
        if task.task_type == TaskType.recurring and is_due_for_reset(task, now)
    ]


def apply_reset(task):
    """Revoke the stale completion in place and return the task.

    Recurring tasks lose one completion (never below zero) so earlier
    completions in the window stay credited; week-specific tasks are binary
    and go straight back to pending.
    """
    if task.task_type == TaskType.recurring:
        task.completion_count = max((task.completion_count or 0) - 1, 0)
        task.completed = task.completion_count >= task.completion_target
    else:
        task.completed = False
    task.last_completed = None
    return task
