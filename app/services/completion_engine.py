"""Frequency weighting and weighted weekly completion.

Pure functions over task-like objects (ORM rows, schemas or SimpleNamespace):
only ``frequency``, ``task_type``, ``completed``, ``completion_count`` and
``completion_target`` are read. No I/O and no hidden state, so the per-week
and overall call sites always agree on the numbers.
"""

from typing import Iterable, NamedTuple, Optional, Sequence

from app.models.task import TaskFrequency, TaskType

SUCCESS_THRESHOLD = 80.0

# Expected occurrences per week
FREQUENCY_WEIGHTS: dict[TaskFrequency, float] = {
    TaskFrequency.daily: 7,
    TaskFrequency.weekdays: 5,
    TaskFrequency.weekends: 2,
    TaskFrequency.three_times_week: 3,
    TaskFrequency.twice_week: 2,
    TaskFrequency.weekly: 1,
    TaskFrequency.biweekly: 0.5,
    TaskFrequency.monthly: 0.25,
    TaskFrequency.once: 1,
}

# Completions needed per recurrence window before a recurring task counts as done
COMPLETION_TARGETS: dict[TaskFrequency, int] = {
    TaskFrequency.daily: 7,
    TaskFrequency.weekdays: 5,
    TaskFrequency.weekends: 2,
    TaskFrequency.three_times_week: 3,
    TaskFrequency.twice_week: 2,
    TaskFrequency.weekly: 1,
    TaskFrequency.biweekly: 1,
    TaskFrequency.monthly: 1,
    TaskFrequency.once: 1,
}

DEFAULT_FREQUENCY = TaskFrequency.weekly


class CompletionResult(NamedTuple):
    percentage: float
    is_successful: bool
    total_weight: float
    completed_weight: float
    completed_count: int
    total_count: int


def parse_frequency(value) -> Optional[TaskFrequency]:
    """Case-insensitive lookup; returns None for anything unrecognised."""
    if isinstance(value, TaskFrequency):
        return value
    if not isinstance(value, str):
        return None
    try:
        return TaskFrequency(value.strip().lower())
    except ValueError:
        return None


def weight_of(frequency) -> float:
    """Weekly weight for a frequency. Unknown values count as weekly."""
    freq = parse_frequency(frequency)
    if freq is None:
        return FREQUENCY_WEIGHTS[DEFAULT_FREQUENCY]
    return FREQUENCY_WEIGHTS[freq]


def target_for(frequency) -> int:
    freq = parse_frequency(frequency)
    if freq is None:
        return COMPLETION_TARGETS[DEFAULT_FREQUENCY]
    return COMPLETION_TARGETS[freq]


def progress_ratio(task) -> float:
    """Fraction of a task's weight that has been earned, in [0, 1]."""
    if task.task_type == TaskType.recurring:
        target = task.completion_target or 1
        count = max(task.completion_count or 0, 0)
        return min(count / target, 1.0)
    return 1.0 if task.completed else 0.0


def is_done(task) -> bool:
    if task.task_type == TaskType.recurring:
        return (task.completion_count or 0) >= (task.completion_target or 1)
    return bool(task.completed)


def weighted_completion(tasks: Iterable) -> CompletionResult:
    total_weight = 0.0
    completed_weight = 0.0
    completed_count = 0
    total_count = 0

    for task in tasks:
        weight = weight_of(task.frequency)
        total_weight += weight
        completed_weight += weight * progress_ratio(task)
        total_count += 1
        if is_done(task):
            completed_count += 1

    percentage = (completed_weight / total_weight) * 100 if total_weight > 0 else 0.0
    return CompletionResult(
        percentage=percentage,
        is_successful=percentage >= SUCCESS_THRESHOLD,
        total_weight=total_weight,
        completed_weight=completed_weight,
        completed_count=completed_count,
        total_count=total_count,
    )


def overall_progress(plans: Sequence) -> float:
    """Mean of the plans' cached completion percentages."""
    if not plans:
        return 0.0
    return sum(p.completion_percentage for p in plans) / len(plans)
