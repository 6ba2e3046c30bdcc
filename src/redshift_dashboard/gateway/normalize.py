# src/redshift_dashboard/gateway/normalize.py

"""
Turn the sheet backend's loosely-typed login payload into a DashboardSnapshot.

Sheet cells arrive as whatever Apps Script serialized: numbers may be strings,
empty cells may be "" or missing, list-like columns are comma-separated text.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.models import CourseProgress, DashboardSnapshot, Student, Task
from ..core.status import TaskStatus, count_completed

logger = logging.getLogger(__name__)

UNKNOWN_STUDENT = "Unknown Student"
UNKNOWN_COHORT = "Unknown Cohort"
DEFAULT_TOPIC = "General"

DEFAULT_WEEK = 1
DEFAULT_MONTH = 1
DEFAULT_TOTAL_WEEKS = 12
DEFAULT_TOTAL_MONTHS = 3


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any, default: str = "") -> str:
    if value is None or value == "":
        return default
    return str(value)


def _to_int(value: Any, default: int) -> int:
    """Numeric coercion for sheet cells. Empty/zero/garbage/infinite -> default."""
    if not value or isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def split_list(value: Any) -> tuple[str, ...]:
    """'a, b,, c' -> ('a', 'b', 'c'). Empty or missing -> ()."""
    if not value:
        return ()
    parts = (p.strip() for p in str(value).split(","))
    return tuple(p for p in parts if p)


def _normalize_task(raw: dict[str, Any], *, default_week: int) -> Task:
    task_id = _text(raw.get("id"))
    status = TaskStatus.parse(raw.get("status"))
    if status is None:
        logger.warning("Task %r has unknown status %r, treating it as live.", task_id, raw.get("status"))
        status = TaskStatus.LIVE

    return Task(
        id=task_id,
        title=_text(raw.get("title")),
        description=_text(raw.get("description")),
        reference_links=split_list(raw.get("referenceLinks")),
        learning_materials=split_list(raw.get("learningMaterials")),
        status=status,
        week_id=_to_int(raw.get("weekId"), default_week),
    )


def snapshot_from_payload(data: dict[str, Any]) -> DashboardSnapshot:
    student_raw = _as_dict(data.get("student"))
    settings_raw = _as_dict(data.get("settings"))

    week = _to_int(settings_raw.get("currentWeek"), DEFAULT_WEEK)

    raw_tasks = data.get("tasks")
    if not isinstance(raw_tasks, list):
        raw_tasks = []

    # Non-object entries are dropped here, so total_weekly_tasks counts the
    # tasks that can actually be shown, not every entry in the raw array.
    tasks = tuple(
        _normalize_task(t, default_week=week) for t in raw_tasks if isinstance(t, dict)
    )

    # Completed count comes from the raw status strings so unknown statuses never count.
    completed = count_completed(t.get("status") for t in raw_tasks if isinstance(t, dict))

    progress = CourseProgress(
        week=week,
        month=_to_int(settings_raw.get("currentMonth"), DEFAULT_MONTH),
        total_weeks=_to_int(settings_raw.get("totalWeeks"), DEFAULT_TOTAL_WEEKS),
        total_months=_to_int(settings_raw.get("totalMonths"), DEFAULT_TOTAL_MONTHS),
        weekly_tasks_completed=completed,
        total_weekly_tasks=len(tasks),
    )

    return DashboardSnapshot(
        student=Student(
            name=_text(student_raw.get("name"), UNKNOWN_STUDENT),
            cohort=_text(student_raw.get("cohort"), UNKNOWN_COHORT),
        ),
        tasks=tasks,
        progress=progress,
        current_topic=_text(settings_raw.get("currentTopic"), DEFAULT_TOPIC),
    )
