# src/redshift_dashboard/core/view.py

"""Derived, display-only data for the dashboard (no state, no I/O)."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from .models import DashboardSnapshot
from .status import TaskStatus

WEEKS_PER_MONTH = 4

_SCHEME_RE = re.compile(r"^https?://")


@dataclass(frozen=True, slots=True)
class ProgressBarView:
    label: str
    value: int
    maximum: int
    sub_label: str

    @property
    def percentage(self) -> float:
        if self.maximum <= 0:
            return 0.0
        return min(100.0, max(0.0, self.value / self.maximum * 100.0))


def progress_bars(snapshot: DashboardSnapshot) -> tuple[ProgressBarView, ProgressBarView, ProgressBarView]:
    """Weekly tasks, month-of-course and whole-course bars, in display order."""
    p = snapshot.progress

    weekly = ProgressBarView(
        label=f"Week {p.week}",
        value=p.weekly_tasks_completed,
        maximum=p.total_weekly_tasks,
        sub_label=f"{p.weekly_tasks_completed}/{p.total_weekly_tasks} Tasks",
    )

    week_in_month = p.week % WEEKS_PER_MONTH or WEEKS_PER_MONTH
    monthly = ProgressBarView(
        label=f"Month {p.month}",
        value=week_in_month,
        maximum=WEEKS_PER_MONTH,
        sub_label="Monthly Goals",
    )

    course_pct = math.floor(p.week / p.total_weeks * 100 + 0.5) if p.total_weeks > 0 else 0
    course = ProgressBarView(
        label="Course Completion",
        value=p.week,
        maximum=p.total_weeks,
        sub_label=f"{course_pct}%",
    )

    return weekly, monthly, course


def can_submit(status: TaskStatus) -> bool:
    return status not in (TaskStatus.CHECKED, TaskStatus.LOCKED)


def action_label(status: TaskStatus) -> str:
    return "Resubmit" if status is TaskStatus.SUBMITTED else "Submit Assignment"


def status_hint(status: TaskStatus) -> str:
    if status is TaskStatus.CHECKED:
        return "This task has been verified by your educator."
    if status is TaskStatus.SUBMITTED:
        return "Waiting for review. You can update your submission."
    return "Ready for submission?"


def display_link(url: str) -> str:
    return _SCHEME_RE.sub("", url)
