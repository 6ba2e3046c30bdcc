# src/redshift_dashboard/connectors/render.py

"""Plain-text rendering of the dashboard for the console connector."""

from __future__ import annotations

from datetime import date

from ..core.models import DashboardSnapshot, Task
from ..core.status import TaskStatus
from ..core.view import (
    ProgressBarView,
    action_label,
    can_submit,
    display_link,
    progress_bars,
    status_hint,
)

BAR_WIDTH = 24
LOCKED_TITLE = "[locked]"
ERROR_LOADING = "Error loading dashboard."


def format_date(day: date) -> str:
    # "Monday, October 19"; avoids locale-dependent strftime day padding.
    return f"{day.strftime('%A, %B')} {day.day}"


def render_bar(bar: ProgressBarView, width: int = BAR_WIDTH) -> str:
    filled = int(round(bar.percentage / 100 * width))
    sub = bar.sub_label or f"{round(bar.percentage)}%"
    return f"{bar.label:<18} [{'#' * filled}{'.' * (width - filled)}] {sub}"


def status_tag(status: TaskStatus) -> str:
    return f"[{status.value}]"


def task_line(index: int, task: Task) -> str:
    title = LOCKED_TITLE if task.status is TaskStatus.LOCKED else task.title
    return f"{index:>2}. {status_tag(task.status):<14} {title}"


def render_dashboard(snapshot: DashboardSnapshot, *, today: date | None = None) -> str:
    today = today or date.today()
    p = snapshot.progress

    lines = [
        "LEARNER DASHBOARD",
        f"Hello, {snapshot.student.name} ({snapshot.student.cohort})",
        format_date(today),
        f"Current Focus: {snapshot.current_topic}",
        "",
    ]
    lines.extend(render_bar(b) for b in progress_bars(snapshot))
    lines.append("")
    lines.append(f"Weekly Tasks (Week {p.week} of {p.total_weeks})")

    if not snapshot.tasks:
        lines.append("  No tasks this week.")
    for i, task in enumerate(snapshot.tasks, start=1):
        lines.append(task_line(i, task))

    return "\n".join(lines)


def render_task(index: int, task: Task) -> str:
    if task.status is TaskStatus.LOCKED:
        return f"{task_line(index, task)}\n    This task is locked."

    lines = [task_line(index, task)]
    if task.description:
        lines.append(f"    {task.description}")

    if task.reference_links:
        lines.append("    Reference Links:")
        lines.extend(f"      - {display_link(link)}" for link in task.reference_links)

    if task.learning_materials:
        lines.append("    Learning Materials:")
        lines.extend(f"      - {m}" for m in task.learning_materials)

    lines.append(f"    {status_hint(task.status)}")
    if can_submit(task.status):
        lines.append(f"    {action_label(task.status)}: /submit {index} <your work>")

    return "\n".join(lines)
