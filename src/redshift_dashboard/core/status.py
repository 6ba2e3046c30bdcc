# src/redshift_dashboard/core/status.py

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status as stored in the sheet's status column.

    Notes:
    - Values are the exact wire strings.
    - CHECKED is terminal; LOCKED means the task is not actionable yet.
    """

    LIVE = "Live"
    SUBMITTED = "Submitted"
    RESUBMITTED = "Resubmitted"
    REDO = "Redo"
    CHECKED = "Checked"
    LOCKED = "Locked"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus | None:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip())
        except ValueError:
            return None


# Statuses that mean "this task has been handed in at least once".
COMPLETED_STATUSES: frozenset[TaskStatus] = frozenset(
    {TaskStatus.SUBMITTED, TaskStatus.RESUBMITTED, TaskStatus.CHECKED}
)

_RESUBMIT_FROM: frozenset[TaskStatus] = frozenset(
    {TaskStatus.SUBMITTED, TaskStatus.RESUBMITTED, TaskStatus.REDO}
)


def next_status_on_submit(current: TaskStatus | str | None) -> TaskStatus:
    """Status a task moves to when the student submits work for it.

    Mirrors the rule the sheet backend applies on its side: anything that was
    already handed in (or sent back for a redo) becomes RESUBMITTED, everything
    else becomes SUBMITTED.
    """
    if TaskStatus.parse(current) in _RESUBMIT_FROM:
        return TaskStatus.RESUBMITTED
    return TaskStatus.SUBMITTED


def is_completed(status: TaskStatus | str | None) -> bool:
    return TaskStatus.parse(status) in COMPLETED_STATUSES


def count_completed(statuses: Iterable[TaskStatus | str | None]) -> int:
    return sum(1 for s in statuses if is_completed(s))
