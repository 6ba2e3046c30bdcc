# src/redshift_dashboard/core/models.py

"""Immutable dashboard values.

The controller never mutates these in place: every state change builds a new
DashboardSnapshot and swaps it in.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any

from .errors import SessionCorruptError
from .status import TaskStatus, count_completed


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    reference_links: tuple[str, ...]
    learning_materials: tuple[str, ...]
    status: TaskStatus
    week_id: int


@dataclass(frozen=True, slots=True)
class Student:
    name: str
    cohort: str


@dataclass(frozen=True, slots=True)
class CourseProgress:
    week: int
    month: int
    total_weeks: int
    total_months: int
    weekly_tasks_completed: int
    total_weekly_tasks: int


@dataclass(frozen=True, slots=True)
class DashboardSnapshot:
    student: Student
    tasks: tuple[Task, ...]
    progress: CourseProgress
    current_topic: str

    def find_task(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def with_task_status(self, task_id: str, status: TaskStatus) -> DashboardSnapshot:
        """
        Return a new snapshot where only `task_id` carries `status`.

        Task order is preserved and weekly_tasks_completed is recomputed from
        the updated task list.
        """
        tasks = tuple(replace(t, status=status) if t.id == task_id else t for t in self.tasks)
        return replace(self, tasks=tasks, progress=recount_progress(self.progress, tasks))


def recount_progress(progress: CourseProgress, tasks: tuple[Task, ...]) -> CourseProgress:
    return replace(progress, weekly_tasks_completed=count_completed(t.status for t in tasks))


@dataclass(frozen=True, slots=True)
class SessionRecord:
    name: str
    passcode: str
    expiry_ms: int

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.expiry_ms

    def to_json(self) -> str:
        return json.dumps(
            {"name": self.name, "passcode": self.passcode, "expiry": self.expiry_ms},
            ensure_ascii=False,
        )

    @classmethod
    def from_json(cls, raw: str) -> SessionRecord:
        try:
            data: Any = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise SessionCorruptError("session record is not valid JSON") from e

        if not isinstance(data, dict):
            raise SessionCorruptError("session record is not a JSON object")

        name = data.get("name")
        passcode = data.get("passcode")
        expiry = data.get("expiry")

        if not isinstance(name, str) or not isinstance(passcode, str):
            raise SessionCorruptError("session record is missing name/passcode")
        # bool is an int subclass; a true/false expiry is still garbage.
        if isinstance(expiry, bool) or not isinstance(expiry, (int, float)):
            raise SessionCorruptError("session record has no numeric expiry")

        return cls(name=name, passcode=passcode, expiry_ms=int(expiry))
