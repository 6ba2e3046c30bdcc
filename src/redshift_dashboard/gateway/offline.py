# src/redshift_dashboard/gateway/offline.py

from __future__ import annotations

import asyncio

from ..core.models import CourseProgress, DashboardSnapshot, Student, Task
from ..core.status import TaskStatus, count_completed, next_status_on_submit

DEMO_PASSCODE = "1234"


def demo_snapshot(student_name: str = "") -> DashboardSnapshot:
    tasks = (
        Task(
            id="t1",
            title="Project Setup & Environment",
            description="Initialize repository.",
            reference_links=("https://react.dev",),
            learning_materials=("Intro to React",),
            status=TaskStatus.CHECKED,
            week_id=3,
        ),
        Task(
            id="t2",
            title="Component Architecture",
            description="Draft component hierarchy.",
            reference_links=(),
            learning_materials=(),
            status=TaskStatus.LIVE,
            week_id=3,
        ),
        Task(
            id="t3",
            title="Context API Implementation",
            description="Fix the re-render issues.",
            reference_links=(),
            learning_materials=(),
            status=TaskStatus.REDO,
            week_id=3,
        ),
        Task(
            id="t4",
            title="Performance Hooks",
            description="Use useMemo and useCallback effectively.",
            reference_links=(),
            learning_materials=(),
            status=TaskStatus.LOCKED,
            week_id=3,
        ),
    )
    return DashboardSnapshot(
        student=Student(name=student_name or "Alex V.", cohort="Batch 24"),
        tasks=tasks,
        progress=CourseProgress(
            week=3,
            month=1,
            total_weeks=12,
            total_months=3,
            weekly_tasks_completed=count_completed(t.status for t in tasks),
            total_weekly_tasks=len(tasks),
        ),
        current_topic="Advanced React Patterns & Optimization",
    )


class OfflineGateway:
    """
    Offline deterministic backend used for demos when no sheet endpoint is configured.

    Behavior:
    - login accepts any name with the demo passcode, returns the demo snapshot
    - submit applies the same transition rule the sheet script does and remembers the result
    """

    def __init__(self, *, passcode: str = DEMO_PASSCODE, latency_seconds: float = 0.0) -> None:
        self._passcode = passcode
        self._latency = max(0.0, float(latency_seconds))
        self._statuses: dict[str, TaskStatus] = {}

    async def _pause(self) -> None:
        if self._latency:
            await asyncio.sleep(self._latency)

    async def login(self, name: str, passcode: str) -> DashboardSnapshot | None:
        await self._pause()
        if passcode != self._passcode:
            return None

        snapshot = demo_snapshot(name)
        for task_id, status in self._statuses.items():
            snapshot = snapshot.with_task_status(task_id, status)
        return snapshot

    async def submit_task(
        self,
        task_id: str,
        content: str,
        student_name: str,
        task_title: str,
    ) -> TaskStatus:
        await self._pause()
        current = self._statuses.get(task_id)
        if current is None:
            task = demo_snapshot().find_task(task_id)
            current = task.status if task is not None else None
        new_status = next_status_on_submit(current)
        self._statuses[task_id] = new_status
        return new_status
