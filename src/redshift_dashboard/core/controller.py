# src/redshift_dashboard/core/controller.py

from __future__ import annotations

"""
Dashboard state controller.

Owns the single DashboardSnapshot the presentation layer renders and is the
only writer of it. Every change swaps in a new immutable snapshot and
notifies subscribers.

Submission is optimistic:
- the predicted status is applied (and visible) before the network call,
- the backend's answer replaces it only if it differs,
- a failed call keeps the optimistic status (no rollback, avoids flicker).

Public operations never raise; they return an outcome enum.
"""

import logging
from collections.abc import Callable
from enum import Enum

from .errors import GatewayError, InconsistentStateError
from .models import DashboardSnapshot, Task
from .ports import DashboardGateway, SessionRepo
from .status import TaskStatus, next_status_on_submit

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[DashboardSnapshot | None], None]

# Submission is refused for these (terminal / not yet unlocked).
NOT_SUBMITTABLE: frozenset[TaskStatus] = frozenset({TaskStatus.CHECKED, TaskStatus.LOCKED})


class ViewState(str, Enum):
    CHECKING_SESSION = "checking_session"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    INCONSISTENT = "inconsistent"


class LoginOutcome(str, Enum):
    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    GATEWAY_ERROR = "gateway_error"
    BUSY = "busy"


class SubmitOutcome(str, Enum):
    SKIPPED = "skipped"  # nothing targeted or nothing loaded
    CONFIRMED = "confirmed"  # backend agreed with the optimistic status
    CORRECTED = "corrected"  # backend returned a different status
    FAILED = "failed"  # gateway error, optimistic status kept
    BUSY = "busy"


class DashboardController:
    def __init__(self, gateway: DashboardGateway, sessions: SessionRepo) -> None:
        self._gateway = gateway
        self._sessions = sessions

        self._snapshot: DashboardSnapshot | None = None
        self._authenticated = False
        # Nothing is known until bootstrap() has looked for a saved session.
        self._checking_session = True
        self._selected_task_id: str | None = None

        self._login_in_flight = False
        self._submit_in_flight = False

        self._listeners: list[SnapshotListener] = []

    # ---- read side ----

    @property
    def snapshot(self) -> DashboardSnapshot | None:
        return self._snapshot

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    @property
    def is_checking_session(self) -> bool:
        return self._checking_session

    @property
    def view_state(self) -> ViewState:
        if self._authenticated:
            if self._snapshot is None:
                return ViewState.INCONSISTENT
            return ViewState.AUTHENTICATED
        if self._checking_session:
            return ViewState.CHECKING_SESSION
        return ViewState.UNAUTHENTICATED

    def require_snapshot(self) -> DashboardSnapshot:
        if self._snapshot is None:
            raise InconsistentStateError("no dashboard data loaded")
        return self._snapshot

    @property
    def selected_task(self) -> Task | None:
        """Current submission target, resolved against the live snapshot."""
        if self._selected_task_id is None or self._snapshot is None:
            return None
        return self._snapshot.find_task(self._selected_task_id)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- state swaps ----

    def _set_snapshot(self, snapshot: DashboardSnapshot | None) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener failed.")

    # ---- session / login ----

    async def bootstrap(self) -> None:
        """Replay a saved, unexpired session through the normal login path."""
        self._checking_session = True
        try:
            try:
                record = self._sessions.load()
            except Exception:
                logger.exception("Failed to read saved session.")
                record = None

            if record is None:
                logger.info("No saved session.")
                return

            logger.info("Replaying saved session for %s.", record.name)
            outcome = await self.login(record.name, record.passcode)
            if outcome is not LoginOutcome.SUCCESS:
                # The stored record is left as is; the next start will try it again.
                logger.info("Saved session replay failed (%s).", outcome.value)
        finally:
            self._checking_session = False

    async def login(self, name: str, passcode: str) -> LoginOutcome:
        if self._login_in_flight:
            return LoginOutcome.BUSY

        self._login_in_flight = True
        try:
            try:
                snapshot = await self._gateway.login(name, passcode)
            except GatewayError as e:
                logger.warning("Login failed, backend unreachable: %s", e)
                return LoginOutcome.GATEWAY_ERROR
            except Exception:
                logger.exception("Login failed unexpectedly.")
                return LoginOutcome.GATEWAY_ERROR

            if snapshot is None:
                logger.info("Login denied for %s.", name)
                return LoginOutcome.INVALID_CREDENTIALS

            self._selected_task_id = None
            self._authenticated = True
            self._set_snapshot(snapshot)

            try:
                self._sessions.save(name, passcode)
            except Exception:
                logger.exception("Failed to persist session; continuing without it.")

            return LoginOutcome.SUCCESS
        finally:
            self._login_in_flight = False

    # ---- submission ----

    def open_submission(self, task: Task | str) -> bool:
        if self._snapshot is None:
            return False

        task_id = task.id if isinstance(task, Task) else str(task)
        current = self._snapshot.find_task(task_id)
        if current is None:
            logger.debug("open_submission: unknown task %s", task_id)
            return False
        if current.status in NOT_SUBMITTABLE:
            logger.debug("open_submission: task %s is %s", task_id, current.status)
            return False

        self._selected_task_id = current.id
        return True

    def close_submission(self) -> None:
        self._selected_task_id = None

    async def submit_task(self, text: str) -> SubmitOutcome:
        snapshot = self._snapshot
        task = self.selected_task
        if snapshot is None or task is None:
            return SubmitOutcome.SKIPPED

        if self._submit_in_flight:
            return SubmitOutcome.BUSY

        self._submit_in_flight = True
        try:
            optimistic_status = next_status_on_submit(task.status)
            optimistic = snapshot.with_task_status(task.id, optimistic_status)
            self._set_snapshot(optimistic)

            try:
                confirmed = await self._gateway.submit_task(
                    task.id,
                    text,
                    snapshot.student.name,
                    task.title,
                )
            except Exception as e:
                # Keep the optimistic status; the caller surfaces the failure.
                if isinstance(e, GatewayError):
                    logger.warning("Submission of task %s failed: %s", task.id, e)
                else:
                    logger.exception("Submission of task %s failed unexpectedly.", task.id)
                return SubmitOutcome.FAILED

            if confirmed == optimistic_status:
                return SubmitOutcome.CONFIRMED

            if self._snapshot is not optimistic:
                logger.info(
                    "Task %s: backend said %s but dashboard state changed meanwhile; not applying.",
                    task.id,
                    confirmed,
                )
                return SubmitOutcome.CORRECTED

            logger.info("Task %s: correcting %s -> %s.", task.id, optimistic_status, confirmed)
            self._set_snapshot(optimistic.with_task_status(task.id, confirmed))
            return SubmitOutcome.CORRECTED
        finally:
            self._submit_in_flight = False
