# src/redshift_dashboard/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..connectors.render import ERROR_LOADING, render_dashboard, render_task
from ..core.controller import DashboardController, SubmitOutcome
from ..core.errors import InconsistentStateError
from ..core.models import DashboardSnapshot, Task
from ..core.status import TaskStatus

CommandEmitter = Callable[[str], None]
CommandResult = str | Awaitable[str]
CommandHandler2 = Callable[[DashboardController, list[str]], CommandResult]
CommandHandler3 = Callable[[DashboardController, list[str], CommandEmitter | None], CommandResult]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /submit, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._maxsplit: dict[str, int] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        maxsplit: int = -1,
    ) -> None:
        """
        maxsplit limits how the argument string is split; the last argument
        then carries the rest of the line verbatim (free-form text).
        """
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._maxsplit[key] = maxsplit
        for alias in aliases:
            self._handlers[alias.lower()] = handler
            self._maxsplit[alias.lower()] = maxsplit

    async def handle(
        self,
        controller: DashboardController,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be plain functions or coroutines.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        args = rest.split(maxsplit=self._maxsplit[name])

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            result = cast(CommandHandler3, handler)(controller, args, emit)
        else:
            result = cast(CommandHandler2, handler)(controller, args)

        if inspect.isawaitable(result):
            return await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task(snapshot: DashboardSnapshot, ref: str) -> tuple[int, Task] | None:
    """Find a task by its 1-based list number or by its id."""
    if ref.isdigit():
        idx = int(ref)
        if 1 <= idx <= len(snapshot.tasks):
            return idx, snapshot.tasks[idx - 1]
    for i, t in enumerate(snapshot.tasks, start=1):
        if t.id == ref:
            return i, t
    return None


def cmd_help(controller: DashboardController, args: list[str]) -> str:
    return registry.build_help()


def cmd_tasks(controller: DashboardController, args: list[str]) -> str:
    try:
        snapshot = controller.require_snapshot()
    except InconsistentStateError:
        return ERROR_LOADING
    return render_dashboard(snapshot)


def cmd_show(controller: DashboardController, args: list[str]) -> str:
    """
    /show <n|id>  -> expand one task (description, links, materials)
    """
    if not args:
        return "Usage: /show <task number or id>."
    try:
        snapshot = controller.require_snapshot()
    except InconsistentStateError:
        return ERROR_LOADING

    found = resolve_task(snapshot, args[0])
    if found is None:
        return f"No task {args[0]!r}. Use /tasks to list them."
    return render_task(*found)


async def _send(controller: DashboardController, text: str, emit: CommandEmitter | None) -> str:
    task = controller.selected_task
    if task is None:
        return "Nothing to submit. Pick a task with /submit <n>."
    if not text.strip():
        return "Submission is empty. Paste your work link, reflection, or code snippet."

    if emit:
        with contextlib.suppress(Exception):
            emit(f"Sending submission for '{task.title}'...")

    outcome = await controller.submit_task(text)
    if outcome is SubmitOutcome.BUSY:
        return "A submission is already in progress."
    if outcome is SubmitOutcome.SKIPPED:
        return "Nothing to submit. Pick a task with /submit <n>."

    controller.close_submission()

    snapshot = controller.snapshot
    current = snapshot.find_task(task.id) if snapshot is not None else None
    shown: TaskStatus | str = current.status if current is not None else "unknown"

    if outcome is SubmitOutcome.FAILED:
        return (
            f"Connection Error: the submission for '{task.title}' was not confirmed. "
            f"It is shown as {shown} locally; please try again later."
        )
    return f"Submitted '{task.title}'. Status: {shown}."


async def cmd_submit(
    controller: DashboardController,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /submit <n|id>         -> open the submission for a task
    /submit <n|id> <text>  -> open and send in one go
    """
    if not args:
        return "Usage: /submit <task number or id> [text]."
    try:
        snapshot = controller.require_snapshot()
    except InconsistentStateError:
        return ERROR_LOADING

    found = resolve_task(snapshot, args[0])
    if found is None:
        return f"No task {args[0]!r}. Use /tasks to list them."
    _, task = found

    if not controller.open_submission(task):
        if task.status is TaskStatus.CHECKED:
            return "This task has been verified by your educator."
        if task.status is TaskStatus.LOCKED:
            return "This task is locked."
        return "This task cannot be submitted right now."

    text = args[1] if len(args) > 1 else ""
    if not text:
        return f"Submission open for '{task.title}'. Use /send <text> or /cancel."
    return await _send(controller, text, emit)


async def cmd_send(
    controller: DashboardController,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    return await _send(controller, args[0] if args else "", emit)


def cmd_cancel(controller: DashboardController, args: list[str]) -> str:
    if controller.selected_task is None:
        return "No submission is open."
    controller.close_submission()
    return "Submission cancelled."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("tasks", cmd_tasks, help_text="Show the dashboard and weekly tasks.", aliases=["ls"])
registry.register("show", cmd_show, help_text="Expand a task: /show <n|id>.")
registry.register("submit", cmd_submit, help_text="Submit work: /submit <n|id> [text].", maxsplit=1)
registry.register("send", cmd_send, help_text="Send text for the open submission: /send <text>.", maxsplit=0)
registry.register("cancel", cmd_cancel, help_text="Close the open submission.")
