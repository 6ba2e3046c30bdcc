# tests/test_commands.py

from __future__ import annotations

import pytest

from redshift_dashboard.cli.commands import CommandRegistry, registry, resolve_task
from redshift_dashboard.core.controller import DashboardController
from redshift_dashboard.core.errors import GatewayError
from redshift_dashboard.core.status import TaskStatus

from .fakes import FakeGateway, make_snapshot


async def _login(controller: DashboardController, gateway: FakeGateway, *statuses: TaskStatus) -> None:
    gateway.login_result = make_snapshot(*statuses)
    await controller.login("Alex", "1234")


@pytest.mark.asyncio
async def test_command_registry_routes_sync_async_and_emit(controller: DashboardController) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(ctl, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    async def h3(ctl, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a", aliases=["alpha"])
    reg.register("b", h3, "b")
    reg.register("c", h2, "c", maxsplit=1)

    notes: list[str] = []
    assert await reg.handle(controller, "/a x y") == "h2:x,y"
    assert await reg.handle(controller, "/ALPHA") == "h2:"
    assert await reg.handle(controller, "/c x  y  z") == "h2:x,y  z"
    assert await reg.handle(controller, "/b", emit=notes.append) == "h3"
    assert called == {"h2": 3, "h3": 1}
    assert notes == ["note"]


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(controller: DashboardController) -> None:
    reg = CommandRegistry()
    assert await reg.handle(controller, "hello") is None
    assert "Unknown command" in (await reg.handle(controller, "/nope") or "")
    assert "Empty command" in (await reg.handle(controller, "/") or "")


def test_resolve_task_by_number_or_id() -> None:
    snap = make_snapshot(TaskStatus.LIVE, TaskStatus.REDO)
    assert resolve_task(snap, "2") == (2, snap.tasks[1])
    assert resolve_task(snap, "t1") == (1, snap.tasks[0])
    assert resolve_task(snap, "3") is None
    assert resolve_task(snap, "0") is None


@pytest.mark.asyncio
async def test_submit_in_one_go(controller: DashboardController, gateway: FakeGateway) -> None:
    await _login(controller, gateway, TaskStatus.LIVE)

    reply = await registry.handle(controller, "/submit 1 https://github.com/me/repo")

    assert reply == "Submitted 'Task t1'. Status: Submitted."
    assert gateway.submit_calls[0].content == "https://github.com/me/repo"
    assert controller.selected_task is None


@pytest.mark.asyncio
async def test_submission_text_keeps_its_whitespace(controller: DashboardController, gateway: FakeGateway) -> None:
    await _login(controller, gateway, TaskStatus.LIVE, TaskStatus.REDO)
    gateway.submit_result = TaskStatus.RESUBMITTED

    await registry.handle(controller, "/submit 1 def f():    return  1")
    await registry.handle(controller, "/submit 2")
    await registry.handle(controller, "/send   a\tb   c")

    assert [c.content for c in gateway.submit_calls] == ["def f():    return  1", "a\tb   c"]


@pytest.mark.asyncio
async def test_open_send_and_cancel_flow(controller: DashboardController, gateway: FakeGateway) -> None:
    await _login(controller, gateway, TaskStatus.REDO)
    gateway.submit_result = TaskStatus.RESUBMITTED

    assert "Submission open for 'Task t1'" in (await registry.handle(controller, "/submit t1") or "")
    assert "empty" in (await registry.handle(controller, "/send") or "")
    assert controller.selected_task is not None

    assert await registry.handle(controller, "/cancel") == "Submission cancelled."
    assert await registry.handle(controller, "/cancel") == "No submission is open."
    assert "Nothing to submit" in (await registry.handle(controller, "/send late work") or "")

    await registry.handle(controller, "/submit 1")
    reply = await registry.handle(controller, "/send fixed the re-render")
    assert reply == "Submitted 'Task t1'. Status: Resubmitted."


@pytest.mark.asyncio
async def test_submit_refused_for_checked_and_locked(controller: DashboardController, gateway: FakeGateway) -> None:
    await _login(controller, gateway, TaskStatus.CHECKED, TaskStatus.LOCKED)

    assert "verified by your educator" in (await registry.handle(controller, "/submit 1 x") or "")
    assert "locked" in (await registry.handle(controller, "/submit 2 x") or "")
    assert "No task" in (await registry.handle(controller, "/submit 9 x") or "")
    assert gateway.submit_calls == []


@pytest.mark.asyncio
async def test_failed_submit_reports_connection_error(controller: DashboardController, gateway: FakeGateway) -> None:
    await _login(controller, gateway, TaskStatus.LIVE)
    gateway.submit_result = GatewayError("down")

    reply = await registry.handle(controller, "/submit 1 my work") or ""

    assert reply.startswith("Connection Error")
    assert "shown as Submitted locally" in reply


@pytest.mark.asyncio
async def test_tasks_and_show_render(controller: DashboardController, gateway: FakeGateway) -> None:
    assert await registry.handle(controller, "/tasks") == "Error loading dashboard."

    await _login(controller, gateway, TaskStatus.LIVE)
    assert "Hello, Alex" in (await registry.handle(controller, "/tasks") or "")
    assert "Task t1" in (await registry.handle(controller, "/show 1") or "")
    assert "Usage" in (await registry.handle(controller, "/show") or "")
    assert "/submit" in (await registry.handle(controller, "/help") or "")
