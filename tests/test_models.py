# tests/test_models.py

from __future__ import annotations

import json

import pytest

from redshift_dashboard.core.errors import SessionCorruptError
from redshift_dashboard.core.models import SessionRecord
from redshift_dashboard.core.status import TaskStatus

from .fakes import make_snapshot


def test_with_task_status_replaces_only_target_and_recounts() -> None:
    snap = make_snapshot(TaskStatus.CHECKED, TaskStatus.LIVE, TaskStatus.REDO)
    assert snap.progress.weekly_tasks_completed == 1

    updated = snap.with_task_status("t2", TaskStatus.SUBMITTED)

    assert [t.id for t in updated.tasks] == ["t1", "t2", "t3"]
    assert [t.status for t in updated.tasks] == [
        TaskStatus.CHECKED,
        TaskStatus.SUBMITTED,
        TaskStatus.REDO,
    ]
    assert updated.tasks[0] is snap.tasks[0]
    assert updated.tasks[2] is snap.tasks[2]
    assert updated.progress.weekly_tasks_completed == 2
    assert updated.progress.total_weekly_tasks == 3

    # The source snapshot is untouched.
    assert snap.tasks[1].status is TaskStatus.LIVE
    assert snap.progress.weekly_tasks_completed == 1


def test_with_task_status_unknown_id_keeps_tasks() -> None:
    snap = make_snapshot(TaskStatus.LIVE)
    updated = snap.with_task_status("nope", TaskStatus.CHECKED)
    assert updated.tasks == snap.tasks
    assert updated.progress == snap.progress


def test_session_record_json_shape() -> None:
    rec = SessionRecord(name="Alex", passcode="1234", expiry_ms=1_000)
    assert json.loads(rec.to_json()) == {"name": "Alex", "passcode": "1234", "expiry": 1_000}
    assert SessionRecord.from_json(rec.to_json()) == rec


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2]",
        '{"name": "Alex", "passcode": "1234"}',
        '{"name": "Alex", "expiry": 5}',
        '{"name": "Alex", "passcode": "1234", "expiry": "soon"}',
        '{"name": "Alex", "passcode": "1234", "expiry": true}',
    ],
)
def test_session_record_rejects_malformed(raw: str) -> None:
    with pytest.raises(SessionCorruptError):
        SessionRecord.from_json(raw)


def test_session_record_expiry_boundary() -> None:
    rec = SessionRecord(name="a", passcode="b", expiry_ms=100)
    assert rec.is_expired(99) is False
    assert rec.is_expired(100) is True
