# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from redshift_dashboard.core.controller import DashboardController
from redshift_dashboard.session.local_storage import LocalStorage
from redshift_dashboard.session.store import SessionStore

from .fakes import FakeClock, FakeGateway

TTL_SECONDS = 90 * 60


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the composition root.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="redshift-test",
        log_level="DEBUG",
        script_url=None,
        offline=True,
        connect_timeout_seconds=1.0,
        read_timeout_seconds=1.0,
        session_key="redshift_session",
        session_ttl_seconds=TTL_SECONDS,
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "local_storage.json",
        offline_passcode="1234",
        offline_latency_seconds=0.0,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture()
def sessions(storage: LocalStorage, clock: FakeClock) -> SessionStore:
    """Real SessionStore on a real file, with a controllable clock."""
    return SessionStore(storage, ttl_seconds=TTL_SECONDS, now_ms=clock)


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def controller(gateway: FakeGateway, sessions: SessionStore) -> DashboardController:
    return DashboardController(gateway, sessions)
