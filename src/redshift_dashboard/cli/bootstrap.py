# src/redshift_dashboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires concrete implementations into AppState (storage/session/gateway/controller).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.controller import DashboardController
from ..core.ports import DashboardGateway
from ..core.state import AppState
from ..gateway.client import SheetGateway
from ..gateway.offline import OfflineGateway
from ..session.local_storage import LocalStorage
from ..session.store import SessionStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_gateway(settings) -> DashboardGateway:
    if getattr(settings, "offline", False):
        logger.info("No sheet endpoint configured. Using local demo data.")
        return OfflineGateway(
            passcode=settings.offline_passcode,
            latency_seconds=settings.offline_latency_seconds,
        )
    return SheetGateway.from_settings(settings)


def create_initial_state(*, settings=None, gateway: DashboardGateway | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the gateway) injectable makes the app easier to test
    and avoids hidden global config reads. If settings is None, falls back to
    get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = LocalStorage(settings.storage_path)
    sessions = SessionStore(
        storage,
        key=settings.session_key,
        ttl_seconds=settings.session_ttl_seconds,
    )
    if gateway is None:
        gateway = create_gateway(settings)

    return AppState(
        settings=settings,
        storage=storage,
        sessions=sessions,
        gateway=gateway,
        controller=DashboardController(gateway, sessions),
    )
