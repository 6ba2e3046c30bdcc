# src/redshift_dashboard/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .controller import DashboardController
from .ports import DashboardGateway, KeyValueStorage, SessionRepo

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    storage: KeyValueStorage
    sessions: SessionRepo
    gateway: DashboardGateway
    controller: DashboardController

    async def aclose(self) -> None:
        """Release network resources (no exceptions should escape)."""
        close = getattr(self.gateway, "aclose", None)
        if close is None:
            return
        try:
            await close()
        except Exception:
            logger.debug("Gateway close failed.", exc_info=True)
