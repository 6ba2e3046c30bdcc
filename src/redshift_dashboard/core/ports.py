# src/redshift_dashboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of concrete implementations.
This keeps the sheet endpoint and local storage swappable (offline demo
backend, in-memory fakes in tests).
"""

from typing import Protocol

from .models import DashboardSnapshot, SessionRecord
from .status import TaskStatus


class DashboardGateway(Protocol):
    """Remote sheet backend. Both calls may raise GatewayError."""

    async def login(self, name: str, passcode: str) -> DashboardSnapshot | None: ...

    async def submit_task(
            self,
            task_id: str,
            content: str,
            student_name: str,
            task_title: str,
    ) -> TaskStatus: ...


class KeyValueStorage(Protocol):
    """localStorage-style string storage."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class SessionRepo(Protocol):
    def save(self, name: str, passcode: str, ttl_seconds: float | None = None) -> SessionRecord: ...
    def load(self) -> SessionRecord | None: ...
    def clear(self) -> None: ...
