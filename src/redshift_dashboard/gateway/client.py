# src/redshift_dashboard/gateway/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import GatewayError
from ..core.models import DashboardSnapshot
from ..core.status import TaskStatus
from .normalize import snapshot_from_payload

logger = logging.getLogger(__name__)


def make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    """
    The sheet endpoint can be slow (cold Apps Script start), but it must never
    hang the dashboard forever.
    """
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


class SheetGateway:
    """
    DashboardGateway over the spreadsheet's Apps Script web app.

    Every request is a POST with a single JSON object body; every response is
    a JSON object with a "status" field. Apps Script answers through a
    redirect to googleusercontent.com, so redirects are followed.
    """

    def __init__(
        self,
        script_url: str,
        *,
        timeout: httpx.Timeout | float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not script_url or not script_url.strip():
            raise ValueError("Sheet endpoint URL is not set. Set REDSHIFT_SCRIPT_URL in your .env.")

        self._url = script_url.strip()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else make_timeout(5.0, 20.0),
            follow_redirects=True,
        )

    @classmethod
    def from_settings(cls, settings) -> SheetGateway:
        return cls(
            str(settings.script_url or ""),
            timeout=make_timeout(
                float(settings.connect_timeout_seconds),
                float(settings.read_timeout_seconds),
            ),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> SheetGateway:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        action = payload.get("action")
        try:
            response = await self._client.post(self._url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as e:
            raise GatewayError(f"{action}: request timed out") from e
        except httpx.HTTPStatusError as e:
            raise GatewayError(f"{action}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise GatewayError(f"{action}: {e.__class__.__name__}") from e
        except ValueError as e:
            raise GatewayError(f"{action}: response is not JSON") from e

        if not isinstance(body, dict):
            raise GatewayError(f"{action}: response is not a JSON object")
        return body

    async def login(self, name: str, passcode: str) -> DashboardSnapshot | None:
        body = await self._post({"action": "login", "name": name, "passcode": passcode})

        if body.get("status") != "success":
            logger.info("Login rejected for %s: %s", name, body.get("message") or "no message")
            return None

        data = body.get("data")
        if not isinstance(data, dict):
            raise GatewayError("login: success response without a data object")

        snapshot = snapshot_from_payload(data)
        logger.info(
            "Login ok for %s: %d tasks, week %d.",
            snapshot.student.name,
            len(snapshot.tasks),
            snapshot.progress.week,
        )
        return snapshot

    async def submit_task(
        self,
        task_id: str,
        content: str,
        student_name: str,
        task_title: str,
    ) -> TaskStatus:
        body = await self._post(
            {
                "action": "submit",
                "taskId": task_id,
                "content": content,
                "studentName": student_name,
                "taskTitle": task_title,
            }
        )

        if body.get("status") != "success":
            raise GatewayError(f"submit: backend error: {body.get('message') or 'no message'}")

        status = TaskStatus.parse(body.get("newStatus"))
        if status is None:
            raise GatewayError(f"submit: unexpected newStatus {body.get('newStatus')!r}")

        logger.info("Submission for task %s recorded as %s.", task_id, status)
        return status
