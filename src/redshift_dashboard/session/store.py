# src/redshift_dashboard/session/store.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..config import SESSION_KEY, SESSION_TTL_SECONDS
from ..core.errors import SessionCorruptError
from ..core.models import SessionRecord
from ..core.ports import KeyValueStorage

logger = logging.getLogger(__name__)


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class SessionStore:
    """
    Time-bounded cached credentials used for silent re-login.

    Record shape (one fixed key): {"name": str, "passcode": str, "expiry": epoch_ms}.

    Lifecycle:
    - save() overwrites any prior record with expiry = now + ttl
    - load() is destructive on expiry: an expired or unparseable record is deleted
    - there is no renew; a successful login simply saves again
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = SESSION_KEY,
        ttl_seconds: float = SESSION_TTL_SECONDS,
        now_ms: Callable[[], int] = _wall_clock_ms,
    ) -> None:
        self._storage = storage
        self._key = key
        self._ttl_seconds = float(ttl_seconds)
        self._now_ms = now_ms

    def save(self, name: str, passcode: str, ttl_seconds: float | None = None) -> SessionRecord:
        ttl = self._ttl_seconds if ttl_seconds is None else float(ttl_seconds)
        record = SessionRecord(
            name=name,
            passcode=passcode,
            expiry_ms=self._now_ms() + int(ttl * 1000),
        )
        self._storage.set_item(self._key, record.to_json())
        logger.info("Session saved for %s (ttl=%.0fs).", name, ttl)
        return record

    def load(self) -> SessionRecord | None:
        raw = self._storage.get_item(self._key)
        if raw is None:
            return None

        try:
            record = SessionRecord.from_json(raw)
        except SessionCorruptError as e:
            logger.warning("Discarding corrupt session record: %s", e)
            self._storage.remove_item(self._key)
            return None

        if record.is_expired(self._now_ms()):
            logger.info("Session for %s expired, removing it.", record.name)
            self._storage.remove_item(self._key)
            return None

        return record

    def clear(self) -> None:
        self._storage.remove_item(self._key)
