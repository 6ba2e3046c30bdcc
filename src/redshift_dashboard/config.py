# src/redshift_dashboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (no endpoint URL means offline demo mode).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "REDSHIFT"

SESSION_KEY = "redshift_session"
SESSION_TTL_SECONDS = 90 * 60

# Deployment URLs copied from the sheet setup guide start with this marker until filled in.
PLACEHOLDER_URL_MARKER = "INSERT_YOUR"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def is_placeholder_url(url: str | None) -> bool:
    """True when the endpoint is unset or still the setup-guide placeholder."""
    return not url or not url.strip() or PLACEHOLDER_URL_MARKER in url


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Sheet endpoint (Apps Script web app) ----
    script_url: Optional[str]
    connect_timeout_seconds: float
    read_timeout_seconds: float

    # ---- Session ----
    session_key: str
    session_ttl_seconds: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path

    # ---- Offline demo backend ----
    offline_passcode: str
    offline_latency_seconds: float

    @property
    def offline(self) -> bool:
        return is_placeholder_url(self.script_url)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "redshift") or "redshift"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        script_url = _env(_k("SCRIPT_URL"), "").strip() or None

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 20.0)

        session_key = _env(_k("SESSION_KEY"), SESSION_KEY).strip() or SESSION_KEY
        session_ttl = _env_int(_k("SESSION_TTL_SECONDS"), SESSION_TTL_SECONDS)
        if session_ttl <= 0:
            session_ttl = SESSION_TTL_SECONDS

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/redshift"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "local_storage.json")

        offline_passcode = _env(_k("OFFLINE_PASSCODE"), "1234")
        offline_latency = max(0.0, _env_float(_k("OFFLINE_LATENCY_SECONDS"), 0.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            script_url=script_url,
            connect_timeout_seconds=connect_timeout,
            read_timeout_seconds=read_timeout,
            session_key=session_key,
            session_ttl_seconds=session_ttl,
            data_dir=data_dir,
            storage_path=storage_path,
            offline_passcode=offline_passcode,
            offline_latency_seconds=offline_latency,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
