# src/redshift_dashboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console dashboard on one
asyncio event loop.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        await run_console_loop(state.controller)
    finally:
        await state.aclose()


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/redshift")
    setup_logging(log_dir=log_dir, file_level=file_level)

    logger.info(
        "Starting %s (%s)...",
        getattr(settings, "app_name", "redshift"),
        "offline demo" if getattr(settings, "offline", False) else "sheet endpoint",
    )

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
