# src/redshift_dashboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import getpass
import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..connectors.render import ERROR_LOADING, render_dashboard
from ..core.controller import DashboardController, LoginOutcome, ViewState

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]

ACCESS_DENIED = "Access Denied: Invalid Identity or Passcode."
CONNECTION_ERROR = "Connection Error: Unable to verify credentials."


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def login_message(outcome: LoginOutcome) -> str | None:
    if outcome is LoginOutcome.SUCCESS:
        return None
    if outcome is LoginOutcome.INVALID_CREDENTIALS:
        return ACCESS_DENIED
    if outcome is LoginOutcome.BUSY:
        return "Already verifying credentials, please wait."
    return CONNECTION_ERROR


async def run_login_prompt(
    controller: DashboardController,
    *,
    ask: Prompt = input,
    ask_secret: Prompt = getpass.getpass,
) -> bool:
    """Prompt for identity + passcode until authenticated. False on EOF/Ctrl+C."""
    _print_ts("Identity verification required.")
    while not controller.is_authenticated:
        try:
            name = (await asyncio.to_thread(ask, "Name: ")).strip()
            if not name:
                continue
            passcode = (await asyncio.to_thread(ask_secret, "Passcode: ")).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return False

        _print_ts("Verifying...")
        outcome = await controller.login(name, passcode)
        msg = login_message(outcome)
        if msg:
            _print_ts(msg)
    return True


def render_current(controller: DashboardController) -> str:
    if controller.view_state is ViewState.INCONSISTENT:
        return ERROR_LOADING
    snapshot = controller.snapshot
    return render_dashboard(snapshot) if snapshot is not None else ERROR_LOADING


async def run_console_loop(
    controller: DashboardController,
    *,
    ask: Prompt = input,
    ask_secret: Prompt = getpass.getpass,
) -> None:
    logger.info("Console connector started.")

    _print_ts("Checking saved session...")
    await controller.bootstrap()

    if not controller.is_authenticated:
        if not await run_login_prompt(controller, ask=ask, ask_secret=ask_secret):
            logger.info("Console login aborted.")
            return

    print(render_current(controller), flush=True)
    _print_ts("Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        try:
            user_input = (await asyncio.to_thread(ask, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            if controller.selected_task is not None:
                # Plain text while a submission is open goes into that submission.
                user_input = f"/send {user_input}"
            else:
                _print_ts("Commands start with '/'. Use /help to list them.")
                continue

        try:
            response = await command_registry.handle(controller, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            print(response, flush=True)

    logger.info("Console connector finished.")
