# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import show_board
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleNotifier:
    """Notifier for the terminal: alert prints, confirm asks y/N."""

    def __init__(
        self,
        *,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._read = read
        self._write = write

    def alert(self, message: str) -> None:
        self._write(f"[!] {message}")

    def confirm(self, message: str) -> bool:
        try:
            answer = self._read(f"{message} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            self._write("")
            return False
        return answer.strip().lower() in {"y", "yes"}


def handle_line(state: AppState, line: str) -> str | None:
    """
    One console line -> reply text.

    Slash commands go to the registry; any other non-empty text adds a task.
    """
    line = line.strip()
    if not line:
        return None

    cmd_response = command_registry.handle(state, line)
    if cmd_response is not None:
        return cmd_response

    state.client = state.controller.add(state.client, line)
    return show_board(state)


def run_console_loop(state: AppState) -> None:
    logger.info("Console client started (mode=%s).", getattr(state.settings, "client_mode", "?"))
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    state.client = state.controller.load(state.client)
    print(show_board(state))

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            print(reply)

    logger.info("Console client finished.")
