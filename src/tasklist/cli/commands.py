# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..client.render import build_view, render_text
from ..core.state import AppState

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s rest=%r", name, rest)
        return handler(state, rest)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def show_board(state: AppState) -> str:
    return render_text(build_view(state.client))


def _parse_id(raw: str) -> int | None:
    try:
        task_id = int(raw)
    except ValueError:
        return None
    return task_id if task_id > 0 else None


def _with_task_id(
    usage: str, op: Callable[[AppState, int, str], None]
) -> CommandHandler:
    """Wrap a handler that needs "<id> [text]" arguments."""

    def handler(state: AppState, rest: str) -> str:
        head, _, tail = rest.strip().partition(" ")
        task_id = _parse_id(head)
        if task_id is None:
            return f"Usage: {usage}"
        if state.client.find(task_id) is None:
            return f"No task #{task_id}."
        op(state, task_id, tail)
        return show_board(state)

    return handler


def cmd_help(state: AppState, rest: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, rest: str) -> str:
    return show_board(state)


def cmd_reload(state: AppState, rest: str) -> str:
    state.client = state.controller.load(state.client)
    return show_board(state)


def cmd_add(state: AppState, rest: str) -> str:
    state.client = state.controller.add(state.client, rest)
    return show_board(state)


def _toggle(state: AppState, task_id: int, _tail: str) -> None:
    state.client = state.controller.toggle_complete(state.client, task_id)


def _start_edit(state: AppState, task_id: int, _tail: str) -> None:
    state.client = state.controller.start_edit(state.client, task_id)


def _save_edit(state: AppState, task_id: int, text: str) -> None:
    state.client = state.controller.save_edit(state.client, task_id, text)


def _cancel_edit(state: AppState, task_id: int, _tail: str) -> None:
    state.client = state.controller.cancel_edit(state.client, task_id)


def _delete(state: AppState, task_id: int, _tail: str) -> None:
    state.client = state.controller.delete(state.client, task_id)


def cmd_clear_done(state: AppState, rest: str) -> str:
    state.client = state.controller.remove_completed(state.client)
    return show_board(state)


def cmd_clear_all(state: AppState, rest: str) -> str:
    state.client = state.controller.remove_all(state.client)
    return show_board(state)


def cmd_status(state: AppState, rest: str) -> str:
    settings = state.settings
    mode = getattr(settings, "client_mode", "remote")
    target = getattr(settings, "api_base_url", "") if mode == "remote" else getattr(settings, "kv_db_path", "")
    total = len(state.client.tasks)
    return (
        "Status:\n"
        f"  Mode: {mode} ({target})\n"
        f"  Tasks: {total} ({state.client.completed_count()} completed)\n"
        f"  Next id: {state.client.task_id_counter}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("reload", cmd_reload, help_text="Reload tasks from the store.")
registry.register("add", cmd_add, help_text="Add a task: /add <text> (plain text works too).")
registry.register(
    "done", _with_task_id("/done <id>", _toggle), help_text="Complete / undo a task: /done <id>."
)
registry.register("edit", _with_task_id("/edit <id>", _start_edit), help_text="Edit a task: /edit <id>.")
registry.register(
    "save",
    _with_task_id("/save <id> <text>", _save_edit),
    help_text="Save the task being edited: /save <id> <text>.",
)
registry.register(
    "cancel", _with_task_id("/cancel <id>", _cancel_edit), help_text="Cancel editing: /cancel <id>."
)
registry.register(
    "delete",
    _with_task_id("/delete <id>", _delete),
    help_text="Delete a task: /delete <id>.",
    aliases=["rm"],
)
registry.register("clear-done", cmd_clear_done, help_text="Remove all completed tasks.")
registry.register("clear-all", cmd_clear_all, help_text="Remove all tasks.")
registry.register("status", cmd_status, help_text="Show mode and counters.")
