# src/tasklist/client/render.py

"""
View model + text rendering for the task list.

build_view() is UI-agnostic: it decides ordering, visibility and which
buttons are enabled. render_text() turns that into terminal output.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..tasks.task_models import Task
from .controller import ClientState


@dataclass(frozen=True, slots=True)
class TaskRow:
    task_id: int
    text: str
    completed: bool
    editing: bool
    time_label: str
    complete_label: str  # "Complete" / "Undo"
    edit_enabled: bool


@dataclass(frozen=True, slots=True)
class BoardView:
    rows: tuple[TaskRow, ...]
    empty_state_visible: bool
    bulk_actions_visible: bool
    remove_completed_enabled: bool


def _parse_timestamp(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        # Naive timestamps are read as local time.
        dt = datetime.fromisoformat(raw).astimezone()
        dt.timestamp()
    except (TypeError, ValueError, OverflowError, OSError):
        return None
    return dt


def format_creation_time(raw: str | None, *, now: datetime | None = None) -> str:
    """
    Human label for a creation timestamp.

    <1 min "just now", <60 min "N min(s) ago", <24 h "N hour(s) ago",
    <7 days "N day(s) ago", otherwise local date + HH:MM. Unparsable -> "".
    """
    dt = _parse_timestamp(raw)
    if dt is None:
        return ""

    now = (now or datetime.now()).astimezone()
    diff_mins = int((now - dt).total_seconds() // 60)
    diff_hours = diff_mins // 60
    diff_days = diff_hours // 24

    if diff_mins < 1:
        return "just now"
    if diff_mins < 60:
        return f"{diff_mins} min{'' if diff_mins == 1 else 's'} ago"
    if diff_hours < 24:
        return f"{diff_hours} hour{'' if diff_hours == 1 else 's'} ago"
    if diff_days < 7:
        return f"{diff_days} day{'' if diff_days == 1 else 's'} ago"
    return dt.strftime("%x %H:%M")


def sort_newest_first(tasks: tuple[Task, ...] | list[Task]) -> list[Task]:
    """Newest createdAt first; tasks without a usable timestamp keep their order at the end."""

    def key(task: Task) -> tuple[bool, float]:
        dt = _parse_timestamp(task.created_at)
        if dt is None:
            return (True, 0.0)
        return (False, -dt.timestamp())

    return sorted(tasks, key=key)


def build_view(state: ClientState, *, now: datetime | None = None) -> BoardView:
    rows = tuple(
        TaskRow(
            task_id=t.id,
            text=t.text,
            completed=t.completed,
            editing=t.is_editing,
            time_label=format_creation_time(t.created_at, now=now),
            complete_label="Undo" if t.completed else "Complete",
            edit_enabled=not t.completed,
        )
        for t in sort_newest_first(state.tasks)
    )
    has_tasks = bool(rows)
    return BoardView(
        rows=rows,
        empty_state_visible=not has_tasks,
        bulk_actions_visible=has_tasks,
        remove_completed_enabled=any(r.completed for r in rows),
    )


def render_text(view: BoardView) -> str:
    if view.empty_state_visible:
        return "No tasks yet. Add one above!"

    lines: list[str] = []
    for row in view.rows:
        if row.editing:
            lines.append(f"  #{row.task_id} [editing] {row.text}")
            lines.append(f"      /save {row.task_id} <text>   /cancel {row.task_id}")
            continue

        mark = "x" if row.completed else " "
        label = f"  ({row.time_label})" if row.time_label else ""
        actions = [f"/done {row.task_id} ({row.complete_label})"]
        if row.edit_enabled:
            actions.append(f"/edit {row.task_id}")
        actions.append(f"/delete {row.task_id}")
        lines.append(f"  [{mark}] #{row.task_id} {row.text}{label}")
        lines.append("      " + "   ".join(actions))

    if view.bulk_actions_visible:
        bulk = ["/clear-all"]
        if view.remove_completed_enabled:
            bulk.insert(0, "/clear-done")
        lines.append("")
        lines.append("  Bulk: " + "   ".join(bulk))
    return "\n".join(lines)
