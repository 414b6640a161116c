# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..client.controller import ClientState, TaskController
from .ports import TaskBackend


@dataclass
class AppState:
    """
    Top-level state of the console client.

    `client` is the only place the client mirror lives; command handlers read it,
    call the controller and store the returned ClientState back here.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: Any

    backend: TaskBackend
    controller: TaskController

    client: ClientState = field(default_factory=ClientState)
