# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, then runs one of:
- `serve`: the Task Store Service (Flask) over the configured key-value store,
- `console`: the interactive console client (remote HTTP or local store).
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from collections.abc import Sequence

from ..config import CLIENT_MODES, get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging
from ..server.app import create_app
from .bootstrap import create_initial_state, create_task_store

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tasklist", description="Minimal task list: service + console client")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP task store service")
    serve.add_argument("--host", default=None, help="Bind address (default: TASKLIST_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: TASKLIST_PORT)")
    serve.add_argument("--debug", action="store_true", help="Flask debug mode")

    console = sub.add_parser("console", help="Run the interactive console client")
    console.add_argument(
        "--mode",
        choices=list(CLIENT_MODES),
        default=None,
        help="remote = talk to the service over HTTP, local = use the store directly",
    )
    console.add_argument("--api-url", default=None, help="Service base URL (remote mode)")
    return parser


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    backend = getattr(state, "backend", None)
    if backend is None or not hasattr(backend, "close"):
        return
    try:
        backend.close()
    except Exception:
        logger.debug("Backend close failed.", exc_info=True)


def run_serve(settings, args: argparse.Namespace) -> None:
    host = args.host or settings.host
    port = args.port or settings.port
    debug = bool(args.debug or settings.debug)

    store = create_task_store(settings=settings)
    app = create_app(store)
    logger.info("Serving task store key=%s on http://%s:%s", store.key, host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False)


def run_console(settings, args: argparse.Namespace) -> None:
    overrides = {}
    if args.mode:
        overrides["client_mode"] = args.mode
    if args.api_url:
        overrides["api_base_url"] = args.api_url.rstrip("/")
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    state = create_initial_state(settings=settings, notifier=ConsoleNotifier())
    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


def main(argv: Sequence[str] | None = None) -> None:
    args = build_arg_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        show_requests=args.command == "serve",
    )

    logger.info("Starting %s (%s)...", settings.app_name, args.command)

    if args.command == "serve":
        run_serve(settings, args)
    else:
        run_console(settings, args)


if __name__ == "__main__":
    main()
