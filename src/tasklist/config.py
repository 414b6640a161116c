# src/tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (server and console client).
- Nothing required at import time; every key has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

CLIENT_MODES = ("remote", "local")
KV_BACKENDS = ("sqlite", "memory")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


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


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = _env(name, default).strip().lower()
    return raw if raw in choices else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    data_dir: Path
    kv_backend: str
    kv_db_path: Path
    store_key: str

    # ---- HTTP server ----
    host: str
    port: int
    debug: bool

    # ---- Client ----
    client_mode: str
    api_base_url: str
    request_timeout_seconds: float
    max_task_length: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist") or "tasklist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        kv_backend = _env_choice(_k("KV_BACKEND"), KV_BACKENDS, "sqlite")
        kv_db_path = _env_path(_k("KV_DB_PATH"), data_dir / "kv.sqlite3")
        store_key = _env(_k("STORE_KEY"), "user_tasks").strip() or "user_tasks"

        host = _env(_k("HOST"), "127.0.0.1")
        port = _env_int(_k("PORT"), 8787)
        debug = _env_bool(_k("DEBUG"), False)

        client_mode = _env_choice(_k("CLIENT_MODE"), CLIENT_MODES, "remote")
        api_base_url = _env(_k("API_BASE_URL"), f"http://{host}:{port}").rstrip("/")
        # keep a floor so a typo does not turn every request into a timeout
        request_timeout_seconds = max(0.5, _env_float(_k("REQUEST_TIMEOUT_SECONDS"), 10.0))
        max_task_length = max(1, _env_int(_k("MAX_TASK_LENGTH"), 100))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            kv_backend=kv_backend,
            kv_db_path=kv_db_path,
            store_key=store_key,
            host=host,
            port=port,
            debug=debug,
            client_mode=client_mode,
            api_base_url=api_base_url,
            request_timeout_seconds=request_timeout_seconds,
            max_task_length=max_task_length,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
