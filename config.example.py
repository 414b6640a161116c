# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Storage
    "TASKLIST_DATA_DIR": "Local data directory for the database and log (default: .local/tasklist).",
    "TASKLIST_KV_BACKEND": "sqlite (default) or memory (lost on exit).",
    "TASKLIST_KV_DB_PATH": "SQLite key-value store path (default: <data_dir>/kv.sqlite3).",
    "TASKLIST_STORE_KEY": "Key holding the task collection (default: user_tasks).",
    # HTTP server
    "TASKLIST_HOST": "Bind address for `tasklist serve` (default: 127.0.0.1).",
    "TASKLIST_PORT": "Bind port for `tasklist serve` (default: 8787).",
    "TASKLIST_DEBUG": "Flask debug mode (true/false).",
    # Console client
    "TASKLIST_CLIENT_MODE": "remote (talk to the service) or local (use the store directly).",
    "TASKLIST_API_BASE_URL": "Service URL for remote mode (default: http://<host>:<port>).",
    "TASKLIST_REQUEST_TIMEOUT_SECONDS": "HTTP timeout for client requests (default: 10).",
    "TASKLIST_MAX_TASK_LENGTH": "Longest task text the client accepts (default: 100).",
}
