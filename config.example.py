# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "Title shown above the list (default: Task List).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory for the database and log file (default: .local/tasklist).",
    "TASKLIST_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    # SQLite
    "TASKLIST_SQLITE_TIMEOUT": "Seconds to wait on a locked database (default: 30).",
    "TASKLIST_SQLITE_WAL": "Use WAL journal mode (true/false, default: true).",
}
