# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "MINEBOARD_APP_NAME": "App display name (default: mine-board).",
    "MINEBOARD_LOG_LEVEL": "Console logging level; the console never shows less than WARNING (default: INFO).",
    "MINEBOARD_SERVER_NAME": "Server name shown in the console banner (default: ServerdeMine).",
    "MINEBOARD_SERVER_IP": "Server address shown in the console banner (default: serverdemine.online).",
    # Task store
    "MINEBOARD_STORE_BACKEND": "sqlite (local file) or http (remote board API) (default: sqlite).",
    "MINEBOARD_TASKS_DB_PATH": "SQLite task store path (default: <data_dir>/tasks.sqlite3).",
    "MINEBOARD_API_BASE_URL": "Board API base URL for the http backend (default: http://localhost:3000/api).",
    "MINEBOARD_HTTP_TIMEOUT_SECONDS": "Per-request timeout for the http backend (default: 10).",
    "MINEBOARD_CATEGORIES": "Comma separated categories seeded into an empty SQLite store.",
    # Identity
    "MINEBOARD_IDENTITY_PATH": "Nickname storage file (default: <data_dir>/identity.json).",
    "MINEBOARD_IDENTITY_KEY": "Key the nickname is stored under (default: MINECRAFT_NICKNAME).",
    # Behaviour
    "MINEBOARD_BLOCK_WHILE_LOADING": "Ignore mutations while a refresh/mutation is in flight (default: true).",
    # Paths (gitignored)
    "MINEBOARD_DATA_DIR": "Local data directory, also holds mine_board.log (default: .local/mine_board).",
}
