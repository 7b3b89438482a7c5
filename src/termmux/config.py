"""termmux configuration

Settings are grouped as:
- tmux binary: which executable and socket to drive
- session setup: placeholder names, listing format
- existence check: diagnostics that mean "nothing is running"
- model policy: optimistic vs strict mutation
- logging
"""

import os

# === tmux binary ===
TMUX_BINARY = os.environ.get("TERMMUX_TMUX", "tmux")  # executable name or path
TMUX_SOCKET = os.environ.get("TERMMUX_SOCKET") or None  # -S socket path

# === Session setup ===
PLACEHOLDER_WINDOW_NAME = "tmp"  # initial window name, renamed by add_window
SESSION_LIST_FORMAT = "#{session_name}"  # list-sessions -F

# === Existence check ===
NO_SERVER_MARKERS = (
    "no server running",
    "no such file or directory",
)  # matched case-insensitively against list-sessions output

# === Model policy ===
STRICT = os.environ.get("TERMMUX_STRICT", "").lower() in ("1", "true", "yes")

# === Logging ===
LOG_LEVEL = os.environ.get("TERMMUX_LOG_LEVEL", "INFO")
LOG_MAX_CMD_LEN = 120  # argv truncation length in log lines
