"""Telemetry - logger factory and metrics facade

Log format: [module:target] msg
Metric examples: command.run, command.start, command.failed, session.windows
"""

import logging

from . import config

_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    return logger


def setup_logging(level: str | int | None = None) -> None:
    """Configure the termmux logger hierarchy.

    Args:
        level: Log level name or number. Defaults to config.LOG_LEVEL.
    """
    root = logging.getLogger("termmux")
    root.setLevel(level if level is not None else config.LOG_LEVEL)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)


def format_target_log(module: str, target: str, msg: str) -> str:
    """Format a log message prefixed with a tmux target.

    Args:
        module: Module tag
        target: Target string (e.g. "work:1.0")
        msg: Log message

    Returns:
        Formatted message: [module:target] msg
    """
    return f"[{module}:{target or 'unknown'}] {msg}"


def format_argv(args: list[str]) -> str:
    """Join an argument vector for logging, truncated to LOG_MAX_CMD_LEN."""
    text = " ".join(args)
    if len(text) > config.LOG_MAX_CMD_LEN:
        return text[: config.LOG_MAX_CMD_LEN] + "..."
    return text


class Metrics:
    """Metrics facade

    Simple in-memory counters and gauges.
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """Increment a counter.

        Args:
            name: Metric name (e.g. "command.run")
            labels: Optional labels (e.g. {"command": "split-window"})
            value: Increment, default 1
        """
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        """Set a gauge value."""
        key = self._make_key(name, labels)
        self._gauges[key] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """Read a counter (for tests)."""
        key = self._make_key(name, labels)
        return self._counters.get(key, 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        """Read a gauge (for tests)."""
        key = self._make_key(name, labels)
        return self._gauges.get(key, 0.0)

    def reset(self) -> None:
        """Clear all metrics (for tests)."""
        self._counters.clear()
        self._gauges.clear()

    def _make_key(self, name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


# Global metrics instance
metrics = Metrics()
