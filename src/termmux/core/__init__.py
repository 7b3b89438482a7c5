"""Core module - target addressing"""

from .ids import pane_target, target_args, window_target

__all__ = [
    "window_target",
    "pane_target",
    "target_args",
]
