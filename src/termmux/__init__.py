"""termmux - tmux sessions, windows and panes as Python objects.

PUBLIC API:
  - Server: Entry point; creates sessions through an injected runner
  - Session, Window, Pane: Hierarchy model
  - SessionAttr, WindowAttr, SplitAttr: Creation attributes
  - SubprocessRunner, RecordingRunner, RunResult: Process boundary
  - TermmuxError, InvocationError, SessionCreationError: Errors
"""

from .commands import ResizeDirection
from .exceptions import InvocationError, SessionCreationError, TermmuxError
from .models import Pane, Session, SessionAttr, SplitAttr, Window, WindowAttr
from .runner import CommandRunner, RecordingRunner, RunResult, SubprocessRunner
from .server import Server

__all__ = [
    # Entry point
    "Server",
    # Model
    "Session",
    "Window",
    "Pane",
    "SessionAttr",
    "WindowAttr",
    "SplitAttr",
    "ResizeDirection",
    # Runners
    "CommandRunner",
    "SubprocessRunner",
    "RecordingRunner",
    "RunResult",
    # Errors
    "TermmuxError",
    "InvocationError",
    "SessionCreationError",
]
