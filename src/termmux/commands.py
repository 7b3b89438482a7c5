"""Command builder - intents to tmux argument vectors.

Every intent is a frozen dataclass. ``to_args()`` returns the argument vector
without the tmux binary: subcommand first, then flags in a fixed order.
Flags whose field is empty, zero or False are left out entirely.

PUBLIC API:
  - Intent: Base class for all intents
  - ResizeDirection: Resize direction codes
  - KillSession, NewSession, ListSessions
  - NewWindow, RenameWindow, SelectWindow
  - SplitWindow, ResizePane, SendKeys, SelectPane, KillPane
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

# Key sent after send-keys text to submit it
ENTER_KEY = "C-m"


class ResizeDirection(Enum):
    """resize-pane direction flag letters."""

    RIGHT = "R"
    LEFT = "L"
    UP = "U"
    DOWN = "D"

    @property
    def flag(self) -> str:
        return f"-{self.value}"


class Intent(ABC):
    """A desired tmux action prior to argument-vector translation."""

    subcommand: ClassVar[str]

    @abstractmethod
    def to_args(self) -> list[str]:
        """Build the argument vector."""


@dataclass(frozen=True)
class KillSession(Intent):
    """Kill a session."""

    subcommand: ClassVar[str] = "kill-session"

    target_session: str

    def to_args(self) -> list[str]:
        return [self.subcommand, "-t", self.target_session]


@dataclass(frozen=True)
class NewSession(Intent):
    """Create a session.

    Attributes:
        detached: Do not attach the session to the current terminal (-d).
        session_name: Session name (-s).
        window_name: Name of the initial window (-n).
        working_dir: Starting directory (-c).
    """

    subcommand: ClassVar[str] = "new-session"

    detached: bool = False
    session_name: str = ""
    window_name: str = ""
    working_dir: str = ""

    def to_args(self) -> list[str]:
        args = [self.subcommand]
        if self.detached:
            args.append("-d")
        if self.session_name:
            args.extend(["-s", self.session_name])
        if self.window_name:
            args.extend(["-n", self.window_name])
        if self.working_dir:
            args.extend(["-c", self.working_dir])
        return args


@dataclass(frozen=True)
class ListSessions(Intent):
    """List live sessions, one per line in ``format``."""

    subcommand: ClassVar[str] = "list-sessions"

    format: str = ""

    def to_args(self) -> list[str]:
        args = [self.subcommand]
        if self.format:
            args.extend(["-F", self.format])
        return args


@dataclass(frozen=True)
class NewWindow(Intent):
    """Create a window.

    ``target_window`` is the pre-computed ("-t", "session:N") pair, copied
    verbatim into the vector.
    """

    subcommand: ClassVar[str] = "new-window"

    target_window: tuple[str, ...] = ()
    window_name: str = ""
    working_dir: str = ""

    def to_args(self) -> list[str]:
        args = [self.subcommand, *self.target_window]
        if self.window_name:
            args.extend(["-n", self.window_name])
        if self.working_dir:
            args.extend(["-c", self.working_dir])
        return args


@dataclass(frozen=True)
class RenameWindow(Intent):
    """Rename a window. The new name is positional, not a flag."""

    subcommand: ClassVar[str] = "rename-window"

    target_window: tuple[str, ...] = ()
    window_name: str = ""

    def to_args(self) -> list[str]:
        args = [self.subcommand, *self.target_window]
        if self.window_name:
            args.append(self.window_name)
        return args


@dataclass(frozen=True)
class SelectWindow(Intent):
    """Make a window the active window of its session."""

    subcommand: ClassVar[str] = "select-window"

    target_window: str = ""

    def to_args(self) -> list[str]:
        args = [self.subcommand]
        if self.target_window:
            args.extend(["-t", self.target_window])
        return args


@dataclass(frozen=True)
class SplitWindow(Intent):
    """Split a pane.

    ``horizontal`` (-h) places the new pane beside the target, ``vertical``
    (-v) below it. At most one may be set.

    Raises:
        ValueError: If both horizontal and vertical are set.
    """

    subcommand: ClassVar[str] = "split-window"

    horizontal: bool = False
    vertical: bool = False
    target_pane: str = ""
    working_dir: str = ""

    def __post_init__(self):
        if self.horizontal and self.vertical:
            raise ValueError("split-window takes either -h or -v, not both")

    def to_args(self) -> list[str]:
        args = [self.subcommand]
        if self.horizontal:
            args.append("-h")
        if self.vertical:
            args.append("-v")
        if self.target_pane:
            args.extend(["-t", self.target_pane])
        if self.working_dir:
            args.extend(["-c", self.working_dir])
        return args


@dataclass(frozen=True)
class ResizePane(Intent):
    """Resize a pane by ``amount`` cells in ``direction``."""

    subcommand: ClassVar[str] = "resize-pane"

    target_pane: str
    direction: ResizeDirection
    amount: int

    def to_args(self) -> list[str]:
        return [self.subcommand, "-t", self.target_pane, self.direction.flag, str(self.amount)]


@dataclass(frozen=True)
class SendKeys(Intent):
    """Type keys into a pane, optionally followed by Enter (C-m)."""

    subcommand: ClassVar[str] = "send-keys"

    target_pane: str = ""
    keys: tuple[str, ...] = ()
    enter: bool = False

    def to_args(self) -> list[str]:
        args = [self.subcommand]
        if self.target_pane:
            args.extend(["-t", self.target_pane])
        args.extend(key for key in self.keys if key)
        if self.enter:
            args.append(ENTER_KEY)
        return args


@dataclass(frozen=True)
class SelectPane(Intent):
    """Select a pane, optionally setting its title (-T)."""

    subcommand: ClassVar[str] = "select-pane"

    target_pane: str = ""
    title: str = ""

    def to_args(self) -> list[str]:
        args = [self.subcommand]
        if self.target_pane:
            args.extend(["-t", self.target_pane])
        if self.title:
            args.extend(["-T", self.title])
        return args


@dataclass(frozen=True)
class KillPane(Intent):
    """Kill a pane."""

    subcommand: ClassVar[str] = "kill-pane"

    target_pane: str = ""

    def to_args(self) -> list[str]:
        args = [self.subcommand]
        if self.target_pane:
            args.extend(["-t", self.target_pane])
        return args
