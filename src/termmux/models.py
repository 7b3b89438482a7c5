"""Hierarchy model - sessions, windows and panes.

Ownership runs session -> windows -> panes. ``Window.session`` and
``Pane.window`` are parent pointers used for addressing and for reaching the
Server; they are left out of repr and equality.

The model is a local cache. It is authoritative only for the numbers it
assigns itself and is never re-synced with tmux.
"""

import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .commands import (
    KillPane,
    NewWindow,
    RenameWindow,
    ResizeDirection,
    ResizePane,
    SelectPane,
    SelectWindow,
    SendKeys,
    SplitWindow,
)
from .core.ids import pane_target, target_args, window_target
from .exceptions import InvocationError
from .runner import RunResult
from .telemetry import format_target_log, get_logger, metrics

if TYPE_CHECKING:
    from .server import Server

logger = get_logger(__name__)


@dataclass
class SessionAttr:
    """Attributes for a new session."""

    name: str
    directory: str = ""


@dataclass
class WindowAttr:
    """Attributes for a new window."""

    name: str = ""
    directory: str = ""


@dataclass
class SplitAttr:
    """Attributes for a pane split."""

    directory: str = ""


@dataclass(eq=False)
class Pane:
    """A pane inside a window.

    Attributes:
        number: Pane number, chosen by the caller of Window.add_pane
        window: Owning window
        commands: Command lines sent with exec(), for reference only
    """

    number: int
    window: "Window" = field(repr=False)
    commands: list[str] = field(default_factory=list)

    @property
    def target(self) -> str:
        return pane_target(self.window.session.name, self.window.number, self.number)

    @property
    def server(self) -> "Server":
        return self.window.session.server

    def working_directory(self, attr: SplitAttr | None = None) -> str:
        """Directory for a split: attr, then window, then session, else ""."""
        if attr is not None and attr.directory:
            return attr.directory
        return self.window.working_directory

    def exec(self, command: str) -> RunResult:
        """Type ``command`` into this pane and press Enter."""
        self.commands.append(command)
        return self.server.run(SendKeys(target_pane=self.target, keys=(command,), enter=True))

    def split(self, attr: SplitAttr | None = None) -> "Pane":
        """Split this pane top/bottom (-v). Returns the new pane."""
        return self._split(attr, vertical=True)

    def vsplit(self, attr: SplitAttr | None = None) -> "Pane":
        """Split this pane side by side (-h). Returns the new pane."""
        return self._split(attr, horizontal=True)

    def _split(self, attr: SplitAttr | None, horizontal: bool = False, vertical: bool = False) -> "Pane":
        intent = SplitWindow(
            horizontal=horizontal,
            vertical=vertical,
            target_pane=self.target,
            working_dir=self.working_directory(attr),
        )
        result = self.server.start(intent)
        rollback = not result.ok and self.server.strict
        if not rollback:
            self.window.split_commands.append(shlex.join(intent.to_args()))

        # New pane is assumed to take the next number after its source
        pane = self.window.add_pane(self.number + 1)
        if not result.ok:
            if rollback:
                self.window.panes.remove(pane)
            raise InvocationError(
                intent.to_args(),
                returncode=result.returncode,
                output=result.output,
                cause=result.error,
                entity=pane,
            )

        logger.debug(format_target_log("split", self.target, f"new pane {pane.number}"))
        return pane

    def resize(self, direction: ResizeDirection, amount: int) -> RunResult:
        """Resize without waiting for tmux. Failures stay in the result."""
        return self.server.start(ResizePane(target_pane=self.target, direction=direction, amount=amount))

    def resize_right(self, amount: int) -> RunResult:
        return self.resize(ResizeDirection.RIGHT, amount)

    def resize_left(self, amount: int) -> RunResult:
        return self.resize(ResizeDirection.LEFT, amount)

    def resize_up(self, amount: int) -> RunResult:
        return self.resize(ResizeDirection.UP, amount)

    def resize_down(self, amount: int) -> RunResult:
        return self.resize(ResizeDirection.DOWN, amount)

    def set_name(self, name: str) -> RunResult:
        """Set the pane title."""
        return self.server.run(SelectPane(target_pane=self.target, title=name))


@dataclass(eq=False)
class Window:
    """A numbered window inside a session.

    Attributes:
        number: Window number, assigned by the session
        session: Owning session
        name: Window name
        directory: Working directory; empty means use the session's
        panes: Panes in insertion order
        split_commands: Split vectors issued from this window's panes
    """

    number: int
    session: "Session" = field(repr=False)
    name: str = ""
    directory: str = ""
    panes: list[Pane] = field(default_factory=list)
    split_commands: list[str] = field(default_factory=list)

    @property
    def target(self) -> str:
        return window_target(self.session.name, self.number)

    @property
    def target_args(self) -> list[str]:
        return target_args(self.target)

    @property
    def server(self) -> "Server":
        return self.session.server

    @property
    def working_directory(self) -> str:
        return self.directory or self.session.directory

    def add_pane(self, number: int) -> Pane:
        """Append a pane to the model. Does not talk to tmux."""
        pane = Pane(number=number, window=self)
        self.panes.append(pane)
        return pane

    def pane(self, index: int) -> Pane:
        """Pane by insertion index (not by pane number)."""
        return self.panes[index]

    def select(self) -> RunResult:
        """Make this the active window."""
        return self.server.run(SelectWindow(target_window=self.target))

    def exec(self, command: str) -> RunResult:
        """Run a raw tmux command line, e.g. "set-option -g mouse on"."""
        return self.server.run(shlex.split(command))

    def set_config(self, command: str) -> RunResult:
        """Alias of exec() for configuration commands."""
        return self.exec(command)

    def kill_pane(self, number: int) -> RunResult:
        """Kill pane ``number`` of this window and drop it from the model."""
        result = self.server.run(KillPane(target_pane=pane_target(self.session.name, self.number, number)))
        self.panes = [pane for pane in self.panes if pane.number != number]
        return result


@dataclass(eq=False)
class Session:
    """A tmux session. Create through Server.create_session.

    Attributes:
        name: Session name, fixed for the session's lifetime
        server: Server the session was created through
        directory: Default working directory for windows
        windows: Windows in creation order
        next_window_number: Number for the next window; only ever increases
    """

    name: str
    server: "Server" = field(repr=False)
    directory: str = ""
    windows: list[Window] = field(default_factory=list)
    next_window_number: int = 0

    def add_window(self, name: str = "", directory: str = "") -> Window:
        """Add a window with the given name."""
        return self.add_window_attr(WindowAttr(name=name, directory=directory))

    def add_window_attr(self, attr: WindowAttr) -> Window:
        """Add a window.

        Window 0 is the session's initial window, so only a rename is issued
        for it. Other windows get new-window followed by rename-window.

        Raises:
            InvocationError: If either invocation fails. The window is linked
                into ``windows`` anyway (unless the server is strict) and is
                available as ``entity``.
        """
        window = Window(
            number=self.next_window_number,
            session=self,
            name=attr.name,
            directory=attr.directory,
        )
        window.add_pane(0)
        self.windows.append(window)
        self.next_window_number += 1
        metrics.gauge("session.windows", len(self.windows), {"session": self.name})

        target = tuple(window.target_args)
        try:
            if window.number != 0:
                self.server.run(
                    NewWindow(
                        target_window=target,
                        window_name=window.name,
                        working_dir=window.working_directory,
                    )
                )
            self.server.run(RenameWindow(target_window=target, window_name=window.name))
        except InvocationError as e:
            e.entity = window
            if self.server.strict:
                self.windows.remove(window)
                metrics.gauge("session.windows", len(self.windows), {"session": self.name})
            raise

        logger.debug(format_target_log("window", window.target, f"added {window.name!r}"))
        return window

    def kill(self) -> None:
        """Kill this session in tmux. The model is left as is."""
        self.server.kill_session(self.name)

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.kill()
