"""Command runners - the process boundary.

A runner takes an argument vector (without the tmux binary) and executes it.
Runners never raise for process failures; they report them in RunResult and
leave the error taxonomy to termmux.server.
"""

import subprocess
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from . import config
from .telemetry import format_argv, get_logger

logger = get_logger(__name__)


@dataclass
class RunResult:
    """Outcome of one invocation.

    Attributes:
        args: Argument vector handed to the runner.
        returncode: Exit status. None when the process was only started, or
            could not be spawned.
        output: Combined stdout and stderr.
        error: OS error raised while spawning the process.
    """

    args: list[str]
    returncode: int | None = 0
    output: str = ""
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and (self.returncode is None or self.returncode == 0)


@runtime_checkable
class CommandRunner(Protocol):
    """Executes tmux argument vectors."""

    def run(self, args: list[str]) -> RunResult:
        """Run to completion and capture combined output."""
        ...

    def start(self, args: list[str]) -> RunResult:
        """Spawn and return without waiting for the process to exit."""
        ...


class SubprocessRunner:
    """Runner backed by the tmux executable via subprocess."""

    def __init__(self, binary: str | None = None, socket_path: str | None = None):
        """Initialize SubprocessRunner.

        Args:
            binary: tmux executable. Defaults to config.TMUX_BINARY.
            socket_path: Optional tmux socket path. Defaults to config.TMUX_SOCKET.
        """
        self._binary = binary or config.TMUX_BINARY
        self._socket_path = socket_path if socket_path is not None else config.TMUX_SOCKET
        self._children: list[subprocess.Popen] = []

    @property
    def binary(self) -> str:
        return self._binary

    def command(self, args: list[str]) -> list[str]:
        """Full command line for ``args``, including binary and socket."""
        cmd = [self._binary]
        if self._socket_path:
            cmd.extend(["-S", self._socket_path])
        cmd.extend(args)
        return cmd

    def run(self, args: list[str]) -> RunResult:
        cmd = self.command(args)
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                # session names and diagnostics are not guaranteed UTF-8
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.debug(f"tmux spawn failed: {format_argv(cmd)}: {e}")
            return RunResult(args=list(args), returncode=None, error=e)

        return RunResult(args=list(args), returncode=proc.returncode, output=proc.stdout or "")

    def start(self, args: list[str]) -> RunResult:
        """Spawn without waiting.

        Started children are kept until they exit so they are reaped here
        instead of being dropped while still running.
        """
        self.reap()
        cmd = self.command(args)
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug(f"tmux spawn failed: {format_argv(cmd)}: {e}")
            return RunResult(args=list(args), returncode=None, error=e)

        self._children.append(proc)
        return RunResult(args=list(args), returncode=None)

    def reap(self) -> int:
        """Collect started children that have exited.

        Returns:
            Number of children still running
        """
        self._children = [proc for proc in self._children if proc.poll() is None]
        return len(self._children)


@dataclass
class RecordingRunner:
    """Runner that records vectors instead of executing them.

    Every subcommand succeeds with empty output unless a response was set
    with ``respond``. Useful for tests and for dry runs.

    Attributes:
        calls: Every vector handed to run() or start(), in order.
        started: The subset of calls that went through start().
    """

    calls: list[list[str]] = field(default_factory=list)
    started: list[list[str]] = field(default_factory=list)
    _responses: dict[str, RunResult] = field(default_factory=dict, repr=False)

    def respond(
        self,
        subcommand: str,
        returncode: int | None = 0,
        output: str = "",
        error: BaseException | None = None,
    ) -> None:
        """Answer every later ``subcommand`` invocation with this outcome."""
        self._responses[subcommand] = RunResult(
            args=[subcommand], returncode=returncode, output=output, error=error
        )

    def clear(self) -> None:
        """Forget recorded calls and responses."""
        self.calls.clear()
        self.started.clear()
        self._responses.clear()

    def subcommands(self) -> list[str]:
        """First token of every recorded call."""
        return [call[0] for call in self.calls if call]

    def run(self, args: list[str]) -> RunResult:
        return self._answer(args)

    def start(self, args: list[str]) -> RunResult:
        self.started.append(list(args))
        result = self._answer(args)
        if result.ok:
            # Started processes report no exit status
            result.returncode = None
        return result

    def _answer(self, args: list[str]) -> RunResult:
        self.calls.append(list(args))
        canned = self._responses.get(args[0]) if args else None
        if canned is None:
            return RunResult(args=list(args))
        return RunResult(
            args=list(args),
            returncode=canned.returncode,
            output=canned.output,
            error=canned.error,
        )
