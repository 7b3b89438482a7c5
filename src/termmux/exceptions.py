"""termmux exceptions.

PUBLIC API:
  - TermmuxError: Base exception for all termmux operations
  - InvocationError: A tmux process failed to start or exited non-zero
  - SessionCreationError: An invocation failed while setting up a session
"""


class TermmuxError(Exception):
    """Base exception for all termmux operations."""

    pass


class InvocationError(TermmuxError):
    """Raised when a tmux invocation fails to start or exits non-zero.

    Attributes:
        argv: Argument vector that was handed to the runner (without binary).
        returncode: Exit status, or None if the process never ran.
        output: Combined stdout/stderr captured from the process.
        cause: Underlying OS error when the process could not be spawned.
        entity: In-process object linked into the hierarchy despite the
            failure (window or pane), if any.
    """

    def __init__(
        self,
        argv: list[str],
        returncode: int | None = None,
        output: str = "",
        cause: BaseException | None = None,
        entity: object | None = None,
    ):
        self.argv = list(argv)
        self.returncode = returncode
        self.output = output
        self.cause = cause
        self.entity = entity
        super().__init__(self._describe())

    def _describe(self) -> str:
        cmd = " ".join(self.argv)
        if self.cause is not None:
            return f"tmux {cmd}: {self.cause}"
        detail = self.output.strip()
        if detail:
            return f"tmux {cmd}: exit status {self.returncode}: {detail}"
        return f"tmux {cmd}: exit status {self.returncode}"


class SessionCreationError(TermmuxError):
    """Raised when session setup fails.

    Attributes:
        session_name: Name of the session being created.
        phase: "kill" (clearing a previous session) or "create".
        entity: The Session object when the create phase failed.
    """

    def __init__(self, session_name: str, phase: str, entity: object | None = None):
        self.session_name = session_name
        self.phase = phase
        self.entity = entity
        super().__init__(f"Failed to {phase} session {session_name!r}")
