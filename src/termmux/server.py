"""Runner adapter - hands intents to a CommandRunner and maps failures.

PUBLIC API:
  - Server: Entry point owning the runner; creates sessions
"""

from collections.abc import Sequence

from . import config
from .commands import Intent, KillSession, ListSessions, NewSession
from .exceptions import InvocationError, SessionCreationError
from .models import Session, SessionAttr
from .runner import CommandRunner, RunResult, SubprocessRunner
from .telemetry import format_argv, get_logger, metrics

logger = get_logger(__name__)

Command = Intent | Sequence[str]


def _is_no_server(output: str) -> bool:
    """Check whether listing output says no tmux server/socket is present."""
    lowered = output.lower()
    return any(marker in lowered for marker in config.NO_SERVER_MARKERS)


class Server:
    """A tmux server reached through an injected CommandRunner.

    Sessions created here keep a reference back to the server; windows and
    panes reach it through their session.

    The in-process model is optimistic by default: a window or pane is linked
    into the hierarchy even when its tmux invocation fails, and the raised
    InvocationError carries it as ``entity``. With ``strict=True`` the object
    is unlinked before the error is raised.
    """

    def __init__(self, runner: CommandRunner | None = None, strict: bool | None = None):
        """Initialize Server.

        Args:
            runner: Command runner. Defaults to a SubprocessRunner built from config.
            strict: Roll back in-process mutations on failure. Defaults to config.STRICT.
        """
        self._runner = runner if runner is not None else SubprocessRunner()
        self._strict = config.STRICT if strict is None else strict

    @property
    def runner(self) -> CommandRunner:
        return self._runner

    @property
    def strict(self) -> bool:
        return self._strict

    def _invoke(self, args: list[str], wait: bool = True) -> RunResult:
        mode = "run" if wait else "start"
        logger.debug(f"tmux {mode}: {format_argv(args)}")
        metrics.inc(f"command.{mode}", {"command": args[0]})
        result = self._runner.run(args) if wait else self._runner.start(args)
        if not result.ok:
            metrics.inc("command.failed", {"command": args[0]})
        return result

    def run(self, command: Command) -> RunResult:
        """Run a command and wait for it to exit.

        Args:
            command: An Intent or a raw argument vector

        Returns:
            RunResult of a successful invocation

        Raises:
            InvocationError: If the process could not start or exited non-zero
        """
        args = _to_args(command)
        result = self._invoke(args)
        if not result.ok:
            raise _error_from(args, result)
        return result

    def start(self, command: Command) -> RunResult:
        """Spawn a command without waiting for it.

        Failures are reported in the returned RunResult, never raised.
        """
        return self._invoke(_to_args(command), wait=False)

    def session_exists(self, name: str) -> bool:
        """Check whether a live session's name appears in the session listing.

        Args:
            name: Session name (substring match against the raw listing)

        Returns:
            True if present. False if absent or no server is running.

        Raises:
            InvocationError: If listing fails for any other reason
        """
        args = ListSessions(format=config.SESSION_LIST_FORMAT).to_args()
        result = self._invoke(args)
        if not result.ok:
            if result.error is None and _is_no_server(result.output):
                return False
            raise _error_from(args, result)

        return name in result.output

    def kill_session(self, name: str) -> None:
        """Kill a session. Does nothing if it does not exist.

        Raises:
            InvocationError: If the existence check or the kill fails
        """
        if not self.session_exists(name):
            logger.debug(f"kill-session skipped, {name!r} not running")
            return

        self.run(KillSession(target_session=name))

    def create_session(self, name: str, directory: str = "") -> Session:
        """Create a fresh detached session, killing any previous one of that name."""
        return self.create_session_attr(SessionAttr(name=name, directory=directory))

    def create_session_attr(self, attr: SessionAttr) -> Session:
        """Create a fresh detached session from attributes.

        The initial tmux window gets a placeholder name; the first
        Session.add_window call renames it.

        Raises:
            SessionCreationError: If clearing the old session or creating the
                new one fails. The InvocationError is chained as __cause__.
        """
        try:
            self.kill_session(attr.name)
        except InvocationError as e:
            raise SessionCreationError(attr.name, "kill") from e

        session = Session(name=attr.name, server=self, directory=attr.directory)
        intent = NewSession(
            detached=True,
            session_name=attr.name,
            window_name=config.PLACEHOLDER_WINDOW_NAME,
            working_dir=attr.directory,
        )
        try:
            self.run(intent)
        except InvocationError as e:
            entity = None if self._strict else session
            raise SessionCreationError(attr.name, "create", entity=entity) from e

        logger.info(f"Created session {attr.name!r}")
        return session


def _to_args(command: Command) -> list[str]:
    if isinstance(command, Intent):
        return command.to_args()
    args = list(command)
    if not args:
        raise ValueError("empty tmux command")
    return args


def _error_from(args: list[str], result: RunResult) -> InvocationError:
    return InvocationError(
        args,
        returncode=result.returncode,
        output=result.output,
        cause=result.error,
    )
