"""Tests for Server - the runner adapter."""

import pytest

from termmux import InvocationError, RecordingRunner, Server, SessionCreationError, SessionAttr
from termmux.commands import NewSession
from termmux.runner import SubprocessRunner
from termmux.telemetry import metrics

LIST_SESSIONS = ["list-sessions", "-F", "#{session_name}"]


class TestServerInit:
    """Tests for Server construction."""

    def test_default_runner(self):
        server = Server()
        assert isinstance(server.runner, SubprocessRunner)

    def test_injected_runner(self, runner):
        server = Server(runner=runner)
        assert server.runner is runner

    def test_strict_flag(self, runner):
        assert Server(runner=runner, strict=True).strict is True
        assert Server(runner=runner, strict=False).strict is False


class TestRun:
    """Tests for Server.run / Server.start."""

    def test_run_intent(self, server, runner):
        server.run(NewSession(detached=True, session_name="s"))
        assert runner.calls == [["new-session", "-d", "-s", "s"]]

    def test_run_raw_vector(self, server, runner):
        server.run(["set-option", "-g", "mouse", "on"])
        assert runner.calls == [["set-option", "-g", "mouse", "on"]]

    def test_run_empty_vector(self, server):
        with pytest.raises(ValueError):
            server.run([])

    def test_run_failure_raises(self, server, runner):
        runner.respond("select-window", returncode=1, output="can't find window: 9\n")

        with pytest.raises(InvocationError) as exc_info:
            server.run(["select-window", "-t", "s:9"])

        err = exc_info.value
        assert err.argv == ["select-window", "-t", "s:9"]
        assert err.returncode == 1
        assert "can't find window" in err.output
        assert "can't find window" in str(err)

    def test_run_spawn_error_raises(self, server, runner):
        cause = FileNotFoundError("tmux")
        runner.respond("select-window", returncode=None, error=cause)

        with pytest.raises(InvocationError) as exc_info:
            server.run(["select-window"])

        assert exc_info.value.cause is cause

    def test_start_failure_is_returned(self, server, runner):
        runner.respond("resize-pane", returncode=1)

        result = server.start(["resize-pane", "-t", "s:0.0", "-R", "1"])

        assert not result.ok
        assert runner.started == [["resize-pane", "-t", "s:0.0", "-R", "1"]]

    def test_metrics(self, server, runner):
        runner.respond("kill-pane", returncode=1)
        server.run(["select-window"])
        server.start(["resize-pane"])
        with pytest.raises(InvocationError):
            server.run(["kill-pane"])

        assert metrics.get_counter("command.run", {"command": "select-window"}) == 1
        assert metrics.get_counter("command.start", {"command": "resize-pane"}) == 1
        assert metrics.get_counter("command.failed", {"command": "kill-pane"}) == 1


class TestSessionExists:
    """Tests for Server.session_exists."""

    def test_listed(self, server, runner):
        runner.respond("list-sessions", output="main\nwork\n")
        assert server.session_exists("work") is True
        assert runner.calls == [LIST_SESSIONS]

    def test_not_listed(self, server, runner):
        runner.respond("list-sessions", output="main\n")
        assert server.session_exists("work") is False

    def test_substring_match(self, server, runner):
        """Presence is substring containment on the raw listing."""
        runner.respond("list-sessions", output="workshop\n")
        assert server.session_exists("work") is True

    def test_no_server_running(self, server, runner):
        runner.respond("list-sessions", returncode=1, output="no server running on /tmp/tmux-1000/default\n")
        assert server.session_exists("work") is False

    def test_no_socket(self, server, runner):
        """The socket diagnostic is matched regardless of case."""
        runner.respond(
            "list-sessions",
            returncode=1,
            output="error connecting to /tmp/tmux-1000/default (No such file or directory)\n",
        )
        assert server.session_exists("work") is False

    def test_other_failure_propagates(self, server, runner):
        runner.respond("list-sessions", returncode=1, output="server exited unexpectedly\n")

        with pytest.raises(InvocationError):
            server.session_exists("work")

    def test_spawn_failure_propagates(self, server, runner):
        """A missing binary is not mistaken for a missing server."""
        runner.respond("list-sessions", returncode=None, error=FileNotFoundError("no server running"))

        with pytest.raises(InvocationError):
            server.session_exists("work")


class TestKillSession:
    """Tests for Server.kill_session."""

    def test_kills_existing(self, server, runner):
        runner.respond("list-sessions", output="work\n")
        server.kill_session("work")
        assert runner.calls == [LIST_SESSIONS, ["kill-session", "-t", "work"]]

    def test_absent_is_noop(self, server, runner):
        server.kill_session("work")
        assert runner.calls == [LIST_SESSIONS]

    def test_no_server_is_noop(self, server, runner):
        runner.respond("list-sessions", returncode=1, output="no server running\n")
        server.kill_session("work")
        assert runner.subcommands() == ["list-sessions"]

    def test_kill_failure_raises(self, server, runner):
        runner.respond("list-sessions", output="work\n")
        runner.respond("kill-session", returncode=1)

        with pytest.raises(InvocationError):
            server.kill_session("work")


class TestCreateSession:
    """Tests for Server.create_session."""

    def test_fresh_session(self, server, runner):
        """Absent session: no kill, then detached new-session with placeholder window."""
        session = server.create_session("x")

        assert runner.calls == [
            LIST_SESSIONS,
            ["new-session", "-d", "-s", "x", "-n", "tmp"],
        ]
        assert session.name == "x"
        assert session.windows == []
        assert session.next_window_number == 0
        assert session.server is server

    def test_replaces_existing(self, server, runner):
        runner.respond("list-sessions", output="x\n")
        server.create_session("x")
        assert runner.subcommands() == ["list-sessions", "kill-session", "new-session"]

    def test_no_server_running(self, server, runner):
        """Absence reported as a failed listing is not an error."""
        runner.respond("list-sessions", returncode=1, output="no server running on /tmp/tmux-0/default\n")
        session = server.create_session("x")
        assert session.name == "x"
        assert runner.subcommands() == ["list-sessions", "new-session"]

    def test_with_directory(self, server, runner):
        session = server.create_session_attr(SessionAttr(name="x", directory="/srv/app"))
        assert runner.calls[-1] == ["new-session", "-d", "-s", "x", "-n", "tmp", "-c", "/srv/app"]
        assert session.directory == "/srv/app"

    def test_kill_phase_failure(self, server, runner):
        runner.respond("list-sessions", returncode=1, output="lost server\n")

        with pytest.raises(SessionCreationError) as exc_info:
            server.create_session("x")

        err = exc_info.value
        assert err.phase == "kill"
        assert err.session_name == "x"
        assert err.entity is None
        assert isinstance(err.__cause__, InvocationError)
        assert "new-session" not in runner.subcommands()

    def test_create_phase_failure_keeps_session(self, server, runner):
        runner.respond("new-session", returncode=1, output="duplicate session: x\n")

        with pytest.raises(SessionCreationError) as exc_info:
            server.create_session("x")

        err = exc_info.value
        assert err.phase == "create"
        assert err.entity.name == "x"
        assert err.__cause__.returncode == 1

    def test_create_phase_failure_strict(self, strict_server, runner):
        runner.respond("new-session", returncode=1)

        with pytest.raises(SessionCreationError) as exc_info:
            strict_server.create_session("x")

        assert exc_info.value.entity is None

    def test_session_creation_error_is_not_invocation_error(self, server, runner):
        """Setup failures are a distinct kind."""
        runner.respond("new-session", returncode=1)

        with pytest.raises(SessionCreationError) as exc_info:
            server.create_session("x")

        assert not isinstance(exc_info.value, InvocationError)


class TestDryRun:
    """RecordingRunner doubles as a dry-run backend."""

    def test_plan_vectors(self):
        runner = RecordingRunner()
        session = Server(runner=runner).create_session("plan", directory="/code")
        editor = session.add_window("editor")
        editor.pane(0).vsplit()

        assert runner.calls == [
            LIST_SESSIONS,
            ["new-session", "-d", "-s", "plan", "-n", "tmp", "-c", "/code"],
            ["rename-window", "-t", "plan:0", "editor"],
            ["split-window", "-h", "-t", "plan:0.0", "-c", "/code"],
        ]
