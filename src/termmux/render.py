"""Session hierarchy rendering using Rich."""

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from .models import Pane, Session, Window

# Styles per tree level
_SESSION_STYLE = "bold cyan"
_WINDOW_STYLE = "bold"
_TARGET_STYLE = "green"
_DIR_STYLE = "dim"


def _window_label(window: Window) -> Text:
    label = Text()
    label.append(window.target, style=_TARGET_STYLE)
    label.append(" ")
    label.append(window.name or "(unnamed)", style=_WINDOW_STYLE)
    if window.directory:
        label.append(f"  {window.directory}", style=_DIR_STYLE)
    return label


def _pane_label(pane: Pane) -> Text:
    label = Text()
    label.append(pane.target, style=_TARGET_STYLE)
    if pane.commands:
        count = len(pane.commands)
        label.append(f"  {count} command{'s' if count != 1 else ''}", style=_DIR_STYLE)
    return label


def build_tree(session: Session) -> Tree:
    """Build a Rich tree of a session's windows and panes.

    Args:
        session: Session to render

    Returns:
        Tree rooted at the session
    """
    root_label = Text(session.name, style=_SESSION_STYLE)
    if session.directory:
        root_label.append(f"  {session.directory}", style=_DIR_STYLE)

    tree = Tree(root_label)
    for window in session.windows:
        branch = tree.add(_window_label(window))
        for pane in window.panes:
            branch.add(_pane_label(pane))
    return tree


def print_session(session: Session, console: Console | None = None) -> None:
    """Print a session tree to ``console`` (stdout by default)."""
    (console or Console()).print(build_tree(session))
