"""Target addressing for tmux entities

tmux directs commands with "-t <target>". termmux only ever emits two forms,
both derived from the in-process identity chain:
- <session>:<window>         - a window (e.g. "work:1")
- <session>:<window>.<pane>  - a pane (e.g. "work:1.0")

Numbers are decimal and unpadded.
"""


def window_target(session: str, window: int) -> str:
    """Build a window target.

    Args:
        session: Session name
        window: Window number

    Returns:
        Target like "work:1"
    """
    return f"{session}:{window:d}"


def pane_target(session: str, window: int, pane: int) -> str:
    """Build a pane target.

    Args:
        session: Session name
        window: Window number
        pane: Pane number

    Returns:
        Target like "work:1.0"
    """
    return f"{session}:{window:d}.{pane:d}"


def target_args(target: str) -> list[str]:
    """Wrap a target string as a "-t" flag pair."""
    return ["-t", target]
