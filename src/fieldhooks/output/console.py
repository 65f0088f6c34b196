"""Rich Console factory and theme for fieldhooks output.

Consoles render into a StringIO buffer so every renderer keeps the
``render_result() -> str`` contract. Rich drops color codes on its own
when the output is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

FIELDHOOKS_THEME = Theme(
    {
        "fh.ok": "bold green",
        "fh.error": "bold red",
        "fh.warning": "bold yellow",
        "fh.op": "bold cyan",
        "fh.key": "dim",
        "fh.id": "bold blue",
        "fh.type": "magenta",
        "fh.title": "bold",
        "fh.required": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=FIELDHOOKS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
