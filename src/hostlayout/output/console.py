"""Rich Console factory and theme for hostlayout output.

Consoles render to a StringIO buffer so renderers keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich
disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HOSTLAYOUT_THEME = Theme(
    {
        "hl.ok": "bold green",
        "hl.error": "bold red",
        "hl.warning": "bold yellow",
        "hl.op": "bold cyan",
        "hl.key": "dim",
        "hl.folder": "bold blue",
        "hl.host": "green",
        "hl.id": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=HOSTLAYOUT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
