"""Rich Console factory and theme for archctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. Rich sees a non-TTY file and
leaves color codes out.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ARCH_THEME = Theme(
    {
        "arch.pass": "bold green",
        "arch.fail": "bold red",
        "arch.error": "bold red",
        "arch.key": "dim",
    }
)


def create_console() -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(file=StringIO(), theme=ARCH_THEME, highlight=False, width=120)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
