"""
Elfscope Console Interface
===========================

Rich-powered console abstraction providing a unified presentation layer
for the Elfscope command-line tool.

The class wraps two :class:`rich.console.Console` instances: one on
stdout for inspection output, one on stderr for warnings and errors, so
that redirected reports stay clean.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Theme -- consistent palette across all Elfscope output
# ---------------------------------------------------------------------------
_ELFSCOPE_THEME = Theme(
    {
        "elfscope.section": "bold bright_magenta",
        "elfscope.success": "bold green",
        "elfscope.warning": "bold yellow",
        "elfscope.error": "bold red",
    }
)


class ElfscopeConsole:
    """Unified console interface for Elfscope output.

    Usage::

        con = ElfscopeConsole()
        con.section("Section Headers")
        con.warning("Section '.foo' was not dumped because it does not exist!")
    """

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        width: int | None = None,
    ) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (useful in library / test mode).
            record: Enable Rich recording for text / HTML export.
            width:  Fixed console width; ``None`` lets Rich detect it.
        """
        self._console = Console(
            theme=_ELFSCOPE_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
            width=width,
        )
        self._err_console = Console(
            theme=_ELFSCOPE_THEME,
            quiet=quiet,
            stderr=True,
            highlight=False,
            width=width,
        )

    # ------------------------------------------------------------------ #
    #  Section header
    # ------------------------------------------------------------------ #

    def section(self, title: str) -> None:
        """Print a section heading, e.g. ``ELF Header:``."""
        self._console.print(f"[elfscope.section]{escape(title)}[/elfscope.section]")

    # ------------------------------------------------------------------ #
    #  Message helpers (severity-coloured)
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        """Print a success message on stdout."""
        self._console.print(
            f"[elfscope.success]SUCCESS:[/elfscope.success] {escape(message)}",
            soft_wrap=True,
        )

    def warning(self, message: str) -> None:
        """Print a warning on stderr."""
        self._err_console.print(
            f"[elfscope.warning]Warning:[/elfscope.warning] {escape(message)}",
            soft_wrap=True,
        )

    def error(self, message: str) -> None:
        """Print an error on stderr."""
        self._err_console.print(
            f"[elfscope.error]Error:[/elfscope.error] {escape(message)}",
            soft_wrap=True,
        )

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def plain(self, line: str) -> None:
        """Print *line* verbatim: no markup, no highlighting, no wrapping."""
        self._console.print(line, markup=False, highlight=False, soft_wrap=True)

    def blank(self, count: int = 1) -> None:
        """Print *count* blank lines."""
        for _ in range(count):
            self._console.print()

    def export_text(self) -> str:
        """Export recorded console output as text (requires ``record=True``)."""
        return self._console.export_text()
