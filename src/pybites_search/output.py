"""Output formatting system with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- search results only. This is what downstream tools pipe
  and parse.
* **stderr** -- all diagnostics (debug lines and errors). Never
  contaminates the result stream.
* **TTY detection** -- Rich formatting when stdout is an interactive
  terminal, plain text when piped to another process.
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb``, and the
  ``--no-color`` CLI flag.

The module exposes two layers:

1. :class:`OutputManager` -- a stateful object holding format preferences,
   Rich consoles, and the verbose flag. Created once per invocation by
   the search command and installed via :func:`set_output`.
2. Module-level convenience functions (:func:`debug`, :func:`error`, ...)
   that delegate to the global ``OutputManager`` so callers deep in the
   fetch pipeline do not need to pass the manager around.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from pybites_search.models import Item


class OutputFormat(str, Enum):
    """Enumeration of supported output formats.

    ``AUTO`` resolves to ``RICH`` when stdout is an interactive TTY and colour
    is not disabled, or to ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Central manager for all CLI output with stdout/stderr discipline.

    Args:
        format: Desired output format. ``AUTO`` resolves based on TTY
            detection.
        no_color: Disable all colour and Rich markup.
        verbose: Enable debug-level messages on stderr.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            self._format = (
                OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
            )
        else:
            self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
            highlight=False,
            soft_wrap=True,
        )
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            highlight=False,
            soft_wrap=True,
        )

    @property
    def format(self) -> OutputFormat:
        """The resolved output format."""
        return self._format

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def print_results(self, items: Sequence[Item], show_type: bool = True) -> None:
        """Render the selected items to stdout in the active format.

        * **Plain mode** -- ``Type:``/``Title:``/``Link:`` lines followed by
          a blank line per item.
        * **Rich mode** -- the same layout with colour.
        * **JSON mode** -- a single JSON array of item objects.

        Args:
            items: Selected items, already in output order.
            show_type: Whether to label each item with its content type.
                Callers pass ``False`` when all results share a known type.
        """
        if self._format == OutputFormat.JSON:
            records = [item.model_dump(mode="json") for item in items]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return

        for item in items:
            if self._format == OutputFormat.PLAIN:
                if show_type:
                    self.print_data(f"Type: {item.content_type}")
                self.print_data(f"Title: {item.title}")
                self.print_data(f"Link: {item.link}\n")
            else:
                if show_type:
                    self._stdout.print(
                        f"[bold magenta]Type:[/bold magenta] {escape(item.content_type)}"
                    )
                self._stdout.print(f"[bold cyan]Title:[/bold cyan] {escape(item.title)}")
                self._stdout.print(f"[bold]Link:[/bold] [blue]{escape(item.link)}[/blue]")
                self._stdout.print()

    def print_data(self, text: str) -> None:
        """Print raw text to stdout.

        Args:
            text: The string to write. A trailing newline is appended.
        """
        print(text, file=sys.stdout, flush=True)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr. Never suppressed.

        Args:
            message: The error text.
        """
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when ``--verbose`` is active.

        Args:
            message: The debug text (prefixed with ``[debug]`` on output).
        """
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]{escape(f'[debug] {message}')}[/dim]")


# ------------------------------------------------------------------ #
# Environment detection
# ------------------------------------------------------------------ #


def _is_tty() -> bool:
    """Check if stdout is a TTY."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance (set during command startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager` instance.

    If no instance has been installed via :func:`set_output`, a default
    ``OutputManager`` with ``AUTO`` format is created lazily.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def print_results(items: Sequence[Item], show_type: bool = True) -> None:
    """Render search results via the global OutputManager."""
    get_output().print_results(items, show_type)


def error(message: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(message)


def debug(message: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(message)
