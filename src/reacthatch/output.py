"""
reacthatch.output - Console Output and Logging Setup
====================================================

Status lines for the user go through a shared Rich console with the
familiar ``[INFO]``/``[SUCCESS]``/``[WARNING]``/``[ERROR]`` prefixes.
Diagnostic detail goes through :mod:`logging`, rendered by Rich's handler
and only shown at DEBUG level with ``--verbose``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape


# Console for rich output
console = Console()


def print_status(message: str) -> None:
    console.print(f"[blue]\\[INFO][/] {escape(message)}", soft_wrap=True)


def print_success(message: str) -> None:
    console.print(f"[green]\\[SUCCESS][/] {escape(message)}", soft_wrap=True)


def print_warning(message: str) -> None:
    console.print(f"[yellow]\\[WARNING][/] {escape(message)}", soft_wrap=True)


def print_error(message: str) -> None:
    console.print(f"[red]\\[ERROR][/] {escape(message)}", soft_wrap=True)


def configure_logging(verbose: bool = False) -> None:
    """
    Route ``reacthatch`` log records through a Rich handler.

    Parameters
    ----------
    verbose : bool
        Show DEBUG records if True, otherwise only warnings and errors.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger("reacthatch")
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console,
            show_time=False,
            show_path=verbose,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
