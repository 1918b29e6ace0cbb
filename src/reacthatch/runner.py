"""
reacthatch.runner - External Command Execution
==============================================

The scaffolding pipeline never calls ``subprocess`` directly. It talks to a
:class:`CommandRunner`, which has one job: run a command in a directory and
either return or raise :class:`~reacthatch.errors.CommandFailed`.

Tests substitute a fake runner that records calls and simulates the files
the real generators would create.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from reacthatch.errors import CommandFailed


logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Anything that can run an external command in a given directory."""

    def run(self, args: Sequence[str], cwd: Path) -> None:
        """
        Run ``args`` with ``cwd`` as the working directory.

        Raises
        ------
        CommandFailed
            If the command cannot be started or exits non-zero.
        """
        ...


class SubprocessRunner:
    """
    Run commands with :func:`subprocess.run`, inheriting the terminal.

    Output from npm and the generators streams straight to the user, as
    it would if they ran the commands by hand.
    """

    def _resolve(self, args: Sequence[str]) -> list[str]:
        # npm and npx are .cmd shims on Windows, which CreateProcess
        # won't find without the extension
        resolved = list(args)
        if sys.platform == "win32" and resolved:
            found = shutil.which(resolved[0])
            if found:
                resolved[0] = found
        return resolved

    def run(self, args: Sequence[str], cwd: Path) -> None:
        command = self._resolve(args)
        logger.debug("Running %s in %s", " ".join(command), cwd)

        try:
            subprocess.run(command, cwd=cwd, check=True)
        except subprocess.CalledProcessError as e:
            raise CommandFailed(args, e.returncode) from e
        except FileNotFoundError as e:
            raise CommandFailed(args, reason=f"'{args[0]}' is not installed") from e
        except PermissionError as e:
            raise CommandFailed(args, reason=str(e)) from e
