"""
reacthatch.errors - Setup Error Taxonomy
========================================

Every failure that can abort a project setup is raised as a subclass of
:class:`SetupError`. Each one also subclasses the closest built-in
exception, so callers that already catch ``FileNotFoundError``,
``ValueError`` or ``OSError`` keep working.

Hierarchy
---------
    SetupError
    ├── ConfigFileNotFound  (FileNotFoundError)
    ├── MalformedConfig     (ValueError)
    ├── ReadFailure         (OSError)
    ├── WriteFailure        (OSError)
    ├── CommandFailed       (RuntimeError)
    └── RenderFailure       (RuntimeError)

None of these are retried. They propagate to the scaffolding pipeline,
which removes the partial project directory, and from there to the CLI,
which prints the message and exits with status 1.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class SetupError(Exception):
    """Base class for all errors that abort a reacthatch run."""


class ConfigFileNotFound(SetupError, FileNotFoundError):
    """
    The configuration file to patch does not exist.

    Attributes
    ----------
    path : Path
        The path that was expected to exist.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Configuration file not found: {self.path}")

    def __str__(self) -> str:
        return f"Configuration file not found: {self.path}"


class MalformedConfig(SetupError, ValueError):
    """
    Configuration text is not valid JSON after comments were stripped.

    The message carries the location of the failure and an excerpt of the
    text that survived stripping, since that is what the parser saw.

    Attributes
    ----------
    reason : str
        Short description of what went wrong.

    lineno : int | None
        1-based line of the failure, if known.

    colno : int | None
        1-based column of the failure, if known.

    pos : int | None
        0-based character offset of the failure, if known.

    excerpt : str
        The stripped text around the failure point.

    path : Path | None
        File the text came from, filled in by ``patch_file``.
    """

    def __init__(
        self,
        reason: str,
        *,
        lineno: int | None = None,
        colno: int | None = None,
        pos: int | None = None,
        excerpt: str = "",
        path: Path | None = None,
    ) -> None:
        self.reason = reason
        self.lineno = lineno
        self.colno = colno
        self.pos = pos
        self.excerpt = excerpt
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        where = f" in {self.path}" if self.path else ""
        message = f"Malformed configuration{where}: {self.reason}"
        if self.lineno is not None:
            message += f" (line {self.lineno}, column {self.colno}, char {self.pos})"
        if self.excerpt:
            message += f"\n  near: {self.excerpt!r}"
        return message

    def with_path(self, path: Path) -> MalformedConfig:
        """Return a copy of this error that names the source file."""
        return MalformedConfig(
            self.reason,
            lineno=self.lineno,
            colno=self.colno,
            pos=self.pos,
            excerpt=self.excerpt,
            path=path,
        )

    def __str__(self) -> str:
        return self._format()


class ReadFailure(SetupError, OSError):
    """
    An existing file could not be read (a directory, no permission, ...).

    Attributes
    ----------
    path : Path
        The file that could not be read.
    """

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to read {self.path}: {cause}")

    def __str__(self) -> str:
        return f"Failed to read {self.path}: {self.cause}"


class WriteFailure(SetupError, OSError):
    """
    Writing a patched or generated file failed.

    Attributes
    ----------
    path : Path
        The file that could not be written.
    """

    def __init__(self, path: Path, cause: OSError | UnicodeError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to write {self.path}: {cause}")

    def __str__(self) -> str:
        return f"Failed to write {self.path}: {self.cause}"


class CommandFailed(SetupError, RuntimeError):
    """
    An external command could not be started or exited non-zero.

    Attributes
    ----------
    command : tuple[str, ...]
        The argument vector that was run.

    returncode : int | None
        Exit status, or None if the command could not be started.
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        cmd = " ".join(self.command)
        if self.returncode is None:
            return f"Could not run '{cmd}': {self.reason or 'command not found'}"
        return f"Command '{cmd}' failed with exit status {self.returncode}"


class RenderFailure(SetupError, RuntimeError):
    """
    A bundled template could not be loaded or rendered.

    Attributes
    ----------
    template : str
        Name of the template.
    """

    def __init__(self, template: str, cause: Exception) -> None:
        self.template = template
        self.cause = cause
        super().__init__(f"Failed to render template {template}: {cause}")
