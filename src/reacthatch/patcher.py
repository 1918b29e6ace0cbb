"""
reacthatch.patcher - Comment-Tolerant tsconfig Patching
=======================================================

TypeScript configuration files generated by Vite are "JSON with comments":
they contain ``/* ... */`` block comments, ``//`` line comments and the
occasional trailing comma. This module turns such text into a plain dict,
injects the ``@/`` path alias and writes strict JSON back.

Pipeline
--------
The patch is a pure pipeline with a single failure exit:

    strip_comments -> strip_trailing_commas -> parse
        -> inject_path_alias -> serialize

Both strip steps share a small tokenizer that knows whether it is inside a
JSON string literal. Comment markers and commas inside strings are left
alone, so values like ``"https://example.com"`` or ``"src/**/*.ts"`` survive.
Newlines are never removed, so line numbers reported by ``parse`` point at
the same line of the original file.

Patching is idempotent: running it on its own output yields the same
document. Only ``compilerOptions.baseUrl`` and ``compilerOptions.paths``
are ever changed.

Usage Example
-------------
>>> from reacthatch.patcher import patch_text
>>> print(patch_text('{"compilerOptions": {"target": "ES2020"} /* c */,}'))
{
  "compilerOptions": {
    "target": "ES2020",
    "baseUrl": ".",
    "paths": {
      "@/*": [
        "./src/*"
      ]
    }
  }
}
"""

from __future__ import annotations

import copy
import json
import logging
import math
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from reacthatch.errors import (
    ConfigFileNotFound,
    MalformedConfig,
    ReadFailure,
    WriteFailure,
)
from reacthatch.models import DEFAULT_PATH_ALIAS, PathAliasSpec


logger = logging.getLogger(__name__)

ConfigDocument = dict[str, Any]

# Characters shown on either side of a parse failure
EXCERPT_RADIUS = 30


# =============================================================================
# Tokenizer
# =============================================================================


def _string_end(text: str, start: int) -> int:
    """
    Return the offset just past the string literal opening at ``start``.

    Backslash escapes are honoured. An unterminated string runs to the end
    of the text.
    """
    i = start + 1
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        i += 1
    return length


# =============================================================================
# Pipeline Steps
# =============================================================================


def strip_comments(text: str) -> str:
    """
    Remove ``/* */`` and ``//`` comments that sit outside string literals.

    Parameters
    ----------
    text : str
        Raw configuration text.

    Returns
    -------
    str
        Text with comments removed. Newlines, including those inside removed
        block comments, are kept so line numbers do not shift.

    Notes
    -----
    An unterminated block comment is left in the output untouched, so the
    subsequent parse fails with :class:`MalformedConfig` instead of silently
    dropping the rest of the file.
    """
    out: list[str] = []
    i = 0
    length = len(text)

    while i < length:
        if text[i] == '"':
            end = _string_end(text, i)
            out.append(text[i:end])
            i = end
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                out.append(text[i:])
                break
            out.append("\n" * text.count("\n", i, end))
            i = end + 2
            continue

        if text.startswith("//", i):
            end = text.find("\n", i)
            if end == -1:
                break
            i = end
            continue

        out.append(text[i])
        i += 1

    return "".join(out)


def strip_trailing_commas(text: str) -> str:
    """
    Remove commas that directly precede a closing ``}`` or ``]``.

    Whitespace between the comma and the bracket is kept. Commas inside
    string literals are never touched, and runs of commas are not
    collapsed: ``[1,,]`` becomes ``[1,]``.

    Parameters
    ----------
    text : str
        Comment-free configuration text.

    Returns
    -------
    str
        Text without trailing commas.
    """
    out: list[str] = []
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]

        if ch == '"':
            end = _string_end(text, i)
            out.append(text[i:end])
            i = end
            continue

        if ch == ",":
            j = i + 1
            while j < length and text[j] in " \t\r\n":
                j += 1
            if j < length and text[j] in "}]":
                i += 1
                continue

        out.append(ch)
        i += 1

    return "".join(out)


def _excerpt(text: str, pos: int) -> str:
    start = max(0, pos - EXCERPT_RADIUS)
    end = min(len(text), pos + EXCERPT_RADIUS)
    return text[start:end]


def _reject_constant(name: str) -> float:
    # json accepts NaN and Infinity, JSON.parse and tsc do not
    raise MalformedConfig(f"{name} is not a valid JSON value")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise MalformedConfig(f"number {literal} is out of range")
    return value


def parse(text: str) -> ConfigDocument:
    """
    Parse comment-free, trailing-comma-free text as a JSON object.

    Parameters
    ----------
    text : str
        Stripped configuration text.

    Returns
    -------
    ConfigDocument
        The parsed document, with keys in file order.

    Raises
    ------
    MalformedConfig
        If the text is not valid JSON or its top-level value is not an
        object. Syntax errors carry line, column, offset and an excerpt of
        the text the parser saw. ``NaN``, ``Infinity`` and numbers that
        overflow a float are rejected too.
    """
    try:
        doc = json.loads(
            text,
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except json.JSONDecodeError as e:
        raise MalformedConfig(
            e.msg,
            lineno=e.lineno,
            colno=e.colno,
            pos=e.pos,
            excerpt=_excerpt(text, e.pos),
        ) from e
    except MalformedConfig:
        raise
    except RecursionError as e:
        raise MalformedConfig("nesting too deep", excerpt=_excerpt(text, 0)) from e
    except ValueError as e:
        # e.g. integer literals beyond the int conversion limit
        raise MalformedConfig(str(e), excerpt=_excerpt(text, 0)) from e

    if not isinstance(doc, dict):
        raise MalformedConfig(
            f"expected a JSON object at the top level, got {type(doc).__name__}",
            excerpt=_excerpt(text, 0),
        )

    return doc


def inject_path_alias(
    doc: ConfigDocument,
    alias: PathAliasSpec = DEFAULT_PATH_ALIAS,
) -> ConfigDocument:
    """
    Set ``compilerOptions.baseUrl`` and ``compilerOptions.paths``.

    Both keys are overwritten unconditionally. An existing ``paths`` map is
    replaced as a whole, not merged. Every other key keeps its value and
    position. The input document is not modified.

    Parameters
    ----------
    doc : ConfigDocument
        Parsed configuration.

    alias : PathAliasSpec
        Alias to inject. Defaults to ``{"@/*": ["./src/*"]}`` with
        ``baseUrl = "."``.

    Returns
    -------
    ConfigDocument
        A patched copy of ``doc``.

    Raises
    ------
    MalformedConfig
        If ``compilerOptions`` exists but is neither an object nor null.
    """
    patched = copy.deepcopy(doc)

    options = patched.get("compilerOptions")
    if options is None:
        options = {}
    elif not isinstance(options, dict):
        raise MalformedConfig(
            f"'compilerOptions' must be an object, got {type(options).__name__}"
        )

    options["baseUrl"] = alias.base_url
    options["paths"] = alias.to_paths()
    patched["compilerOptions"] = options

    return patched


def serialize(doc: ConfigDocument) -> str:
    """Serialize a document as 2-space indented JSON without a trailing newline."""
    return json.dumps(doc, indent=2, ensure_ascii=False, allow_nan=False)


# =============================================================================
# Whole-File Operations
# =============================================================================


def patch_text(text: str, alias: PathAliasSpec = DEFAULT_PATH_ALIAS) -> str:
    """
    Run the full patch pipeline on configuration text.

    Parameters
    ----------
    text : str
        Raw configuration text, comments and trailing commas allowed.

    alias : PathAliasSpec
        Alias to inject.

    Returns
    -------
    str
        Strict JSON with the alias injected.

    Raises
    ------
    MalformedConfig
        If the text cannot be parsed after stripping.
    """
    stripped = strip_trailing_commas(strip_comments(text))
    doc = parse(stripped)
    return serialize(inject_path_alias(doc, alias))


def _discard(tmp_name: str | None) -> None:
    if tmp_name is not None and os.path.exists(tmp_name):
        os.unlink(tmp_name)


def write_text_atomic(path: Path, content: str) -> None:
    """
    Replace ``path`` with ``content`` without ever leaving it truncated.

    The content goes to a temporary file next to the target, which is then
    moved over it. An existing target keeps its permission bits. The
    temporary file is removed if anything fails.

    Raises
    ------
    WriteFailure
        If the content cannot be encoded as UTF-8, or the temporary file
        cannot be written or moved into place.
    """
    path = Path(path)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        # NamedTemporaryFile creates 0600
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except (OSError, UnicodeEncodeError) as e:
        _discard(tmp_name)
        raise WriteFailure(path, e) from e
    except BaseException:
        _discard(tmp_name)
        raise


def read_config_text(path: Path) -> str:
    """
    Read a configuration file as UTF-8 text.

    Raises
    ------
    ConfigFileNotFound
        If ``path`` does not exist.
    ReadFailure
        If ``path`` exists but cannot be read, e.g. it is a directory.
    MalformedConfig
        If the content is not valid UTF-8. The location is that of the
        first offending byte.
    """
    path = Path(path)

    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise ConfigFileNotFound(path) from e
    except OSError as e:
        raise ReadFailure(path, e) from e

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_start = data.rfind(b"\n", 0, e.start) + 1
        raise MalformedConfig(
            f"not valid UTF-8 ({e.reason})",
            lineno=data.count(b"\n", 0, e.start) + 1,
            colno=e.start - line_start + 1,
            pos=e.start,
            excerpt=data[max(0, e.start - EXCERPT_RADIUS):e.start + EXCERPT_RADIUS]
            .decode("utf-8", errors="replace"),
            path=path,
        ) from e


def preview_file(path: Path, alias: PathAliasSpec = DEFAULT_PATH_ALIAS) -> str:
    """
    Return the patched content of ``path`` without writing anything.

    Raises
    ------
    ConfigFileNotFound, ReadFailure, MalformedConfig
        As for :func:`read_config_text` and :func:`patch_text`. A
        ``MalformedConfig`` names ``path``.
    """
    path = Path(path)
    original = read_config_text(path)

    try:
        return patch_text(original, alias)
    except MalformedConfig as e:
        raise e.with_path(path) from e


def patch_file(path: Path, alias: PathAliasSpec = DEFAULT_PATH_ALIAS) -> Path:
    """
    Patch a tsconfig-style file in place.

    The file is only written once the patched content is fully computed, so
    a :class:`MalformedConfig` leaves it untouched.

    Parameters
    ----------
    path : Path
        File to patch.

    alias : PathAliasSpec
        Alias to inject.

    Returns
    -------
    Path
        The patched file.

    Raises
    ------
    ConfigFileNotFound
        If ``path`` does not exist.
    ReadFailure
        If ``path`` cannot be read.
    MalformedConfig
        If the content is not UTF-8 or cannot be parsed after stripping.
    WriteFailure
        If the result cannot be written.
    """
    path = Path(path)
    logger.debug("Patching path alias into %s", path)

    patched = preview_file(path, alias)

    write_text_atomic(path, patched)
    logger.debug("Wrote %d characters to %s", len(patched), path)

    return path
