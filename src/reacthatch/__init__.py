"""
reacthatch - React + TypeScript Project Bootstrapper
====================================================

A CLI tool that sets up a React + TypeScript + Vite project the way I like
it: Tailwind CSS v4, shadcn/ui, dark mode and an ``@/`` import alias, with
none of the usual config fiddling.

Features
--------
- **One command**: Vite, Tailwind, shadcn/ui and dark mode in one go
- **Path aliases**: ``@/`` resolves to ``src/`` in both TypeScript and Vite
- **Safe tsconfig patching**: Comments and trailing commas are handled
  without corrupting string values
- **All-or-nothing**: A failed setup removes the half-created directory
- **Emoji favicon**: Every project gets its own, so browser tabs are easy
  to tell apart

Quick Start
-----------
```bash
pip install reacthatch

reacthatch new my-app
reacthatch new my-app --base-color zinc --component dialog --yes

# Just fix the alias in an existing project
reacthatch patch-tsconfig tsconfig.app.json
```

Example
-------
>>> from reacthatch import patch_text
>>> "baseUrl" in patch_text('{"compilerOptions": {}, // note\\n}')
True

Architecture
------------
- ``cli``: Typer-based command line interface
- ``generator``: Scaffolding pipeline
- ``patcher``: Comment-tolerant tsconfig patching
- ``runner``: External command execution
- ``clipboard``: Best-effort clipboard copy
- ``emoji``: Favicon emoji picker
- ``models``: Pydantic models for configuration
- ``errors``: Setup error taxonomy
- ``output``: Console output and logging setup
- ``templates``: Jinja2 templates for generated files

License
-------
MIT License - see LICENSE file for details.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from reacthatch.errors import (
    CommandFailed,
    ConfigFileNotFound,
    MalformedConfig,
    ReadFailure,
    RenderFailure,
    SetupError,
    WriteFailure,
)
from reacthatch.generator import GenerationResult, create_project
from reacthatch.models import BaseColor, PathAliasSpec, ProjectConfig
from reacthatch.patcher import patch_file, patch_text


__all__ = [
    # Configuration models
    "BaseColor",
    "CommandFailed",
    "ConfigFileNotFound",
    "GenerationResult",
    "MalformedConfig",
    "PathAliasSpec",
    "ProjectConfig",
    "ReadFailure",
    "RenderFailure",
    "SetupError",
    "WriteFailure",
    # Version info
    "__version__",
    # Core functions
    "create_project",
    "patch_file",
    "patch_text",
]
