"""
reacthatch.models - Pydantic Models for Project Configuration
=============================================================

This module defines the data models used throughout reacthatch. Pydantic
gives us validation of user input with clear error messages, easy loading
from TOML, and full type hints.

Architecture Notes
------------------
    ProjectConfig (main)
    ├── name: str
    ├── output_dir: Path
    ├── base_color: BaseColor (enum)
    ├── components: list[str]
    ├── copy_to_clipboard: bool
    └── seed: int | None

    PathAliasSpec (frozen)
    ├── base_url: str
    └── aliases: dict[str, list[str]]

Usage Example
-------------
>>> from reacthatch.models import ProjectConfig
>>> config = ProjectConfig(name="my-app")
>>> config.next_command
'cd my-app && npm run dev'
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enumerations
# =============================================================================

class BaseColor(str, Enum):
    """
    Base colour palettes accepted by ``shadcn init --base-color``.

    Examples
    --------
    >>> BaseColor("zinc")
    <BaseColor.ZINC: 'zinc'>
    """

    NEUTRAL = "neutral"
    GRAY = "gray"
    ZINC = "zinc"
    STONE = "stone"
    SLATE = "slate"

    @property
    def description(self) -> str:
        """Short description for CLI prompts."""
        descriptions = {
            BaseColor.NEUTRAL: "Pure greys, no tint",
            BaseColor.GRAY: "Cool grey with a hint of blue",
            BaseColor.ZINC: "Cool grey, slightly darker",
            BaseColor.STONE: "Warm grey",
            BaseColor.SLATE: "Blue-tinted grey",
        }
        return descriptions[self]


# =============================================================================
# Path Alias
# =============================================================================

class PathAliasSpec(BaseModel):
    """
    Import alias injected into ``compilerOptions`` of a tsconfig file.

    The alias is written to two keys: ``baseUrl`` and ``paths``. Both are
    replaced wholesale every time a file is patched.

    Attributes
    ----------
    base_url : str
        Value for ``compilerOptions.baseUrl``.

    aliases : dict[str, list[str]]
        Value for ``compilerOptions.paths``.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = "."
    aliases: dict[str, list[str]] = Field(
        default_factory=lambda: {"@/*": ["./src/*"]},
    )

    def to_paths(self) -> dict[str, list[str]]:
        """Return a fresh copy of the alias map, safe to embed in a document."""
        return {prefix: list(targets) for prefix, targets in self.aliases.items()}

    def to_compiler_options(self) -> dict[str, Any]:
        """The two ``compilerOptions`` entries this alias owns."""
        return {"baseUrl": self.base_url, "paths": self.to_paths()}


DEFAULT_PATH_ALIAS = PathAliasSpec()


# =============================================================================
# Main Configuration Model
# =============================================================================

DEFAULT_COMPONENTS: tuple[str, ...] = (
    "button",
    "card",
    "input",
    "label",
    "dropdown-menu",
)

# Components the starter app imports directly
REQUIRED_COMPONENTS: tuple[str, ...] = ("button", "dropdown-menu")


class ProjectConfig(BaseModel):
    """
    Complete configuration for a reacthatch project.

    The configuration can be built from CLI options, loaded from a TOML
    file, or constructed programmatically.

    Attributes
    ----------
    name : str
        Project and directory name, passed to ``npm create vite``.

    output_dir : Path
        Directory the project directory is created in.

    base_color : BaseColor
        shadcn/ui base colour.

    components : list[str]
        shadcn/ui components to add. The starter app always needs
        ``button`` and ``dropdown-menu``, so they are added if missing.

    copy_to_clipboard : bool
        Whether to copy the follow-up command to the clipboard.

    seed : int | None
        Seed for the favicon emoji picker. None picks at random.

    Examples
    --------
    >>> config = ProjectConfig(name="demo", components=["card"])
    >>> config.components
    ['card', 'button', 'dropdown-menu']
    """

    name: Annotated[str, Field(
        description="Project name (directory and package.json name)",
        min_length=1,
        max_length=214,
    )]
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory where the project will be created",
    )
    base_color: BaseColor = Field(
        default=BaseColor.NEUTRAL,
        description="shadcn/ui base colour",
    )
    components: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COMPONENTS),
        description="shadcn/ui components to add",
    )
    copy_to_clipboard: bool = Field(
        default=True,
        description="Copy the next command to the clipboard",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the favicon emoji picker",
    )

    @field_validator("name")
    @classmethod
    def validate_project_name(cls, v: str) -> str:
        """
        Validate the project name.

        Names become a directory and an npm package name, so they may only
        contain letters, digits, ``-``, ``_`` and ``.``, and must start with
        a letter or digit.
        """
        v = v.strip()

        if not re.match(r"^[A-Za-z0-9][A-Za-z0-9._-]*$", v):
            msg = (
                f"Invalid project name '{v}'. Names must start with a letter "
                "or digit and contain only letters, digits, '.', '-' and '_'."
            )
            raise ValueError(msg)

        return v

    @field_validator("components")
    @classmethod
    def validate_components(cls, v: list[str]) -> list[str]:
        """Normalize, deduplicate and complete the component list."""
        seen: list[str] = []
        for component in v:
            name = component.strip().lower()
            if not name:
                continue
            if not re.match(r"^[a-z0-9][a-z0-9-]*$", name):
                msg = f"Invalid component name '{component}'"
                raise ValueError(msg)
            if name not in seen:
                seen.append(name)

        for required in REQUIRED_COMPONENTS:
            if required not in seen:
                seen.append(required)

        return seen

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def project_dir(self) -> Path:
        """Full path to the project directory (``output_dir / name``)."""
        return self.output_dir / self.name

    @property
    def next_command(self) -> str:
        """Command the user runs after setup to start the dev server."""
        return f"cd {self.name} && npm run dev"

    # -------------------------------------------------------------------------
    # Serialization Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_toml(cls, path: Path, **overrides: Any) -> ProjectConfig:
        """
        Load configuration defaults from a TOML file.

        Settings may live at the top level or in a ``[reacthatch]`` table.
        Keyword arguments that are not None override values from the file.

        Parameters
        ----------
        path : Path
            Path to the TOML configuration file.

        **overrides
            Values that take precedence over the file, typically CLI options.

        Returns
        -------
        ProjectConfig
            Validated configuration object.

        Raises
        ------
        FileNotFoundError
            If the config file doesn't exist.
        ValueError
            If the file is not valid TOML or ``reacthatch`` is not a table.
        ValidationError
            If the config file has invalid values.
        """
        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

        section = data.get("reacthatch", data)
        if not isinstance(section, dict):
            msg = f"'reacthatch' must be a table, got {type(section).__name__}"
            raise ValueError(msg)

        section.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**section)
