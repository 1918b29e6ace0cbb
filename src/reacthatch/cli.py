"""
reacthatch.cli - Command Line Interface
=======================================

This module provides the command-line interface for reacthatch using Typer.

Architecture
------------
    app (main entry point)
    ├── new             - Create a new React + TypeScript project
    └── patch-tsconfig  - Inject the @/ path alias into a tsconfig file

``new`` is interactive by default (it asks for the shadcn/ui base colour and
confirms the settings) and scriptable with ``--yes``.

Usage Examples
--------------
    $ reacthatch new my-app
    $ reacthatch new my-app --base-color zinc --component dialog --yes
    $ reacthatch patch-tsconfig tsconfig.app.json --dry-run

See Also
--------
- generator.py: Scaffolding pipeline
- patcher.py: tsconfig patching
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import questionary
import typer
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from reacthatch import __version__
from reacthatch.errors import SetupError
from reacthatch.generator import create_project
from reacthatch.models import BaseColor, ProjectConfig
from reacthatch.output import configure_logging, console, print_error, print_success
from reacthatch.patcher import patch_file, preview_file


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="reacthatch",
    help="Bootstrap a React + TypeScript + Vite project with Tailwind and shadcn/ui.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]reacthatch[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]React + TypeScript project bootstrapper[/]\n"
            f"[dim]Stack: Vite + Tailwind CSS v4 + shadcn/ui[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def prompt_base_color() -> BaseColor:
    """
    Interactively prompt for the shadcn/ui base colour.

    Returns
    -------
    BaseColor
        The selected colour.
    """
    choices = [
        questionary.Choice(
            title=f"{color.value:<8} - {color.description}",
            value=color,
        )
        for color in BaseColor
    ]

    result = questionary.select(
        "Base colour for shadcn/ui?",
        choices=choices,
        default=BaseColor.NEUTRAL,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def show_summary(config: ProjectConfig) -> None:
    table = Table(title="Project Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", config.name)
    table.add_row("Location", str(config.project_dir))
    table.add_row("Base colour", config.base_color.value)
    table.add_row("Components", ", ".join(config.components))
    table.add_row("Clipboard", "yes" if config.copy_to_clipboard else "no")

    console.print()
    console.print(table)
    console.print()


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]reacthatch[/] - React + TypeScript project bootstrapper.

    [bold]Quick Start:[/]

        reacthatch new my-app
    """


# =============================================================================
# New Command - Create a New Project
# =============================================================================

@app.command()
def new(
    name: Annotated[
        str,
        typer.Argument(help="Name of the project to create"),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create project in (default: current directory)",
        ),
    ] = None,
    base_color: Annotated[
        str | None,
        typer.Option(
            "--base-color",
            "-b",
            help="shadcn/ui base colour: neutral, gray, zinc, stone, slate",
        ),
    ] = None,
    components: Annotated[
        list[str] | None,
        typer.Option(
            "--component",
            "-c",
            help="shadcn/ui component to add (repeatable)",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="TOML file with default settings",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed for the favicon emoji"),
    ] = None,
    no_clipboard: Annotated[
        bool,
        typer.Option("--no-clipboard", help="Don't copy the next command"),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip all prompts, use defaults"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Create a new React + TypeScript project.

    Runs the Vite generator, then adds:

    - [cyan]Tailwind CSS v4[/]
    - [cyan]shadcn/ui[/] with a few essential components
    - Dark mode with a theme toggle
    - The [cyan]@/[/] import alias

    [bold]Examples:[/]

        reacthatch new my-app
        reacthatch new my-app --base-color zinc --yes
        reacthatch new my-app -c dialog -c tabs --no-clipboard
    """
    configure_logging(verbose)

    resolved_color: BaseColor | None = None
    if base_color:
        try:
            resolved_color = BaseColor(base_color.lower())
        except ValueError:
            valid = ", ".join(c.value for c in BaseColor)
            print_error(f"Invalid base colour '{base_color}'. Valid: {valid}")
            raise typer.Exit(1)
    elif not yes and config_file is None:
        resolved_color = prompt_base_color()

    overrides = {
        "name": name,
        "output_dir": output_dir,
        "base_color": resolved_color,
        "components": components or None,
        "seed": seed,
        "copy_to_clipboard": False if no_clipboard else None,
    }

    try:
        if config_file is not None:
            config = ProjectConfig.from_toml(config_file, **overrides)
        else:
            config = ProjectConfig(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        for error in e.errors():
            print_error(str(error["msg"]))
        raise typer.Exit(1)
    except ValueError as e:
        print_error(f"Invalid config file {config_file}: {e}")
        raise typer.Exit(1)

    if not yes:
        show_summary(config)
        if not questionary.confirm("Create project with these settings?", default=True).ask():
            raise typer.Abort()

    try:
        result = create_project(config, verbose=True)
    except FileExistsError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except (SetupError, OSError) as e:
        print_error(f"Setup failed: {e}")
        raise typer.Exit(1)

    if not result.success:
        raise typer.Exit(1)


# =============================================================================
# Patch Command - Fix the Path Alias in an Existing Project
# =============================================================================

@app.command("patch-tsconfig")
def patch_tsconfig(
    path: Annotated[
        Path,
        typer.Argument(help="tsconfig file to patch"),
    ] = Path("tsconfig.app.json"),
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the patched JSON instead of writing it"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Add the [cyan]@/[/] path alias to a tsconfig file.

    Comments and trailing commas are removed, [cyan]compilerOptions.baseUrl[/]
    and [cyan]compilerOptions.paths[/] are set, and the file is rewritten as
    plain JSON. Running it twice changes nothing the second time.

    [bold]Examples:[/]

        reacthatch patch-tsconfig
        reacthatch patch-tsconfig ./my-app/tsconfig.app.json --dry-run
    """
    configure_logging(verbose)

    try:
        if dry_run:
            console.print(
                preview_file(path),
                markup=False,
                highlight=False,
                emoji=False,
                soft_wrap=True,
            )
            return

        patch_file(path)
    except SetupError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Path alias '@/*' -> './src/*' configured in {path}")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
