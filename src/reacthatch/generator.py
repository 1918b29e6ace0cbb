"""
reacthatch.generator - Project Scaffolding Pipeline
===================================================

This module contains the main logic for generating a React + TypeScript
project. It drives the external generators (Vite, npm, shadcn/ui), renders
our own templates on top of their output, and patches the TypeScript
configuration so the ``@/`` import alias works.

Architecture
------------
The generator follows a strictly sequential pipeline:

    1. Refuse to touch an existing directory
    2. ``npm create vite`` with the react-ts template
    3. Install Tailwind CSS, @types/node and lucide-react
    4. Write src/index.css, tsconfig.json, vite.config.ts
    5. Patch tsconfig.app.json with the path alias
    6. ``npm install``, ``shadcn init``, ``shadcn add``
    7. Write the theme provider, mode toggle and starter App.tsx
    8. Set the page title and emoji favicon in index.html
    9. Remove the Vite demo assets, write README.md
   10. Copy the next command to the clipboard

Each step waits for the previous one. The first failure aborts the run and
the partially created project directory is removed, so there is never a
half-configured project left behind.

All paths are explicit. The process working directory is never changed;
every command gets its ``cwd`` from the pipeline.

Usage Example
-------------
>>> from reacthatch.generator import create_project
>>> from reacthatch.models import ProjectConfig
>>>
>>> result = create_project(ProjectConfig(name="my-app"))
>>> result.next_command
'cd my-app && npm run dev'

See Also
--------
- patcher.py: tsconfig patching
- runner.py: External command execution
- templates/: Jinja2 template files
"""

from __future__ import annotations

import logging
import random
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape
from rich.panel import Panel

from reacthatch import __version__
from reacthatch.clipboard import ClipboardPublisher
from reacthatch.emoji import pick_emoji
from reacthatch.errors import ReadFailure, RenderFailure, WriteFailure
from reacthatch.models import DEFAULT_PATH_ALIAS, BaseColor, ProjectConfig
from reacthatch.output import (
    console,
    print_status,
    print_success,
    print_warning,
)
from reacthatch.patcher import patch_file, serialize
from reacthatch.runner import CommandRunner, SubprocessRunner


logger = logging.getLogger(__name__)


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Template file mappings: template_name -> output path relative to project root
TEMPLATE_MAPPINGS: dict[str, str] = {
    "index.css.j2": "src/index.css",
    "vite.config.ts.j2": "vite.config.ts",
    "theme-provider.tsx.j2": "src/components/theme-provider.tsx",
    "mode-toggle.tsx.j2": "src/components/mode-toggle.tsx",
    "App.tsx.j2": "src/App.tsx",
    "README.md.j2": "README.md",
}

# Vite demo files replaced by our starter app
DEFAULT_FILES_TO_REMOVE: tuple[str, ...] = (
    "src/App.css",
    "public/vite.svg",
    "src/assets/react.svg",
)

# npm packages installed right after the Vite project is created
DEPENDENCY_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("npm", "install", "tailwindcss", "@tailwindcss/vite"),
    ("npm", "install", "-D", "@types/node"),
    ("npm", "install", "lucide-react"),
)

THEMES: tuple[str, ...] = ("light", "dark", "system")
DEFAULT_THEME = "dark"
THEME_STORAGE_KEY = "ui-theme"

TITLE_PATTERN = re.compile(r"<title>.*?</title>", re.DOTALL)
FAVICON_PATTERN = re.compile(r'<link\s+rel="icon"[^>]*>')


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class GenerationResult:
    """
    Result of a project generation operation.

    Attributes
    ----------
    success : bool
        Whether the project was created successfully.

    project_path : Path
        Absolute path to the project directory.

    emoji : str
        Emoji used for the favicon and README title.

    files_created : list[Path]
        Files written or patched by reacthatch (not by the generators).

    files_removed : list[Path]
        Vite demo files that were deleted.

    commands_run : list[tuple[str, ...]]
        External commands, in the order they were run.

    warnings : list[str]
        Non-fatal problems, e.g. an index.html without the expected tags.

    errors : list[str]
        The error that aborted the run, if any.

    next_command : str
        Command to start the dev server.

    copied_to_clipboard : bool
        Whether ``next_command`` made it onto the clipboard.
    """

    success: bool
    project_path: Path
    emoji: str = ""
    files_created: list[Path] = field(default_factory=list)
    files_removed: list[Path] = field(default_factory=list)
    commands_run: list[tuple[str, ...]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    next_command: str = ""
    copied_to_clipboard: bool = False


# =============================================================================
# Command Construction
# =============================================================================


def create_vite_command(name: str) -> tuple[str, ...]:
    """Command that creates the base Vite project in the output directory."""
    return ("npm", "create", "vite@latest", name, "--", "--template", "react-ts")


def shadcn_init_command(base_color: BaseColor) -> tuple[str, ...]:
    """Command that initializes shadcn/ui with the chosen base colour."""
    return ("npx", "shadcn@latest", "init", "--yes", "--base-color", base_color.value)


def shadcn_add_command(components: list[str]) -> tuple[str, ...]:
    """Command that adds the given shadcn/ui components without prompting."""
    return ("npx", "shadcn@latest", "add", *components, "--yes")


# =============================================================================
# Template Engine Setup
# =============================================================================


def create_jinja_env() -> Environment:
    """
    Create and configure the Jinja2 template environment.

    Autoescaping is disabled since the output is TypeScript, CSS and
    Markdown, not HTML. Trailing newlines in templates are kept.
    """
    return Environment(
        loader=PackageLoader("reacthatch", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def build_context(config: ProjectConfig, emoji: str) -> dict[str, Any]:
    """Template context shared by every template."""
    return {
        "config": config,
        "emoji": emoji,
        "reacthatch_version": __version__,
        "default_theme": DEFAULT_THEME,
        "storage_key": THEME_STORAGE_KEY,
        "themes": THEMES,
    }


def render_template(
    env: Environment,
    template_name: str,
    context: dict[str, Any],
) -> str:
    """
    Render a single template.

    Raises
    ------
    RenderFailure
        If the template is missing or fails to render.
    """
    try:
        return env.get_template(template_name).render(**context)
    except TemplateError as e:
        raise RenderFailure(template_name, e) from e


def render_templates(
    env: Environment,
    names: list[str],
    context: dict[str, Any],
) -> dict[Path, str]:
    """Render the named templates, keyed by output path relative to the project."""
    return {
        Path(TEMPLATE_MAPPINGS[name]): render_template(env, name, context)
        for name in names
    }


# =============================================================================
# File Writing
# =============================================================================


def write_files(project_dir: Path, files: dict[Path, str]) -> list[Path]:
    """
    Write rendered files into the project, overwriting existing ones.

    Parameters
    ----------
    project_dir : Path
        Root directory of the project.

    files : dict[Path, str]
        Mapping of relative paths to file contents.

    Returns
    -------
    list[Path]
        Absolute paths of the written files.

    Raises
    ------
    WriteFailure
        If a file cannot be written.
    """
    created_files: list[Path] = []

    for relative_path, content in files.items():
        full_path = project_dir / relative_path
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteFailure(full_path, e) from e

        logger.debug("Wrote %s", relative_path)
        created_files.append(full_path)

    return created_files


def root_tsconfig() -> dict[str, Any]:
    """
    The solution-style tsconfig.json that references the app and node configs.

    The path alias is repeated here because editors resolve imports through
    the root config.
    """
    return {
        "files": [],
        "references": [
            {"path": "./tsconfig.app.json"},
            {"path": "./tsconfig.node.json"},
        ],
        "compilerOptions": DEFAULT_PATH_ALIAS.to_compiler_options(),
    }


def configure_typescript(project_dir: Path) -> list[Path]:
    """
    Write tsconfig.json and patch the alias into tsconfig.app.json.

    Raises
    ------
    ConfigFileNotFound
        If Vite did not create tsconfig.app.json.
    MalformedConfig
        If tsconfig.app.json cannot be parsed.
    WriteFailure
        If either file cannot be written.
    """
    written = write_files(project_dir, {Path("tsconfig.json"): serialize(root_tsconfig())})
    written.append(patch_file(project_dir / "tsconfig.app.json"))
    return written


def favicon_link(emoji: str) -> str:
    """An ``<link rel="icon">`` tag rendering ``emoji`` as an inline SVG."""
    return (
        '<link rel="icon" href="data:image/svg+xml,'
        "<svg xmlns=%22http://www.w3.org/2000/svg%22 viewBox=%220 0 100 100%22>"
        f"<text y=%22.9em%22 font-size=%2290%22>{emoji}</text></svg>\">"
    )


def update_index_html(project_dir: Path, title: str, emoji: str) -> list[str]:
    """
    Set the page title and swap the Vite favicon for the emoji.

    Returns
    -------
    list[str]
        Warnings for anything that could not be updated. A missing or
        non-UTF-8 index.html and missing tags are not fatal.

    Raises
    ------
    ReadFailure
        If index.html exists but cannot be read.
    WriteFailure
        If the updated file cannot be written.
    """
    html_path = project_dir / "index.html"
    if not html_path.exists():
        return ["index.html not found; title and favicon not set"]

    warnings: list[str] = []
    try:
        content = html_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return ["index.html is not valid UTF-8; title and favicon not set"]
    except OSError as e:
        raise ReadFailure(html_path, e) from e

    content, title_count = TITLE_PATTERN.subn(
        lambda _: f"<title>{title}</title>", content, count=1
    )
    if not title_count:
        warnings.append("No <title> tag in index.html; title not set")

    content, icon_count = FAVICON_PATTERN.subn(
        lambda _: favicon_link(emoji), content, count=1
    )
    if not icon_count:
        warnings.append("No favicon <link> in index.html; favicon not set")

    try:
        html_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise WriteFailure(html_path, e) from e

    return warnings


def remove_default_files(project_dir: Path) -> list[Path]:
    """Delete the Vite demo assets that exist. Returns the removed paths."""
    removed: list[Path] = []
    for relative in DEFAULT_FILES_TO_REMOVE:
        path = project_dir / relative
        if path.exists():
            path.unlink()
            removed.append(path)
    return removed


# =============================================================================
# Main Generation Function
# =============================================================================


def create_project(
    config: ProjectConfig,
    *,
    runner: CommandRunner | None = None,
    clipboard: ClipboardPublisher | None = None,
    rng: random.Random | None = None,
    verbose: bool = True,
) -> GenerationResult:
    """
    Create a new React + TypeScript project from the given configuration.

    Parameters
    ----------
    config : ProjectConfig
        Complete project configuration.

    runner : CommandRunner | None
        Runs external commands. Defaults to :class:`SubprocessRunner`.

    clipboard : ClipboardPublisher | None
        Receives the next command. Defaults to :class:`ClipboardPublisher`.

    rng : random.Random | None
        Random source for the emoji. Defaults to one seeded with
        ``config.seed``.

    verbose : bool, default=True
        If True, print progress to the console.

    Returns
    -------
    GenerationResult
        Result object containing success status and details.

    Raises
    ------
    FileExistsError
        If the project directory already exists. Nothing is touched.
    SetupError
        Any failure after the directory was created. The partial project
        directory is removed before the error propagates.
    """
    runner = runner or SubprocessRunner()
    clipboard = clipboard or ClipboardPublisher()
    rng = rng or random.Random(config.seed)

    project_dir = config.project_dir
    result = GenerationResult(
        success=False,
        project_path=project_dir,
        next_command=config.next_command,
    )

    def status(message: str) -> None:
        if verbose:
            print_status(message)

    def run(args: tuple[str, ...], cwd: Path) -> None:
        runner.run(args, cwd)
        result.commands_run.append(args)

    if project_dir.exists():
        message = f"Directory '{project_dir}' already exists"
        result.errors.append(message)
        raise FileExistsError(message)

    status(f"Setting up React TypeScript project: {config.name}")

    try:
        # Step 1: Base Vite project
        status("Creating Vite project...")
        config.output_dir.mkdir(parents=True, exist_ok=True)
        run(create_vite_command(config.name), config.output_dir)

        # Step 2: Dependencies
        status("Installing dependencies...")
        for command in DEPENDENCY_COMMANDS:
            run(command, project_dir)

        env = create_jinja_env()
        emoji = pick_emoji(rng)
        result.emoji = emoji
        context = build_context(config, emoji)

        # Step 3: Tailwind
        status("Setting up Tailwind CSS...")
        result.files_created.extend(
            write_files(project_dir, render_templates(env, ["index.css.j2"], context))
        )

        # Step 4: TypeScript path alias
        status("Configuring TypeScript...")
        result.files_created.extend(configure_typescript(project_dir))

        # Step 5: Vite config
        status("Configuring Vite...")
        result.files_created.extend(
            write_files(project_dir, render_templates(env, ["vite.config.ts.j2"], context))
        )
        run(("npm", "install"), project_dir)

        # Step 6: shadcn/ui
        status("Setting up shadcn/ui...")
        run(shadcn_init_command(config.base_color), project_dir)

        status("Adding essential shadcn/ui components...")
        run(shadcn_add_command(config.components), project_dir)

        # Step 7: Dark mode
        status("Adding dark mode support...")
        result.files_created.extend(
            write_files(
                project_dir,
                render_templates(
                    env, ["theme-provider.tsx.j2", "mode-toggle.tsx.j2"], context
                ),
            )
        )

        # Step 8: Title and favicon
        status("Setting page title and favicon...")
        html_warnings = update_index_html(project_dir, config.name, emoji)
        result.warnings.extend(html_warnings)
        if verbose:
            for warning in html_warnings:
                print_warning(warning)

        # Step 9: Starter app
        status("Creating starter app...")
        result.files_created.extend(
            write_files(project_dir, render_templates(env, ["App.tsx.j2"], context))
        )
        result.files_removed.extend(remove_default_files(project_dir))

        status("Writing README...")
        result.files_created.extend(
            write_files(project_dir, render_templates(env, ["README.md.j2"], context))
        )

    except Exception as e:
        result.errors.append(str(e))

        # Clean up partial project
        if project_dir.exists():
            shutil.rmtree(project_dir)
            result.warnings.append("Partial project directory was cleaned up")
            logger.debug("Removed partial project directory %s", project_dir)

        raise

    result.success = True

    # Step 10: Next command
    if config.copy_to_clipboard:
        result.copied_to_clipboard = clipboard.copy(result.next_command)

    if verbose:
        print_success(f"All done! {result.emoji}")
        if result.copied_to_clipboard:
            body = (
                "[bold]Next command copied to clipboard! Just paste and run:[/]\n"
                f"  {result.next_command}"
            )
        else:
            body = f"[bold]Next steps:[/]\n  cd {config.name}\n  npm run dev"
        console.print(
            Panel(
                f"[dim]Location:[/] {project_dir}\n\n{body}",
                title=f"[bold green]{result.emoji} {config.name}[/]",
                border_style="green",
            )
        )

    return result
