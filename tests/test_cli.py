"""
Tests for reacthatch.cli
========================

Tests use Typer's CliRunner. The scaffolding pipeline runs for real but
with FakeRunner and FakeClipboard injected, so no npm is needed.

Test Organization
-----------------
- TestVersionCommand: Tests for --version flag
- TestHelpOutput: Tests for help text
- TestNewCommand: Tests for the new command
- TestPatchTsconfigCommand: Tests for the patch-tsconfig command
"""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from jinja2 import DictLoader, Environment
from typer.testing import CliRunner

from reacthatch import __version__
from reacthatch import cli, generator
from reacthatch.cli import app
from reacthatch.generator import create_project
from reacthatch.models import BaseColor
from tests.conftest import FakeClipboard, FakeRunner


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_pipeline(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    """Route the new command through FakeRunner and FakeClipboard."""
    command_runner = FakeRunner()

    def fake_create_project(config, **kwargs):
        kwargs.setdefault("runner", command_runner)
        kwargs.setdefault("clipboard", FakeClipboard())
        return create_project(config, **kwargs)

    monkeypatch.setattr(cli, "create_project", fake_create_project)
    return command_runner


def answer(value: object) -> MagicMock:
    """A questionary question whose ask() returns ``value``."""
    question = MagicMock()
    question.ask.return_value = value
    return MagicMock(return_value=question)


# =============================================================================
# Version Command Tests
# =============================================================================

class TestVersionCommand:
    """Tests for the --version flag."""

    def test_version_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_short_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-V"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


# =============================================================================
# Help Output Tests
# =============================================================================

class TestHelpOutput:
    """Tests for help text."""

    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "reacthatch" in result.stdout.lower()
        assert "new" in result.stdout
        assert "patch-tsconfig" in result.stdout

    def test_new_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["new", "--help"])

        assert result.exit_code == 0
        assert "Create a new React + TypeScript project" in result.stdout
        assert "--base-color" in result.stdout

    def test_patch_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["patch-tsconfig", "--help"])

        assert result.exit_code == 0
        assert "--dry-run" in result.stdout


# =============================================================================
# New Command Tests
# =============================================================================

class TestNewCommand:
    """Tests for the new command."""

    def test_new_with_defaults(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        result = runner.invoke(app, ["new", "my-app", "--yes", "--output", str(tmp_path)])

        assert result.exit_code == 0, result.stdout
        assert (tmp_path / "my-app" / "README.md").exists()
        assert "cd my-app && npm run dev" in result.stdout
        assert ("npx", "shadcn@latest", "init", "--yes", "--base-color", "neutral") in (
            fake_pipeline.commands
        )

    def test_new_with_options(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        result = runner.invoke(
            app,
            [
                "new", "my-app",
                "--output", str(tmp_path),
                "--base-color", "Zinc",
                "-c", "dialog",
                "-c", "tabs",
                "--seed", "1",
                "--no-clipboard",
                "--yes",
            ],
        )

        assert result.exit_code == 0, result.stdout
        commands = fake_pipeline.commands
        assert ("npx", "shadcn@latest", "init", "--yes", "--base-color", "zinc") in commands
        assert (
            "npx", "shadcn@latest", "add",
            "dialog", "tabs", "button", "dropdown-menu", "--yes",
        ) in commands
        assert "Next steps" in result.stdout

    def test_invalid_base_color(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        result = runner.invoke(
            app, ["new", "my-app", "--output", str(tmp_path), "--base-color", "purple"]
        )

        assert result.exit_code == 1
        assert "Invalid base colour" in result.stdout
        assert fake_pipeline.calls == []

    def test_invalid_name(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        result = runner.invoke(app, ["new", "my app", "--yes", "--output", str(tmp_path)])

        assert result.exit_code == 1
        assert "Invalid project name" in result.stdout
        assert fake_pipeline.calls == []

    def test_existing_directory(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        (tmp_path / "my-app").mkdir()

        result = runner.invoke(app, ["new", "my-app", "--yes", "--output", str(tmp_path)])

        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_setup_failure_exits_nonzero(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        fake_pipeline.fail_on = "shadcn@latest"

        result = runner.invoke(app, ["new", "my-app", "--yes", "--output", str(tmp_path)])

        assert result.exit_code == 1
        assert "Setup failed" in result.stdout
        assert not (tmp_path / "my-app").exists()

    def test_config_file(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        config_file = tmp_path / "reacthatch.toml"
        config_file.write_text(
            '[reacthatch]\nbase_color = "stone"\ncomponents = ["card"]\n',
            encoding="utf-8",
        )

        result = runner.invoke(
            app,
            ["new", "my-app", "--yes", "--output", str(tmp_path), "--config", str(config_file)],
        )

        assert result.exit_code == 0, result.stdout
        assert ("npx", "shadcn@latest", "init", "--yes", "--base-color", "stone") in (
            fake_pipeline.commands
        )
        assert (
            "npx", "shadcn@latest", "add", "card", "button", "dropdown-menu", "--yes",
        ) in fake_pipeline.commands

    def test_invalid_config_file(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        config_file = tmp_path / "reacthatch.toml"
        config_file.write_text("base_color = [", encoding="utf-8")

        result = runner.invoke(
            app,
            ["new", "my-app", "--yes", "--output", str(tmp_path), "--config", str(config_file)],
        )

        assert result.exit_code == 1
        assert "Invalid config file" in result.stdout

    def test_config_section_not_a_table(
        self, runner: CliRunner, tmp_path: Path, fake_pipeline: FakeRunner
    ) -> None:
        config_file = tmp_path / "reacthatch.toml"
        config_file.write_text('reacthatch = "x"\n', encoding="utf-8")

        result = runner.invoke(
            app,
            ["new", "my-app", "--yes", "--output", str(tmp_path), "--config", str(config_file)],
        )

        assert result.exit_code == 1
        assert "Invalid config file" in result.stdout
        assert fake_pipeline.calls == []

    def test_render_failure_reported(
        self,
        runner: CliRunner,
        tmp_path: Path,
        fake_pipeline: FakeRunner,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(
            generator, "create_jinja_env", lambda: Environment(loader=DictLoader({}))
        )

        result = runner.invoke(app, ["new", "my-app", "--yes", "--output", str(tmp_path)])

        assert result.exit_code == 1
        assert "Setup failed" in result.stdout
        assert not (tmp_path / "my-app").exists()

    def test_interactive_prompts(
        self,
        runner: CliRunner,
        tmp_path: Path,
        fake_pipeline: FakeRunner,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(cli.questionary, "select", answer(BaseColor.SLATE))
        monkeypatch.setattr(cli.questionary, "confirm", answer(True))

        result = runner.invoke(app, ["new", "my-app", "--output", str(tmp_path)])

        assert result.exit_code == 0, result.stdout
        assert "Project Configuration" in result.stdout
        assert ("npx", "shadcn@latest", "init", "--yes", "--base-color", "slate") in (
            fake_pipeline.commands
        )

    def test_declined_confirmation_aborts(
        self,
        runner: CliRunner,
        tmp_path: Path,
        fake_pipeline: FakeRunner,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(cli.questionary, "select", answer(BaseColor.NEUTRAL))
        monkeypatch.setattr(cli.questionary, "confirm", answer(False))

        result = runner.invoke(app, ["new", "my-app", "--output", str(tmp_path)])

        assert result.exit_code == 1
        assert fake_pipeline.calls == []
        assert not (tmp_path / "my-app").exists()

    def test_cancelled_prompt_aborts(
        self,
        runner: CliRunner,
        tmp_path: Path,
        fake_pipeline: FakeRunner,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(cli.questionary, "select", answer(None))

        result = runner.invoke(app, ["new", "my-app", "--output", str(tmp_path)])

        assert result.exit_code == 1
        assert fake_pipeline.calls == []


# =============================================================================
# Patch Command Tests
# =============================================================================

class TestPatchTsconfigCommand:
    """Tests for the patch-tsconfig command."""

    def test_patches_file(
        self, runner: CliRunner, tmp_path: Path, vite_tsconfig_app: str
    ) -> None:
        target = tmp_path / "tsconfig.app.json"
        target.write_text(vite_tsconfig_app, encoding="utf-8")

        result = runner.invoke(app, ["patch-tsconfig", str(target)])

        assert result.exit_code == 0, result.stdout
        doc = json.loads(target.read_text(encoding="utf-8"))
        assert doc["compilerOptions"]["paths"] == {"@/*": ["./src/*"]}
        assert "[SUCCESS]" in result.stdout

    def test_dry_run_does_not_write(
        self, runner: CliRunner, tmp_path: Path, vite_tsconfig_app: str
    ) -> None:
        target = tmp_path / "tsconfig.app.json"
        target.write_text(vite_tsconfig_app, encoding="utf-8")

        result = runner.invoke(app, ["patch-tsconfig", str(target), "--dry-run"])

        assert result.exit_code == 0, result.stdout
        assert target.read_text(encoding="utf-8") == vite_tsconfig_app
        assert json.loads(result.stdout)["compilerOptions"]["baseUrl"] == "."

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["patch-tsconfig", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_missing_file_dry_run(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["patch-tsconfig", str(tmp_path / "nope.json"), "--dry-run"]
        )

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_malformed_file(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "tsconfig.app.json"
        target.write_text('{"compilerOptions": {', encoding="utf-8")

        result = runner.invoke(app, ["patch-tsconfig", str(target)])

        assert result.exit_code == 1
        assert "Malformed configuration" in result.stdout
        assert target.read_text(encoding="utf-8") == '{"compilerOptions": {'

    def test_directory_path(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["patch-tsconfig", str(tmp_path)])

        assert result.exit_code == 1
        assert "[ERROR]" in result.stdout
        assert "Failed to read" in result.stdout
        assert not isinstance(result.exception, IsADirectoryError)

    @pytest.mark.parametrize("extra", [[], ["--dry-run"]])
    def test_invalid_utf8(self, runner: CliRunner, tmp_path: Path, extra: list[str]) -> None:
        target = tmp_path / "tsconfig.app.json"
        target.write_bytes(b'{"compilerOptions": {"x": "\xff"}}')

        result = runner.invoke(app, ["patch-tsconfig", str(target), *extra])

        assert result.exit_code == 1
        assert "not valid UTF-8" in result.stdout
        assert target.read_bytes() == b'{"compilerOptions": {"x": "\xff"}}'

    def test_nan_rejected(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "tsconfig.app.json"
        target.write_text('{"compilerOptions": {}, "x": NaN}', encoding="utf-8")

        result = runner.invoke(app, ["patch-tsconfig", str(target)])

        assert result.exit_code == 1
        assert "Malformed configuration" in result.stdout
