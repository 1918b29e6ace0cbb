"""
pytest configuration and shared fixtures for reacthatch tests.

Fixtures defined here are automatically available to all tests.

Fixtures
--------
vite_tsconfig_app : str
    tsconfig.app.json as generated by the Vite react-ts template.

vite_index_html : str
    index.html as generated by the Vite react-ts template.

fake_runner : FakeRunner
    Command runner that records calls and simulates Vite's output.

fake_clipboard : FakeClipboard
    Clipboard that records what was copied.
"""

from collections.abc import Sequence
from pathlib import Path

import pytest

from reacthatch.errors import CommandFailed


VITE_TSCONFIG_APP = """{
  "compilerOptions": {
    "tsBuildInfoFile": "./node_modules/.tmp/tsconfig.app.tsbuildinfo",
    "target": "ES2020",
    "useDefineForClassFields": true,
    "lib": ["ES2020", "DOM", "DOM.Iterable"],
    "module": "ESNext",
    "skipLibCheck": true,

    /* Bundler mode */
    "moduleResolution": "bundler",
    "allowImportingTsExtensions": true,
    "isolatedModules": true,
    "moduleDetection": "force",
    "noEmit": true,
    "jsx": "react-jsx",

    /* Linting */
    "strict": true,
    "noUnusedLocals": true,
    "noUnusedParameters": true,
    "noFallthroughCasesInSwitch": true,
    "noUncheckedSideEffectImports": true
  },
  "include": ["src"]
}
"""

VITE_INDEX_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <link rel="icon" type="image/svg+xml" href="/vite.svg" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Vite + React + TS</title>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/main.tsx"></script>
  </body>
</html>
"""


class FakeRunner:
    """
    Records commands instead of running them.

    ``npm create vite`` is simulated by writing the files the react-ts
    template produces. Setting ``fail_on`` to a command word (e.g.
    ``"shadcn@latest"``) makes any command containing it fail.
    """

    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[tuple[tuple[str, ...], Path]] = []
        self.fail_on = fail_on

    def run(self, args: Sequence[str], cwd: Path) -> None:
        args = tuple(args)
        self.calls.append((args, cwd))

        if self.fail_on is not None and self.fail_on in args:
            raise CommandFailed(args, 1)

        if args[:3] == ("npm", "create", "vite@latest"):
            self._create_vite_project(cwd / args[3])

    @staticmethod
    def _create_vite_project(project_dir: Path) -> None:
        files = {
            "index.html": VITE_INDEX_HTML,
            "tsconfig.app.json": VITE_TSCONFIG_APP,
            "tsconfig.json": '{\n  "files": [],\n  "references": []\n}\n',
            "package.json": '{\n  "name": "%s"\n}\n' % project_dir.name,
            "src/main.tsx": "import './index.css'\n",
            "src/index.css": ":root { color: red; }\n",
            "src/App.tsx": "export default function App() { return null }\n",
            "src/App.css": "#root {}\n",
            "src/assets/react.svg": "<svg/>\n",
            "public/vite.svg": "<svg/>\n",
        }
        for relative, content in files.items():
            path = project_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [args for args, _ in self.calls]


class FakeClipboard:
    """Clipboard that remembers the last copy, or always fails."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.copied: list[str] = []

    def copy(self, text: str) -> bool:
        if not self.available:
            return False
        self.copied.append(text)
        return True


@pytest.fixture
def vite_tsconfig_app() -> str:
    return VITE_TSCONFIG_APP


@pytest.fixture
def vite_index_html() -> str:
    return VITE_INDEX_HTML


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
    return FakeClipboard()


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the test suite."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests requiring Node.js and network access"
    )
