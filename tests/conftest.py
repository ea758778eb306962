"""Shared pytest fixtures for the next-canary test suite.

Provides reusable fixtures for:
- Temporary output directories
- Test configurations that never open an editor
- A fake generated Next.js tree, as create-next-app would leave it
- Mocked ExternalTools and subprocess helpers
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from next_canary.config import Config, ToolConfig
from next_canary.scaffolder import ExternalTools


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary parent directory in which projects are generated."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    yield output_dir


@pytest.fixture
def test_config(tmp_output_dir: Path) -> Config:
    """Config writing into ``tmp_output_dir`` with the editor disabled."""
    return Config(output_dir=tmp_output_dir, open_editor=False)


def make_generated_tree(project_root: Path) -> Path:
    """Create the files create-next-app leaves behind that the scaffold touches."""
    app_dir = project_root / "src" / "app"
    app_dir.mkdir(parents=True, exist_ok=True)
    (app_dir / "favicon.ico").write_bytes(b"\x00\x00\x01\x00")
    (app_dir / "globals.css").write_text("@import \"tailwindcss\";\n", encoding="utf-8")
    (app_dir / "layout.tsx").write_text("// generator layout\n", encoding="utf-8")
    (app_dir / "page.tsx").write_text("// generator page\n", encoding="utf-8")
    (project_root / "package.json").write_text('{"name": "generated"}\n', encoding="utf-8")
    return project_root


@pytest.fixture
def generated_project(tmp_output_dir: Path) -> Path:
    """A project directory named ``demo-app`` as the generator would create it."""
    return make_generated_tree(tmp_output_dir / "demo-app")


# ---------------------------------------------------------------------------
# Mock ExternalTools
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_tools() -> MagicMock:
    """An ``ExternalTools`` double whose steps succeed without running anything.

    ``create_app`` builds a fake generated tree so later steps have a project
    directory to write into.  Tests override individual ``side_effect``s to
    simulate failures.
    """
    tools = MagicMock(spec=ExternalTools)
    tools.tools = ToolConfig()

    async def _create_app(raw_name: str, output_dir: Path) -> Path:
        return make_generated_tree(output_dir / raw_name)

    tools.create_app = AsyncMock(side_effect=_create_app)
    tools.install_dependencies = AsyncMock(return_value=None)
    tools.init_components = AsyncMock(return_value=None)
    tools.add_components = AsyncMock(return_value=None)
    tools.open_editor = AsyncMock(return_value=None)
    return tools


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def recorded_commands() -> list[dict[str, Any]]:
    """List that ``record_subprocess`` appends each spawned command to."""
    return []


@pytest.fixture
def record_subprocess(mock_subprocess, recorded_commands):
    """Build a ``create_subprocess_exec`` replacement that records calls.

    Usage:
        def test_x(record_subprocess, recorded_commands):
            fake_exec = record_subprocess(returncode=0)
            with patch("asyncio.create_subprocess_exec", side_effect=fake_exec):
                ...
            assert recorded_commands[0]["cmd"][0] == "pnpm"
    """
    def factory(stdout: str = "", stderr: str = "", returncode: int = 0):
        async def fake_exec(*cmd: str, **kwargs: Any) -> AsyncMock:
            recorded_commands.append({"cmd": list(cmd), "cwd": kwargs.get("cwd")})
            return mock_subprocess(stdout=stdout, stderr=stderr, returncode=returncode)

        return fake_exec

    return factory
