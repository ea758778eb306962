"""External tool invocation.

Builds the command lines for the package manager, the Next.js generator, the
component-library CLI and the editor, and runs them one at a time.  A
failing tool raises ``DependencyFailure`` naming the step; a failing editor
raises ``NonFatalToolingFailure`` which callers are expected to report and
move past.
"""

from __future__ import annotations

from pathlib import Path

from ..config import ToolConfig
from ..utils import format_command, print_command, run_command
from .request import ScaffoldError


# Step names reported in errors and progress output.
STEP_CREATE_APP = "create-app"
STEP_INSTALL_DEPENDENCIES = "install-dependencies"
STEP_INIT_COMPONENTS = "init-components"
STEP_ADD_COMPONENTS = "add-components"
STEP_OPEN_EDITOR = "open-editor"


class DependencyFailure(ScaffoldError):
    """Raised when an external tool exits non-zero, times out or is missing."""

    def __init__(
        self,
        step: str,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.step = step
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Step '{step}' failed: {message}")


class NonFatalToolingFailure(ScaffoldError):
    """Raised when a post-scaffold convenience tool (the editor) fails."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"{command}: {reason}")


class ExternalTools:
    """Runs the third-party tools a scaffold depends on.

    Every command is awaited to completion before the next one starts.
    With ``capture=False`` the tools write straight to the terminal.
    """

    def __init__(self, tools: ToolConfig, *, capture: bool = False) -> None:
        self.tools = tools
        self.capture = capture

    # -- Command builders --------------------------------------------------

    def create_app_command(self, raw_name: str) -> list[str]:
        return [
            self.tools.package_manager,
            "create",
            self.tools.create_app_package,
            raw_name,
            *self.tools.create_app_flags,
        ]

    def install_command(self) -> list[str]:
        return [self.tools.package_manager, "install", *self.tools.dependencies]

    def init_components_command(self) -> list[str]:
        return [self.tools.package_manager, "dlx", self.tools.component_cli, "init", "-d"]

    def add_components_command(self) -> list[str]:
        return [
            self.tools.package_manager,
            "dlx",
            self.tools.component_cli,
            "add",
            "-a",
            "--overwrite",
            "-y",
        ]

    def editor_command(self) -> list[str]:
        return [self.tools.editor, "."]

    # -- Steps -------------------------------------------------------------

    async def create_app(self, raw_name: str, output_dir: Path) -> Path:
        """Run the Next.js generator and return the created project directory."""
        await self.run_step(STEP_CREATE_APP, self.create_app_command(raw_name), output_dir)

        project_root = output_dir / raw_name
        if not project_root.is_dir():
            raise DependencyFailure(
                STEP_CREATE_APP,
                f"generator exited successfully but {project_root} does not exist",
                command=format_command(self.create_app_command(raw_name)),
            )
        return project_root

    async def install_dependencies(self, project_root: Path) -> None:
        await self.run_step(STEP_INSTALL_DEPENDENCIES, self.install_command(), project_root)

    async def init_components(self, project_root: Path) -> None:
        await self.run_step(STEP_INIT_COMPONENTS, self.init_components_command(), project_root)

    async def add_components(self, project_root: Path) -> None:
        await self.run_step(STEP_ADD_COMPONENTS, self.add_components_command(), project_root)

    async def open_editor(self, project_root: Path) -> None:
        """Open the project in the configured editor.

        Raises:
            NonFatalToolingFailure: If the editor is missing or exits non-zero.
        """
        cmd = self.editor_command()
        cmd_str = format_command(cmd)
        print_command(cmd)
        try:
            returncode, _, stderr = await run_command(
                cmd, cwd=project_root, timeout=self.tools.timeout, capture=self.capture
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise NonFatalToolingFailure(cmd_str, f"cannot execute {cmd[0]}: {exc}") from exc

        if returncode != 0:
            reason = f"exit {returncode}"
            if stderr:
                reason = f"{reason}: {stderr}"
            raise NonFatalToolingFailure(cmd_str, reason)

    async def run_step(self, step: str, cmd: list[str], cwd: Path) -> None:
        """Run one external command, raising ``DependencyFailure`` if it fails."""
        cmd_str = format_command(cmd)
        if not cwd.is_dir():
            raise DependencyFailure(
                step, f"working directory {cwd} does not exist", command=cmd_str
            )
        print_command(cmd)
        try:
            returncode, stdout, stderr = await run_command(
                cmd, cwd=cwd, timeout=self.tools.timeout, capture=self.capture
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise DependencyFailure(
                step,
                f"cannot execute {cmd[0]!r}; is it installed and on PATH?",
                command=cmd_str,
            ) from exc

        if returncode != 0:
            detail = stderr or stdout
            message = f"{cmd_str} exited with status {returncode}"
            if returncode == -1 and detail.startswith("Command timed out"):
                message = detail
            elif detail:
                message = f"{message}\n{detail}"
            raise DependencyFailure(
                step,
                message,
                command=cmd_str,
                returncode=returncode,
                stderr=stderr,
            )
