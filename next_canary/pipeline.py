"""next-canary pipeline orchestrator.

Runs the scaffold as a single top-to-bottom pass:

Step 1: create-app           -- generate the Next.js canary project.
Step 2: install-dependencies -- add the theming and icon libraries.
Step 3: init-components      -- initialise the component library with defaults.
Step 4: add-components       -- install every component, overwriting defaults.
Step 5: render-templates     -- write the theme, nav, layout, page and conventions files.
Step 6: open-editor          -- optional; a failure here is only reported.

Any failure in steps 1-5 stops the run.  Files already on disk are left in
place.

Usage::

    next-canary my-app
    next-canary "demo app" --output ~/projects --no-editor
    python -m next_canary my-app --render-only
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

from pydantic import BaseModel, Field
from rich.markup import escape
from rich.panel import Panel

from next_canary.config import Config
from next_canary.scaffolder import (
    DependencyFailure,
    ExternalTools,
    InvalidArgumentError,
    NonFatalToolingFailure,
    ProjectGenerator,
    ScaffoldError,
    ScaffoldRequest,
)
from next_canary.utils import (
    console,
    format_duration,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
)


class ScaffoldResult(BaseModel):
    """Outcome of a successful run."""

    project_path: Path
    title: str
    files_written: list[Path] = Field(default_factory=list)
    editor_opened: bool = False
    duration: str = ""


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives a scaffold run.

    Attributes:
        config: Tool locations, flags and output directory.
        tools: Runner for the external package manager, CLIs and editor.
        generator: Writes the template files into the generated project.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        tools: ExternalTools | None = None,
        generator: ProjectGenerator | None = None,
    ) -> None:
        self.config = config or Config()
        self.tools = tools or ExternalTools(
            self.config.tools, capture=self.config.capture_output
        )
        self.generator = generator or ProjectGenerator(
            assistant_files=self.config.assistant_files
        )

    async def run(self, raw_name: str | None) -> ScaffoldResult:
        """Scaffold a new project named *raw_name*.

        Raises:
            InvalidArgumentError: If the name is missing or blank.  Nothing is
                written and no tool is invoked.
            DependencyFailure: If an external tool fails.  The remaining steps
                are skipped; a partial project tree may remain on disk.
        """
        request = ScaffoldRequest.from_name(raw_name)
        started = time.monotonic()
        total = 6 if self.config.open_editor else 5
        output_dir = self.config.output_dir
        pm = self.config.tools.package_manager

        console.print(
            Panel(
                f"[bold bright_cyan]next-canary[/bold bright_cyan]\n"
                f"Project : {escape(request.raw_name)}\n"
                f"Title   : {escape(request.title)}\n"
                f"Output  : {output_dir.resolve()}",
                title="[bold]Scaffold Start[/bold]",
                border_style="bright_cyan",
            )
        )

        print_step_header(1, total, f"Initializing a new Next.js app named {escape(request.raw_name)}")
        output_dir.mkdir(parents=True, exist_ok=True)
        project_root = await self.tools.create_app(request.raw_name, output_dir)

        print_step_header(2, total, "Installing dependencies")
        await self.tools.install_dependencies(project_root)

        print_step_header(3, total, f"Initializing {escape(self.config.tools.component_cli)}")
        await self.tools.init_components(project_root)

        print_step_header(4, total, "Installing all components")
        await self.tools.add_components(project_root)

        print_step_header(5, total, "Writing template files")
        written = await self._write_templates(project_root, request)

        editor_opened = False
        if self.config.open_editor:
            print_step_header(6, total, f"Opening in {escape(self.config.tools.editor)}")
            try:
                await self.tools.open_editor(project_root)
                editor_opened = True
            except NonFatalToolingFailure as exc:
                print_warning(f"Could not open the editor: {escape(str(exc))}")

        result = ScaffoldResult(
            project_path=project_root,
            title=request.title,
            files_written=written,
            editor_opened=editor_opened,
            duration=format_duration(time.monotonic() - started),
        )
        self._print_final_summary(result)
        print_success("Setup complete! Your Next.js app with shadcn components is ready.")
        console.print(
            f"To start developing, run: [bold]cd {escape(request.raw_name)} && {escape(pm)} dev[/bold]"
        )
        return result

    async def render(self, raw_name: str | None) -> ScaffoldResult:
        """Re-write the template files into an existing project.

        No external tool is invoked.  Rendering the same name twice produces
        byte-identical files.
        """
        request = ScaffoldRequest.from_name(raw_name)
        started = time.monotonic()
        project_root = self.config.project_path(request.raw_name)
        if not project_root.is_dir():
            raise InvalidArgumentError(f"Project directory not found: {project_root}")

        written = await self._write_templates(project_root, request)
        result = ScaffoldResult(
            project_path=project_root,
            title=request.title,
            files_written=written,
            duration=format_duration(time.monotonic() - started),
        )
        self._print_final_summary(result)
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _write_templates(self, project_root: Path, request: ScaffoldRequest) -> list[Path]:
        written = await self.generator.generate(project_root, request)
        for path in written:
            console.print(f"  [green]+[/green] {escape(path.relative_to(project_root).as_posix())}")
        return written

    def _print_final_summary(self, result: ScaffoldResult) -> None:
        print_summary_table(
            {
                "Project path": str(result.project_path),
                "Title": result.title,
                "Files written": str(len(result.files_written)),
                "Duration": result.duration,
            },
            title="Scaffold Summary",
        )


async def scaffold(raw_name: str | None, config: Config | None = None) -> ScaffoldResult:
    """Scaffold *raw_name* with *config* (defaults when omitted)."""
    return await Pipeline(config).run(raw_name)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="next-canary",
        description="Scaffold a Next.js canary app with next-themes, lucide-react and shadcn",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  next-canary my-app\n"
            "  next-canary my-app -o ~/projects --no-editor\n"
            "  next-canary my-app --render-only\n"
        ),
    )
    parser.add_argument("name", nargs="?", help="Name of the app (also its directory name)")
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Directory in which the app directory is created (default: current directory)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Load settings from a JSON config file",
    )
    parser.add_argument("--package-manager", default=None, help="Package manager executable")
    parser.add_argument("--editor", default=None, help="Editor executable")
    parser.add_argument(
        "--no-editor",
        action="store_true",
        help="Do not open the project in an editor when done",
    )
    parser.add_argument(
        "--no-assistant-files",
        action="store_true",
        help="Do not write .aider.conf.yml and .clinerules",
    )
    parser.add_argument(
        "--render-only",
        action="store_true",
        help="Only re-write the template files into an existing app",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Capture tool output and only show it when a step fails",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    config = Config.load(args.config) if args.config else Config.from_env()

    tool_updates: dict[str, str] = {}
    if args.package_manager:
        tool_updates["package_manager"] = args.package_manager
    if args.editor:
        tool_updates["editor"] = args.editor

    updates: dict[str, object] = {}
    if tool_updates:
        updates["tools"] = config.tools.model_copy(update=tool_updates)
    if args.output is not None:
        updates["output_dir"] = args.output
    if args.no_editor:
        updates["open_editor"] = False
    if args.no_assistant_files:
        updates["assistant_files"] = False
    if args.quiet:
        updates["capture_output"] = True
    return config.model_copy(update=updates)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``next-canary`` and ``python -m next_canary``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.name is None or not args.name.strip():
        print_error("Error: Please provide a name for your Next.js app.")
        console.print(escape(parser.format_usage().strip()))
        return 1

    try:
        config = _config_from_args(args)
    except (OSError, ValueError) as exc:
        # ValueError also covers pydantic's ValidationError.
        print_error(f"Error: Invalid configuration: {escape(str(exc))}")
        return 1
    pipeline = Pipeline(config)

    try:
        if args.render_only:
            asyncio.run(pipeline.render(args.name))
        else:
            asyncio.run(pipeline.run(args.name))
    except DependencyFailure as exc:
        print_error(escape(str(exc)))
        partial = config.project_path(args.name)
        if partial.exists():
            print_warning(
                f"A partial project was left at {escape(str(partial))}; "
                "remove it before re-running."
            )
        return 1
    except ScaffoldError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1
    except OSError as exc:
        print_error(f"Error writing project files: {escape(str(exc))}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
