"""next-canary configuration.

Typed configuration for the scaffolder.  Every external tool location and
flag lives here so the pipeline never relies on ambient lookup beyond the
executable search path.  Settings use Pydantic v2 models so they can be
validated at construction time and serialised to/from JSON or environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_CREATE_APP_FLAGS: list[str] = [
    "--ts",
    "--eslint",
    "--src-dir",
    "--app",
    "--import-alias",
    "@/*",
    "--tailwind",
    "--yes",
]


class ToolConfig(BaseModel):
    """External tools invoked during a scaffold run."""

    package_manager: str = Field(default="pnpm", min_length=1)
    create_app_package: str = Field(
        default="next-app@canary",
        description="Initializer passed to '<package_manager> create'",
    )
    create_app_flags: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CREATE_APP_FLAGS),
    )
    dependencies: list[str] = Field(
        default_factory=lambda: ["next-themes", "lucide-react"],
        description="Packages added to the generated project",
    )
    component_cli: str = Field(
        default="shadcn@canary",
        description="Component-library CLI run through '<package_manager> dlx'",
    )
    editor: str = Field(default="code", min_length=1)
    timeout: int | None = Field(
        default=None, ge=1, description="Per-command timeout in seconds; None waits forever"
    )


class Config(BaseModel):
    """Global next-canary configuration.

    Instances are created once by the CLI entry point (or by callers of
    :func:`next_canary.pipeline.scaffold`) and passed through the rest of the
    system.
    """

    output_dir: Path = Field(default=Path("."))
    tools: ToolConfig = Field(default_factory=ToolConfig)
    open_editor: bool = Field(default=True)
    assistant_files: bool = Field(
        default=True, description="Write .aider.conf.yml and .clinerules"
    )
    capture_output: bool = Field(
        default=False, description="Capture tool output instead of streaming it"
    )

    def project_path(self, raw_name: str) -> Path:
        """Directory the external generator creates for *raw_name*."""
        return self.output_dir / raw_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            NEXT_CANARY_OUTPUT_DIR, NEXT_CANARY_PACKAGE_MANAGER,
            NEXT_CANARY_EDITOR, NEXT_CANARY_TIMEOUT, NEXT_CANARY_NO_EDITOR.
        """
        tool_kwargs: dict[str, Any] = {}
        if os.environ.get("NEXT_CANARY_PACKAGE_MANAGER"):
            tool_kwargs["package_manager"] = os.environ["NEXT_CANARY_PACKAGE_MANAGER"]
        if os.environ.get("NEXT_CANARY_EDITOR"):
            tool_kwargs["editor"] = os.environ["NEXT_CANARY_EDITOR"]
        if os.environ.get("NEXT_CANARY_TIMEOUT"):
            tool_kwargs["timeout"] = int(os.environ["NEXT_CANARY_TIMEOUT"])

        no_editor = os.environ.get("NEXT_CANARY_NO_EDITOR", "").strip().lower()

        return cls(
            output_dir=Path(os.environ.get("NEXT_CANARY_OUTPUT_DIR", ".")),
            tools=ToolConfig(**tool_kwargs),
            open_editor=no_editor not in {"1", "true", "yes"},
        )
