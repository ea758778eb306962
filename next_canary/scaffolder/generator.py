"""Template file generation.

Renders the fixed set of template files into a project tree that the
external generator has already created.  Each write replaces whatever the
generator left at that path.
"""

from __future__ import annotations

from pathlib import Path

from .request import ScaffoldRequest
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Template -> output path tables
# ---------------------------------------------------------------------------

# Written on every run, in this order.
PROJECT_FILES: dict[str, str] = {
    "src/components/theme-provider.tsx.j2": "src/components/theme-provider.tsx",
    "src/components/theme-toggle.tsx.j2": "src/components/theme-toggle.tsx",
    "src/components/global-nav.tsx.j2": "src/components/global-nav.tsx",
    "src/app/layout.tsx.j2": "src/app/layout.tsx",
    "src/app/page.tsx.j2": "src/app/page.tsx",
    "conventions.md.j2": "conventions.md",
}

# Coding-assistant configuration that points at conventions.md.
ASSISTANT_FILES: dict[str, str] = {
    "assistant/aider.conf.yml.j2": ".aider.conf.yml",
    "assistant/clinerules.j2": ".clinerules",
}


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Writes the theme provider, theme toggle, navigation bar, root layout,
    home page and conventions document into a generated Next.js project.
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        *,
        assistant_files: bool = True,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.assistant_files = assistant_files

    def file_map(self) -> dict[str, str]:
        """Return every ``template -> relative output path`` this generator writes."""
        files = dict(PROJECT_FILES)
        if self.assistant_files:
            files.update(ASSISTANT_FILES)
        return files

    def render_all(self, request: ScaffoldRequest) -> dict[str, str]:
        """Render every file in memory, keyed by relative output path."""
        context = request.context()
        return {
            output: self.renderer.render(template, context)
            for template, output in self.file_map().items()
        }

    async def generate(self, project_root: str | Path, request: ScaffoldRequest) -> list[Path]:
        """Render and write all template files under *project_root*.

        Returns:
            The written paths, in write order.
        """
        root = Path(project_root)
        context = request.context()

        written: list[Path] = []
        for template, output in self.file_map().items():
            path = await self.renderer.render_to_file(template, root / output, context)
            written.append(path)
        return written
