"""next-canary -- scaffold a Next.js canary app with theming and shadcn components.

The package drives ``pnpm``, ``create-next-app@canary`` and ``shadcn@canary``
to generate a project, then writes a theme provider, theme toggle, navigation
bar, root layout, home page and conventions document into it.
"""

from next_canary.config import Config, ToolConfig
from next_canary.pipeline import Pipeline, ScaffoldResult, scaffold
from next_canary.utils import title_case

__all__ = [
    "Config",
    "Pipeline",
    "ScaffoldResult",
    "ToolConfig",
    "scaffold",
    "title_case",
]

__version__ = "0.1.0"
