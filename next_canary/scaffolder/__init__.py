"""next-canary scaffolder -- request model, templates and external tools.

Quick usage::

    from next_canary.scaffolder import ProjectGenerator, ScaffoldRequest

    request = ScaffoldRequest.from_name("demo app")
    generator = ProjectGenerator()
    written = await generator.generate("/tmp/demo app", request)
"""

from next_canary.scaffolder.generator import ProjectGenerator
from next_canary.scaffolder.request import (
    InvalidArgumentError,
    ScaffoldError,
    ScaffoldRequest,
)
from next_canary.scaffolder.templates import TemplateRenderer
from next_canary.scaffolder.tooling import (
    DependencyFailure,
    ExternalTools,
    NonFatalToolingFailure,
)

__all__ = [
    "DependencyFailure",
    "ExternalTools",
    "InvalidArgumentError",
    "NonFatalToolingFailure",
    "ProjectGenerator",
    "ScaffoldError",
    "ScaffoldRequest",
    "TemplateRenderer",
]
