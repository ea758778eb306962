"""The scaffold request: the project name and its derived display title."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from ..utils import title_case


class ScaffoldError(Exception):
    """Base class for every failure a scaffold run can report."""


class InvalidArgumentError(ScaffoldError):
    """Raised when the project name is missing or blank."""


class ScaffoldRequest(BaseModel):
    """A single scaffold run's input.

    ``raw_name`` is used verbatim as the directory name and as the argument
    to the external generator.  ``title`` is recomputed from it on every
    access, so the two can never disagree.
    """

    raw_name: str = Field(..., description="Project/directory name as typed by the user")

    @field_validator("raw_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("project name must not be empty")
        return value

    @property
    def title(self) -> str:
        """Display title used in the navigation heading and page metadata."""
        return title_case(self.raw_name)

    @classmethod
    def from_name(cls, raw_name: str | None) -> "ScaffoldRequest":
        """Build a request, raising ``InvalidArgumentError`` for a missing name."""
        if raw_name is None or not raw_name.strip():
            raise InvalidArgumentError("Please provide a name for your Next.js app.")
        return cls(raw_name=raw_name)

    def context(self) -> dict[str, str]:
        """Template context exposed to the Jinja2 renderer."""
        return {"app_name": self.raw_name, "app_title": self.title}
