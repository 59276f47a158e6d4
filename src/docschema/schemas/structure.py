"""Schema models describing the expected section structure."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_SCHEMA_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SchemaSection(BaseModel):
    """One expected section.

    Attributes:
        title: Exact heading text to match.
        title_pattern: Case-insensitive regular expression searched in the
            heading text. Takes precedence over ``title`` when both are set.
        required: Report the section when it cannot be located.
        non_empty: The matched section must contain qualifying content.
        allow_children_to_satisfy_non_empty: Override for whether nested
            subsections alone satisfy ``non_empty``; inherited when unset.
        enforce_order: Override for order enforcement among this section's
            children; inherited when unset.
        children: Expected nested structure.
        description: Free text appended to diagnostic messages.
    """

    model_config = _SCHEMA_CONFIG

    title: str | None = None
    title_pattern: str | None = None
    required: bool = False
    non_empty: bool = False
    allow_children_to_satisfy_non_empty: bool | None = None
    enforce_order: bool | None = None
    children: list["SchemaSection"] | None = None
    description: str | None = None

    @property
    def expected_name(self) -> str:
        """Name used in messages: the title, else the pattern."""
        return self.title or self.title_pattern or ""


class Schema(BaseModel):
    """Root of a structure schema."""

    model_config = _SCHEMA_CONFIG

    sections: list[SchemaSection] = Field(...)
    enforce_order: bool | None = None
    allow_children_to_satisfy_non_empty: bool | None = None
    content_node_types: frozenset[str] | None = None
