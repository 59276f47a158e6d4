"""Document node models consumed by the heading-tree builder.

Nodes form a closed union discriminated on ``type``. Parsers map their own
token vocabulary onto these tags; a tag outside the union is rejected when
the node is validated.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

ContentType = Literal["paragraph", "list", "code", "blockquote", "table", "html", "math", "text"]
IgnoredType = Literal["yaml", "toml", "thematicBreak", "definition", "html_comment"]


class Position(BaseModel):
    """Start location of a node in its source document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., ge=1)
    column: int = Field(default=1, ge=1)


class InlineNode(BaseModel):
    """Inline node nested inside a heading or block (text, emphasis, link...)."""

    model_config = ConfigDict(frozen=True)

    type: str
    value: str | None = None
    children: list["InlineNode"] = Field(default_factory=list)


class HeadingNode(BaseModel):
    """A heading of depth 1..6."""

    model_config = ConfigDict(frozen=True)

    type: Literal["heading"] = "heading"
    depth: int = Field(..., ge=1, le=6)
    children: list[InlineNode] = Field(default_factory=list)
    position: Position | None = None


class ContentNode(BaseModel):
    """A block-level content node owned by the nearest preceding heading."""

    model_config = ConfigDict(frozen=True)

    type: ContentType
    value: str | None = None
    children: list[InlineNode] = Field(default_factory=list)
    position: Position | None = None


class IgnoredNode(BaseModel):
    """Metadata or presentational node that never belongs to a section."""

    model_config = ConfigDict(frozen=True)

    type: IgnoredType
    value: str | None = None
    position: Position | None = None


DocumentNode = Annotated[
    Union[HeadingNode, ContentNode, IgnoredNode],
    Field(discriminator="type"),
]

DOCUMENT_NODE_ADAPTER: TypeAdapter[DocumentNode] = TypeAdapter(DocumentNode)
