"""Section tree models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from docschema.schemas.nodes import ContentNode, Position


class Section(BaseModel):
    """A heading plus the content and subsections structurally below it."""

    title: str
    depth: int = Field(..., ge=1, le=6)
    position: Position | None = None
    content: list[ContentNode] = Field(default_factory=list)
    children: list["Section"] = Field(default_factory=list)
