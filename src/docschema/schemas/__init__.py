"""Shared schemas for docschema."""

from docschema.schemas.diagnostics import Diagnostic, ValidationReport
from docschema.schemas.nodes import (
    DOCUMENT_NODE_ADAPTER,
    ContentNode,
    DocumentNode,
    HeadingNode,
    IgnoredNode,
    InlineNode,
    Position,
)
from docschema.schemas.sections import Section
from docschema.schemas.structure import Schema, SchemaSection

__all__ = [
    "DOCUMENT_NODE_ADAPTER",
    "ContentNode",
    "Diagnostic",
    "DocumentNode",
    "HeadingNode",
    "IgnoredNode",
    "InlineNode",
    "Position",
    "Schema",
    "SchemaSection",
    "Section",
    "ValidationReport",
]
