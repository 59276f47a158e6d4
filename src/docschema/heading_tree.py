"""Build a section tree from a flat stream of document nodes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Union

from pydantic import ValidationError

from docschema.exceptions import DocumentError
from docschema.schemas import (
    DOCUMENT_NODE_ADAPTER,
    ContentNode,
    HeadingNode,
    IgnoredNode,
    Section,
)
from docschema.schemas.nodes import InlineNode

NodeLike = Union[HeadingNode, ContentNode, IgnoredNode, Mapping[str, Any]]


def build_heading_tree(nodes: Iterable[NodeLike]) -> list[Section]:
    """Group nodes under the headings that own them.

    A heading closes every open section of equal or greater depth. Content
    before the first heading has no owner and is dropped.

    Raises:
        DocumentError: If a node is not one of the known node types.
    """
    sections: list[Section] = []
    stack: list[Section] = []

    for raw in nodes:
        node = coerce_node(raw)

        if isinstance(node, IgnoredNode):
            continue

        if isinstance(node, HeadingNode):
            section = Section(
                title=heading_text(node),
                depth=node.depth,
                position=node.position,
            )

            while stack and stack[-1].depth >= node.depth:
                stack.pop()

            if stack:
                stack[-1].children.append(section)
            else:
                sections.append(section)

            stack.append(section)
            continue

        if stack:
            stack[-1].content.append(node)

    return sections


def coerce_node(raw: NodeLike) -> HeadingNode | ContentNode | IgnoredNode:
    """Return ``raw`` as a typed node, validating plain mappings."""
    if isinstance(raw, (HeadingNode, ContentNode, IgnoredNode)):
        return raw
    try:
        return DOCUMENT_NODE_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        node_type = raw.get("type") if isinstance(raw, Mapping) else type(raw).__name__
        raise DocumentError(f"Unsupported document node {node_type!r}: {exc}") from exc


def heading_text(node: HeadingNode) -> str:
    """Concatenate the heading's direct text children, trimmed."""
    return "".join(_text_values(node.children)).strip()


def _text_values(children: Iterable[InlineNode]) -> Iterable[str]:
    for child in children:
        if child.type == "text" and child.value:
            yield child.value
