"""Turn markdown text into the block-level node stream."""

from __future__ import annotations

from pathlib import Path

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.front_matter import front_matter_plugin

from docschema.exceptions import DocumentError
from docschema.schemas import ContentNode, HeadingNode, IgnoredNode, InlineNode, Position

DocumentNodes = list[HeadingNode | ContentNode | IgnoredNode]

# Container blocks: the node is emitted at the opening token and everything up
# to the matching close is skipped.
_CONTAINER_TYPES = {
    "bullet_list_open": "list",
    "ordered_list_open": "list",
    "blockquote_open": "blockquote",
    "table_open": "table",
}
_INLINE_TYPES = {
    "text": "text",
    "code_inline": "inlineCode",
    "softbreak": "break",
    "hardbreak": "break",
    "html_inline": "html",
    "image": "image",
    "em": "emphasis",
    "strong": "strong",
    "link": "link",
    "s": "delete",
}


def create_parser() -> MarkdownIt:
    """CommonMark parser with tables, strikethrough and front matter."""
    return MarkdownIt("commonmark").enable(["table", "strikethrough"]).use(front_matter_plugin)


def parse_markdown(text: str, *, parser: MarkdownIt | None = None) -> DocumentNodes:
    """Parse ``text`` into top-level document nodes in source order.

    Raises:
        DocumentError: If the parser yields a block type with no node mapping.
    """
    parser = parser or create_parser()
    tokens = parser.parse(text)
    lines = text.splitlines()
    nodes: DocumentNodes = []

    index = 0
    while index < len(tokens):
        token = tokens[index]
        position = _position(token)

        if token.type == "front_matter":
            nodes.append(IgnoredNode(type="yaml", value=token.content, position=position))
        elif token.type == "heading_open":
            inline = tokens[index + 1]
            nodes.append(
                HeadingNode(
                    depth=int(token.tag[1]),
                    children=_inline_tree(inline.children or []),
                    position=position,
                )
            )
            index = _skip_to_close(tokens, index)
        elif token.type == "paragraph_open":
            inline = tokens[index + 1]
            nodes.append(
                ContentNode(
                    type="paragraph",
                    children=_inline_tree(inline.children or []),
                    position=position,
                )
            )
            index = _skip_to_close(tokens, index)
        elif token.type in _CONTAINER_TYPES:
            nodes.append(
                ContentNode(
                    type=_CONTAINER_TYPES[token.type],
                    value=_source(lines, token),
                    position=position,
                )
            )
            index = _skip_to_close(tokens, index)
        elif token.type in ("fence", "code_block"):
            nodes.append(ContentNode(type="code", value=token.content, position=position))
        elif token.type == "html_block":
            if token.content.lstrip().startswith("<!--"):
                nodes.append(IgnoredNode(type="html_comment", value=token.content, position=position))
            else:
                nodes.append(ContentNode(type="html", value=token.content, position=position))
        elif token.type == "hr":
            nodes.append(IgnoredNode(type="thematicBreak", position=position))
        else:
            raise DocumentError(f"Unsupported markdown block {token.type!r}")

        index += 1

    return nodes


def parse_markdown_file(path: str | Path, *, parser: MarkdownIt | None = None) -> DocumentNodes:
    """Read a UTF-8 markdown file and parse it."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(f"Cannot read document {path}: {exc}") from exc
    return parse_markdown(text, parser=parser)


def _position(token: Token) -> Position | None:
    if not token.map:
        return None
    return Position(line=token.map[0] + 1, column=1)


def _source(lines: list[str], token: Token) -> str | None:
    if not token.map:
        return None
    start, end = token.map
    return "\n".join(lines[start:end]).strip() or None


def _skip_to_close(tokens: list[Token], index: int) -> int:
    """Return the index of the token closing the block opened at ``index``."""
    depth = 0
    for position in range(index, len(tokens)):
        depth += tokens[position].nesting
        if depth == 0:
            return position
    return len(tokens) - 1


def _inline_tree(children: list[Token]) -> list[InlineNode]:
    """Rebuild nesting from markdown-it's flat open/close inline tokens."""
    root: list[dict] = []
    stack: list[list[dict]] = [root]

    for child in children:
        if child.nesting == 1:
            node = {"type": _inline_type(child.type[: -len("_open")]), "children": []}
            stack[-1].append(node)
            stack.append(node["children"])
        elif child.nesting == -1:
            if len(stack) > 1:
                stack.pop()
        else:
            value = child.content if child.type != "softbreak" else "\n"
            stack[-1].append({"type": _inline_type(child.type), "value": value})

    return [InlineNode.model_validate(node) for node in root]


def _inline_type(token_type: str) -> str:
    return _INLINE_TYPES.get(token_type, token_type)
