"""Turn rendered HTML documentation into the block-level node stream."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path

from docschema.exceptions import DocumentError
from docschema.schemas import ContentNode, HeadingNode, IgnoredNode, InlineNode, Position

try:
    from bs4 import BeautifulSoup
    from bs4.element import Comment, NavigableString, PreformattedString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise DocumentError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


_HEADING_RE = re.compile(r"^h[1-6]$")
_WRAPPER_TAGS = {"article", "main", "section", "div", "header", "footer", "body", "html"}
_SKIPPED_TAGS = {"script", "style", "noscript", "template", "nav", "head", "link", "meta"}
_BLOCK_TYPES = {
    "p": "paragraph",
    "ul": "list",
    "ol": "list",
    "dl": "list",
    "pre": "code",
    "blockquote": "blockquote",
    "table": "table",
}

HtmlNode = HeadingNode | ContentNode | IgnoredNode


def parse_html(html: str) -> list[HtmlNode]:
    """Extract headings and block content from ``html`` in document order.

    Heading titles use the heading's full visible text, so headings wrapped
    in anchors keep their title.
    """
    # html.parser records source lines; lxml does not.
    soup = BeautifulSoup(html, "html.parser")
    return list(_iter_blocks(find_document_root(soup)))


def parse_html_file(path: str | Path) -> list[HtmlNode]:
    """Read an HTML file and parse it."""
    path = Path(path)
    try:
        html = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(f"Cannot read document {path}: {exc}") from exc
    return parse_html(html)


def find_document_root(soup: BeautifulSoup) -> Tag | BeautifulSoup:
    """Find the main content element.

    Searches for ``<main>``, then ``<article>``, then ``<body>``, falling
    back to the whole document.
    """
    for name in ("main", "article"):
        root = soup.find(name)
        if isinstance(root, Tag):
            return root
    if soup.body:
        return soup.body
    return soup


def _iter_blocks(container: Tag | BeautifulSoup) -> Iterator[HtmlNode]:
    for child in container.children:
        if isinstance(child, Comment):
            yield IgnoredNode(type="html_comment", value=str(child).strip())
            continue
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            text = _normalize_text(str(child))
            if text:
                yield ContentNode(type="text", value=text)
            continue
        if not isinstance(child, Tag):
            continue

        name = child.name
        if name in _SKIPPED_TAGS:
            continue
        if name in _WRAPPER_TAGS:
            yield from _iter_blocks(child)
            continue
        # Other containers are opaque unless they hold a heading.
        if name not in _BLOCK_TYPES and child.find(_HEADING_RE) is not None:
            yield from _iter_blocks(child)
            continue

        position = _position(child)
        if _HEADING_RE.match(name):
            title = _normalize_text(child.get_text(" ", strip=True))
            yield HeadingNode(
                depth=int(name[1]),
                children=[InlineNode(type="text", value=title)] if title else [],
                position=position,
            )
        elif name == "hr":
            yield IgnoredNode(type="thematicBreak", position=position)
        elif name in _BLOCK_TYPES:
            yield ContentNode(
                type=_BLOCK_TYPES[name],
                value=child.get_text(" ", strip=True) or None,
                position=position,
            )
        else:
            yield ContentNode(type="html", value=str(child), position=position)


def _position(tag: Tag) -> Position | None:
    if tag.sourceline is None:
        return None
    return Position(line=tag.sourceline, column=(tag.sourcepos or 0) + 1)


def _normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
