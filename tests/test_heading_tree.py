"""Tests for the heading-tree builder."""

from __future__ import annotations

import pytest

from docschema.exceptions import DocumentError
from docschema.heading_tree import build_heading_tree, heading_text
from docschema.schemas import ContentNode, HeadingNode, IgnoredNode, InlineNode, Position


def heading(depth: int, title: str, line: int | None = None) -> HeadingNode:
    return HeadingNode(
        depth=depth,
        children=[InlineNode(type="text", value=title)],
        position=Position(line=line) if line else None,
    )


def paragraph(text: str = "Some text.") -> ContentNode:
    return ContentNode(type="paragraph", children=[InlineNode(type="text", value=text)])


class TestBuildHeadingTree:
    """Tests for build_heading_tree function."""

    def test_nests_by_depth(self) -> None:
        """Deeper headings become children until a same-or-shallower heading."""
        sections = build_heading_tree(
            [
                heading(1, "A"),
                paragraph("a"),
                heading(2, "B"),
                paragraph("b"),
                heading(3, "C"),
                heading(2, "D"),
                heading(1, "E"),
            ]
        )

        assert [s.title for s in sections] == ["A", "E"]
        a = sections[0]
        assert [c.title for c in a.children] == ["B", "D"]
        assert [c.title for c in a.children[0].children] == ["C"]
        assert len(a.content) == 1
        assert len(a.children[0].content) == 1
        assert a.children[0].children[0].content == []

    def test_content_belongs_to_nearest_open_heading(self) -> None:
        """Content after a subsection belongs to that subsection, not the parent."""
        sections = build_heading_tree([heading(1, "A"), heading(2, "B"), paragraph("late")])

        assert sections[0].content == []
        assert sections[0].children[0].content[0].children[0].value == "late"

    def test_drops_content_before_first_heading(self) -> None:
        """Content with no owning heading is discarded."""
        sections = build_heading_tree([paragraph("orphan"), heading(1, "A")])

        assert len(sections) == 1
        assert sections[0].content == []

    def test_ignores_front_matter(self) -> None:
        """Front matter never becomes content."""
        sections = build_heading_tree(
            [heading(1, "A"), IgnoredNode(type="yaml", value="owner: me")]
        )

        assert sections[0].content == []

    def test_skipped_depth_levels(self) -> None:
        """An h2 after an h3 closes the h3 and attaches to the h1."""
        sections = build_heading_tree([heading(1, "A"), heading(3, "C"), heading(2, "B")])

        assert [c.title for c in sections[0].children] == ["C", "B"]
        assert [c.depth for c in sections[0].children] == [3, 2]

    def test_document_starting_below_level_one(self) -> None:
        """Top-level sections may have any depth."""
        sections = build_heading_tree([heading(2, "A"), heading(2, "B"), heading(3, "C")])

        assert [s.title for s in sections] == ["A", "B"]
        assert sections[1].children[0].title == "C"

    def test_preserves_duplicate_titles(self) -> None:
        """Same titles at the same depth stay distinct sections."""
        sections = build_heading_tree([heading(2, "Notes"), heading(2, "Notes")])

        assert [s.title for s in sections] == ["Notes", "Notes"]
        assert sections[0] is not sections[1]

    def test_keeps_heading_position(self) -> None:
        """Section position comes from the heading node."""
        sections = build_heading_tree([heading(1, "A", line=7)])

        assert sections[0].position == Position(line=7, column=1)

    def test_empty_input(self) -> None:
        """No nodes yields no sections."""
        assert build_heading_tree([]) == []

    def test_accepts_mappings(self) -> None:
        """Plain dictionaries are validated into typed nodes."""
        sections = build_heading_tree(
            [
                {"type": "heading", "depth": 2, "children": [{"type": "text", "value": "X"}]},
                {"type": "code", "value": "echo hi", "position": {"line": 3, "column": 1}},
            ]
        )

        assert sections[0].title == "X"
        assert sections[0].content[0].type == "code"

    def test_rejects_unknown_node_type(self) -> None:
        """Unknown node types fail loudly."""
        with pytest.raises(DocumentError, match="mystery"):
            build_heading_tree([{"type": "mystery"}])

    def test_rejects_invalid_heading_depth(self) -> None:
        """Heading depth must be within 1..6."""
        with pytest.raises(DocumentError):
            build_heading_tree([{"type": "heading", "depth": 7}])


class TestHeadingText:
    """Tests for heading_text function."""

    def test_uses_only_direct_text_children(self) -> None:
        """Nested inline text is not part of the title; internal spacing is kept."""
        node = HeadingNode(
            depth=1,
            children=[
                InlineNode(type="text", value="  Foo "),
                InlineNode(type="emphasis", children=[InlineNode(type="text", value="bar")]),
                InlineNode(type="text", value=" baz  "),
            ],
        )

        assert heading_text(node) == "Foo  baz"

    def test_no_text_children(self) -> None:
        """A heading without text children has an empty title."""
        node = HeadingNode(depth=1, children=[InlineNode(type="inlineCode", value="x")])

        assert heading_text(node) == ""
