"""Validate a section tree against a structure schema.

Actual sections and expected schema sections are aligned with two pointers.
A match advances both; a mismatch consumes only the schema entry, so the
same actual section is compared against the next expectation and sections
the schema does not mention are skipped without a diagnostic.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Protocol

from docschema.config import DEFAULT_CONTENT_NODE_TYPES, DEFAULT_RULE_ID
from docschema.exceptions import PatternError
from docschema.heading_tree import NodeLike, build_heading_tree
from docschema.reporters import DiagnosticCollector, Reporter
from docschema.schemas import Diagnostic, Schema, SchemaSection, Section

logger = logging.getLogger(__name__)


class ValidationObserver(Protocol):
    """Receives a callback for every section matched by the schema."""

    def section_checked(self, path: str, section: Section) -> None: ...


class NullObserver:
    """Observer that does nothing."""

    def section_checked(self, path: str, section: Section) -> None:
        return None


class LoggingObserver:
    """Log matched sections and their content nodes at DEBUG level."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def section_checked(self, path: str, section: Section) -> None:
        self._log.debug("Checking section %r", path)
        for index, node in enumerate(section.content):
            text = node.value or " ".join(
                child.value for child in node.children if child.type == "text" and child.value
            )
            self._log.debug("  [%d] type = %s, text = %r", index, node.type, text.strip()[:80])


@dataclass(frozen=True)
class ValidationContext:
    """Effective settings for one level of the schema tree.

    Attributes:
        path: Prefix for messages, e.g. ``"Procedure > "``.
        enforce_order: Report sections found where another was expected.
        allow_children: Nested subsections satisfy ``nonEmpty``.
        content_node_types: Node types that count as content.
        rule_id: Identifier stamped on diagnostics.
    """

    path: str = ""
    enforce_order: bool = False
    allow_children: bool = False
    content_node_types: frozenset[str] = DEFAULT_CONTENT_NODE_TYPES
    rule_id: str = DEFAULT_RULE_ID

    @classmethod
    def for_schema(
        cls,
        schema: Schema,
        *,
        rule_id: str = DEFAULT_RULE_ID,
        enforce_order: bool = False,
        allow_children: bool = False,
        content_node_types: Iterable[str] | None = None,
    ) -> ValidationContext:
        """Resolve root settings: schema values win over caller defaults."""
        if schema.content_node_types is not None:
            types = frozenset(schema.content_node_types)
        elif content_node_types is not None:
            types = frozenset(content_node_types)
        else:
            types = DEFAULT_CONTENT_NODE_TYPES
        return cls(
            path="",
            enforce_order=_first_set(schema.enforce_order, enforce_order),
            allow_children=_first_set(schema.allow_children_to_satisfy_non_empty, allow_children),
            content_node_types=types,
            rule_id=rule_id,
        )

    def allows_children_for(self, schema_section: SchemaSection) -> bool:
        return _first_set(schema_section.allow_children_to_satisfy_non_empty, self.allow_children)

    def descend(self, schema_section: SchemaSection) -> ValidationContext:
        """Context for the children of a matched ``schema_section``."""
        return replace(
            self,
            path=f"{self.path}{schema_section.expected_name} > ",
            enforce_order=_first_set(schema_section.enforce_order, self.enforce_order),
            allow_children=self.allows_children_for(schema_section),
        )


def _first_set(override: bool | None, inherited: bool) -> bool:
    return inherited if override is None else override


@lru_cache(maxsize=256)
def compile_title_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a ``titlePattern`` case-insensitively.

    Raises:
        PatternError: If the pattern is not a valid regular expression.
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


def check_patterns(schema_sections: Iterable[SchemaSection]) -> None:
    """Compile every pattern in the tree so bad ones fail before validation."""
    for schema_section in schema_sections:
        if schema_section.title_pattern is not None:
            compile_title_pattern(schema_section.title_pattern)
        if schema_section.children:
            check_patterns(schema_section.children)


def matches_heading(section: Section, schema_section: SchemaSection) -> bool:
    """Return True when ``section`` satisfies the schema's title rule."""
    if schema_section.title_pattern:
        return compile_title_pattern(schema_section.title_pattern).search(section.title) is not None
    if schema_section.title:
        return section.title == schema_section.title
    return False


def is_non_empty(section: Section, context: ValidationContext, *, allow_children: bool) -> bool:
    has_content = any(node.type in context.content_node_types for node in section.content)
    return has_content or (allow_children and bool(section.children))


def validate_sections(
    sections: Sequence[Section],
    schema_sections: Sequence[SchemaSection],
    context: ValidationContext,
    reporter: Reporter,
    observer: ValidationObserver | None = None,
) -> None:
    """Align ``sections`` with ``schema_sections`` and emit violations."""
    observer = observer or NullObserver()
    i = 0
    j = 0

    while j < len(schema_sections):
        expected = schema_sections[j]
        current = sections[i] if i < len(sections) else None
        name = expected.expected_name
        suffix = f" - {expected.description}" if expected.description else ""

        if current is not None and matches_heading(current, expected):
            observer.section_checked(f"{context.path}{name}", current)

            if expected.non_empty and not is_non_empty(
                current, context, allow_children=context.allows_children_for(expected)
            ):
                reporter.emit(
                    f'Section "{context.path}{name}" must not be empty.{suffix}',
                    current.position,
                    context.rule_id,
                )

            if expected.children is not None:
                validate_sections(
                    current.children,
                    expected.children,
                    context.descend(expected),
                    reporter,
                    observer,
                )

            i += 1
            j += 1
            continue

        if expected.required:
            reporter.emit(
                f"Missing required section: {context.path}{name}{suffix}",
                None,
                context.rule_id,
            )

        if context.enforce_order and current is not None:
            where = context.path.removesuffix(" > ") or "root level"
            reporter.emit(
                f'Section "{current.title}" is out of order. Expected "{name}" at {where}.{suffix}',
                current.position,
                context.rule_id,
            )

        j += 1


class Validator:
    """A schema prepared for validating many documents.

    Patterns are compiled on construction, so an invalid ``titlePattern``
    raises :class:`PatternError` before any document is examined.
    """

    def __init__(
        self,
        schema: Schema,
        *,
        rule_id: str = DEFAULT_RULE_ID,
        enforce_order: bool = False,
        allow_children: bool = False,
        content_node_types: Iterable[str] | None = None,
        observer: ValidationObserver | None = None,
    ) -> None:
        check_patterns(schema.sections)
        self.schema = schema
        self.context = ValidationContext.for_schema(
            schema,
            rule_id=rule_id,
            enforce_order=enforce_order,
            allow_children=allow_children,
            content_node_types=content_node_types,
        )
        self.observer = observer or NullObserver()

    def validate_tree(self, sections: Sequence[Section], reporter: Reporter) -> None:
        """Emit diagnostics for an already built section tree."""
        validate_sections(sections, self.schema.sections, self.context, reporter, self.observer)

    def validate(self, nodes: Iterable[NodeLike]) -> list[Diagnostic]:
        """Build the section tree from ``nodes`` and return its diagnostics."""
        collector = DiagnosticCollector()
        sections = build_heading_tree(nodes)
        self.validate_tree(sections, collector)
        logger.debug(
            "Validated %d top-level sections, %d diagnostics",
            len(sections),
            len(collector.diagnostics),
        )
        return collector.diagnostics


def validate_document(
    nodes: Iterable[NodeLike],
    schema: Schema,
    *,
    rule_id: str = DEFAULT_RULE_ID,
    enforce_order: bool = False,
    allow_children: bool = False,
    content_node_types: Iterable[str] | None = None,
    observer: ValidationObserver | None = None,
) -> list[Diagnostic]:
    """Validate one document's nodes against ``schema``."""
    validator = Validator(
        schema,
        rule_id=rule_id,
        enforce_order=enforce_order,
        allow_children=allow_children,
        content_node_types=content_node_types,
        observer=observer,
    )
    return validator.validate(nodes)
