"""Command line interface: validate documents against a structure schema."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TextIO

from docschema.config import (
    DOCSCHEMA_CONTENT_NODE_TYPES,
    DOCSCHEMA_RULE_ID,
    DOCSCHEMA_SCHEMA_PATH,
)
from docschema.exceptions import DocSchemaError
from docschema.html_parser import parse_html_file
from docschema.markdown_parser import parse_markdown_file
from docschema.reporters import CSV_COLUMNS, ConsoleReporter, CsvReporter, emit_reports, write_summary_csv
from docschema.schema_loader import fetch_schema, is_remote, load_schema
from docschema.schemas import Schema, ValidationReport
from docschema.utils.logging_config import configure_logging, get_logger
from docschema.validator import LoggingObserver, Validator

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2

_HTML_SUFFIXES = (".html", ".htm")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docschema",
        description="Check that markdown or HTML documents follow a section structure schema.",
    )
    parser.add_argument("files", nargs="+", help="Documents to validate (.md, .html)")
    parser.add_argument(
        "-s",
        "--schema",
        default=DOCSCHEMA_SCHEMA_PATH,
        help="Schema file (.yaml, .yml, .json) or http(s) URL",
    )
    parser.add_argument("--format", choices=("console", "csv"), default="console")
    parser.add_argument("-o", "--output", default="-", help="Report destination, '-' for stdout")
    parser.add_argument(
        "--columns",
        type=_comma_list,
        default=list(CSV_COLUMNS),
        help=f"CSV columns, comma separated (default: {','.join(CSV_COLUMNS)})",
    )
    parser.add_argument("--no-position", action="store_true", help="Omit line/column from CSV output")
    parser.add_argument("--summary", help="Also write a per-file summary CSV to this path")
    parser.add_argument("--rule-id", default=DOCSCHEMA_RULE_ID, help="Rule identifier for diagnostics")
    parser.add_argument(
        "--enforce-order",
        action="store_true",
        help="Enforce section order unless the schema says otherwise",
    )
    parser.add_argument(
        "--allow-children",
        action="store_true",
        help="Let subsections satisfy nonEmpty unless the schema says otherwise",
    )
    parser.add_argument(
        "--content-types",
        type=_comma_list,
        default=None,
        help="Node types that count as content when the schema does not list them",
    )
    parser.add_argument(
        "--keep-commas",
        action="store_true",
        help="Keep commas in schema descriptions",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each checked section")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit status.

    0 means every document conforms, 1 means violations were found and
    2 means the run could not complete.
    """
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    unknown = [column for column in args.columns if column not in CSV_COLUMNS]
    if args.format == "csv" and unknown:
        print(f"Error: Unknown CSV columns: {', '.join(unknown)}", file=sys.stderr)
        return EXIT_ERROR

    try:
        schema = _load(args.schema, strip_commas=not args.keep_commas)
        validator = Validator(
            schema,
            rule_id=args.rule_id,
            enforce_order=args.enforce_order,
            allow_children=args.allow_children,
            content_node_types=args.content_types or DOCSCHEMA_CONTENT_NODE_TYPES,
            observer=LoggingObserver() if args.verbose else None,
        )
        reports = [_validate_file(validator, Path(path)) for path in args.files]
    except DocSchemaError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    try:
        with _open_output(args.output) as stream:
            if args.format == "csv":
                reporter = CsvReporter(
                    stream, columns=args.columns, include_position=not args.no_position
                )
            else:
                reporter = ConsoleReporter(stream)
            emit_reports(reports, reporter)

        if args.summary:
            with open(args.summary, "w", encoding="utf-8", newline="") as summary:
                write_summary_csv(reports, summary)
    except OSError as exc:
        print(f"Error: Cannot write report: {exc}", file=sys.stderr)
        return EXIT_ERROR

    failed = sum(1 for report in reports if not report.ok)
    logger.info("Validated %d document(s), %d with violations", len(reports), failed)
    return EXIT_VIOLATIONS if failed else EXIT_OK


def _load(location: str, *, strip_commas: bool) -> Schema:
    if is_remote(location):
        return asyncio.run(fetch_schema(location, strip_commas=strip_commas))
    return load_schema(location, strip_commas=strip_commas)


def _validate_file(validator: Validator, path: Path) -> ValidationReport:
    if path.suffix.lower() in _HTML_SUFFIXES:
        nodes = parse_html_file(path)
    else:
        nodes = parse_markdown_file(path)
    report = ValidationReport(path=str(path), diagnostics=validator.validate(nodes))
    logger.debug("%s: %d diagnostic(s)", path, len(report.diagnostics))
    return report


@contextlib.contextmanager
def _open_output(destination: str) -> Iterator[TextIO]:
    if destination == "-":
        yield sys.stdout
        return
    with open(destination, "w", encoding="utf-8", newline="") as stream:
        yield stream


def _comma_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]
