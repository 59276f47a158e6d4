"""Diagnostic sinks: in-memory collection, console lines and CSV."""

from __future__ import annotations

import csv
import sys
from collections.abc import Iterable, Sequence
from typing import Protocol, TextIO

from docschema.schemas import Diagnostic, Position, ValidationReport

CSV_COLUMNS: tuple[str, ...] = ("file", "line", "column", "reason", "ruleId", "severity")
_POSITION_COLUMNS = frozenset({"line", "column"})


class Reporter(Protocol):
    """Anything that accepts diagnostics one at a time."""

    def emit(self, message: str, position: Position | None, rule_id: str) -> None: ...


class FileReporter(Reporter, Protocol):
    """Reporter that groups diagnostics by source file."""

    def begin_file(self, path: str) -> None: ...


class DiagnosticCollector:
    """Accumulate diagnostics in emission order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def emit(self, message: str, position: Position | None, rule_id: str) -> None:
        self.diagnostics.append(Diagnostic(message=message, position=position, rule_id=rule_id))


class ConsoleReporter:
    """Write ``path:line:column: message [rule]`` lines.

    Diagnostics without a position are reported at ``0:0``.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout
        self.path = "<input>"

    def begin_file(self, path: str) -> None:
        self.path = path

    def emit(self, message: str, position: Position | None, rule_id: str) -> None:
        line, column = _line_column(position)
        self.stream.write(f"{self.path}:{line}:{column}: {message} [{rule_id}]\n")


class CsvReporter:
    """Write one CSV row per diagnostic.

    The header is written on construction, so a run without violations still
    produces a valid file.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        columns: Sequence[str] = CSV_COLUMNS,
        include_position: bool = True,
        severity: str = "warning",
    ) -> None:
        unknown = [column for column in columns if column not in CSV_COLUMNS]
        if unknown:
            raise ValueError(f"Unknown CSV columns: {', '.join(unknown)}")
        self.columns = [
            column for column in columns if include_position or column not in _POSITION_COLUMNS
        ]
        self.severity = severity
        self.path = "<input>"
        self._writer = csv.writer(stream or sys.stdout, quoting=csv.QUOTE_ALL, lineterminator="\n")
        self._writer.writerow(self.columns)

    def begin_file(self, path: str) -> None:
        self.path = path

    def emit(self, message: str, position: Position | None, rule_id: str) -> None:
        line, column = _line_column(position)
        values = {
            "file": self.path,
            "line": line,
            "column": column,
            "reason": message,
            "ruleId": rule_id,
            "severity": self.severity,
        }
        self._writer.writerow([values[column] for column in self.columns])


def emit_reports(reports: Iterable[ValidationReport], reporter: FileReporter) -> None:
    """Replay collected reports into a file-aware reporter."""
    for report in reports:
        reporter.begin_file(report.path)
        for diagnostic in report.diagnostics:
            reporter.emit(diagnostic.message, diagnostic.position, diagnostic.rule_id)


def write_summary_csv(reports: Iterable[ValidationReport], stream: TextIO) -> None:
    """Write one row per file with its violation count."""
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(["file", "violations", "status"])
    for report in reports:
        writer.writerow(
            [report.path, len(report.diagnostics), "ok" if report.ok else "violations"]
        )


def _line_column(position: Position | None) -> tuple[int, int]:
    if position is None:
        return 0, 0
    return position.line, position.column
