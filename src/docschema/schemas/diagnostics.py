"""Diagnostic output models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from docschema.schemas.nodes import Position


class Diagnostic(BaseModel):
    """A single structural violation.

    Serialized with ``by_alias=True`` the rule id is written as ``ruleId``.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    message: str
    position: Position | None = None
    rule_id: str


class ValidationReport(BaseModel):
    """Diagnostics produced for one document."""

    path: str
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics
