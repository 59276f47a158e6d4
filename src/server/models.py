"""Pydantic models for the validation API."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from docschema.config import DOCSCHEMA_RULE_ID
from docschema.schemas import Diagnostic
from server.server_config import MAX_DOCUMENT_CHARS


class ValidateRequest(BaseModel):
    """Request model for the /api/validate endpoint.

    Attributes
    ----------
    markdown : str
        Markdown document to validate.
    schema_definition : dict | None
        Inline schema object, sent as ``schema``.
    schema_url : str | None
        Location of a YAML or JSON schema to fetch instead.
    rule_id : str
        Identifier stamped on every diagnostic.
    enforce_order : bool
        Default order enforcement when the schema does not set one.
    allow_children : bool
        Default for letting subsections satisfy ``nonEmpty``.

    """

    model_config = ConfigDict(populate_by_name=True)

    markdown: str = Field(..., max_length=MAX_DOCUMENT_CHARS, description="Markdown document")
    schema_definition: dict[str, Any] | None = Field(
        default=None, alias="schema", description="Inline structure schema"
    )
    schema_url: str | None = Field(default=None, description="URL of a YAML or JSON schema")
    rule_id: str = Field(default=DOCSCHEMA_RULE_ID, description="Rule identifier")
    enforce_order: bool = Field(default=False, description="Default order enforcement")
    allow_children: bool = Field(default=False, description="Default for children satisfying nonEmpty")

    @field_validator("schema_url")
    @classmethod
    def validate_schema_url(cls, v: str | None) -> str | None:
        """Only http(s) URLs may be fetched."""
        if v is None:
            return v
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            err = "schema_url must be an http(s) URL"
            raise ValueError(err)
        return v

    @model_validator(mode="after")
    def require_one_schema(self) -> ValidateRequest:
        """Exactly one of ``schema`` and ``schema_url`` must be given."""
        if (self.schema_definition is None) == (self.schema_url is None):
            err = "Provide exactly one of schema or schema_url"
            raise ValueError(err)
        return self


class ValidateSuccessResponse(BaseModel):
    """Success response model for the /api/validate endpoint.

    Attributes
    ----------
    ok : bool
        True when no diagnostics were produced.
    sections : int
        Number of sections found in the document.
    diagnostics : list[Diagnostic]
        Structural violations in schema traversal order.

    """

    ok: bool = Field(..., description="Document conforms to the schema")
    sections: int = Field(..., description="Number of sections in the document")
    diagnostics: list[Diagnostic] = Field(default_factory=list, description="Violations found")


class ValidateErrorResponse(BaseModel):
    """Error response model for the /api/validate endpoint.

    Attributes
    ----------
    error : str
        Error message describing why validation could not run.

    """

    error: str = Field(..., description="Error message")


ValidateResponse = Union[ValidateSuccessResponse, ValidateErrorResponse]
