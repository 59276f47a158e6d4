"""docschema: validate document section structure against a schema."""

from docschema.exceptions import (
    ConfigurationError,
    DocSchemaError,
    DocumentError,
    FetchError,
    PatternError,
)
from docschema.heading_tree import build_heading_tree
from docschema.markdown_parser import parse_markdown
from docschema.schema_loader import fetch_schema, load_schema, parse_schema
from docschema.schemas import Diagnostic, Schema, SchemaSection, Section, ValidationReport
from docschema.validator import Validator, validate_document, validate_sections

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DocSchemaError",
    "DocumentError",
    "FetchError",
    "PatternError",
    "Schema",
    "SchemaSection",
    "Section",
    "ValidationReport",
    "Validator",
    "build_heading_tree",
    "fetch_schema",
    "load_schema",
    "parse_markdown",
    "parse_schema",
    "validate_document",
    "validate_sections",
]
