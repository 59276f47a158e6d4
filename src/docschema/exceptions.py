"""Custom exceptions for docschema."""


class DocSchemaError(Exception):
    """Base exception for docschema operations."""


class ConfigurationError(DocSchemaError):
    """Schema could not be loaded or is structurally invalid."""


class PatternError(ConfigurationError):
    """A ``titlePattern`` is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid titlePattern {pattern!r}: {reason}")


class FetchError(DocSchemaError):
    """Error while fetching a remote schema."""


class DocumentError(DocSchemaError):
    """Document could not be read or contains an unsupported node."""
