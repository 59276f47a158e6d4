"""Load structure schemas from YAML or JSON."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import httpx
import yaml
from pydantic import ValidationError

from docschema.exceptions import ConfigurationError
from docschema.http_utils import fetch_text
from docschema.schemas import Schema
from docschema.validator import check_patterns

logger = logging.getLogger(__name__)

SchemaSource = Literal["yaml", "json"]

_BOM = "\ufeff"
_DASHES_RE = re.compile("[\u2013\u2014]")
_YAML_SUFFIXES = (".yaml", ".yml")


def normalize_description(text: str, *, strip_commas: bool = True) -> str:
    """Replace typographic dashes with ``-`` and optionally drop commas.

    Without commas the text can be placed in a CSV cell as is.
    """
    text = _DASHES_RE.sub("-", text)
    if strip_commas:
        text = text.replace(",", "")
    return text


def source_for(location: str | Path) -> SchemaSource:
    """Pick the decoder from a path or URL suffix; anything but YAML is JSON."""
    name = httpx.URL(location).path if is_remote(location) else str(location)
    return "yaml" if name.lower().endswith(_YAML_SUFFIXES) else "json"


def is_remote(location: str | Path) -> bool:
    return isinstance(location, str) and location.startswith(("http://", "https://"))


def parse_schema(
    text: str | bytes,
    source: SchemaSource = "yaml",
    *,
    strip_commas: bool = True,
) -> Schema:
    """Decode and validate schema text.

    Raises:
        ConfigurationError: If the text cannot be decoded or does not describe
            a schema with a ``sections`` list.
        PatternError: If any ``titlePattern`` fails to compile.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigurationError(f"Schema is not valid UTF-8: {exc}") from exc
    if text.startswith(_BOM):
        text = text[len(_BOM):]

    return schema_from_mapping(_decode(text, source), strip_commas=strip_commas)


def schema_from_mapping(data: Any, *, strip_commas: bool = True) -> Schema:
    """Validate an already decoded schema object.

    Raises:
        ConfigurationError: If ``data`` is not a mapping with a ``sections`` list.
        PatternError: If any ``titlePattern`` fails to compile.
    """
    if not isinstance(data, Mapping) or not isinstance(data.get("sections"), list):
        raise ConfigurationError('Invalid schema: Must define "sections" array')

    data = dict(data)
    data["sections"] = _normalize_sections(data["sections"], strip_commas=strip_commas)

    try:
        schema = Schema.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid schema: {exc}") from exc

    check_patterns(schema.sections)
    return schema


def load_schema(path: str | Path, *, strip_commas: bool = True) -> Schema:
    """Read and parse a schema file from disk."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read schema {path}: {exc}") from exc
    logger.debug("Loaded schema from %s", path)
    return parse_schema(text, source_for(path), strip_commas=strip_commas)


async def fetch_schema(
    url: str,
    *,
    source: SchemaSource | None = None,
    strip_commas: bool = True,
    client: httpx.AsyncClient | None = None,
    follow_redirects: bool = True,
) -> Schema:
    """Fetch a schema over HTTP and parse it.

    Raises:
        FetchError: If the schema cannot be retrieved.
        ConfigurationError: If the retrieved text is not a valid schema.
    """
    text = await fetch_text(url, client=client, follow_redirects=follow_redirects)
    logger.debug("Fetched schema from %s", url)
    return parse_schema(text, source or source_for(url), strip_commas=strip_commas)


def _decode(text: str, source: SchemaSource) -> Any:
    if source == "yaml":
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Malformed YAML schema: {exc}") from exc
    if source == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Malformed JSON schema: {exc}") from exc
    raise ConfigurationError(f"Unknown schema source {source!r}")


def _normalize_sections(sections: list[Any], *, strip_commas: bool) -> list[Any]:
    normalized: list[Any] = []
    for section in sections:
        if not isinstance(section, Mapping):
            normalized.append(section)
            continue
        section = dict(section)
        if isinstance(section.get("description"), str):
            section["description"] = normalize_description(
                section["description"], strip_commas=strip_commas
            )
        if isinstance(section.get("children"), list):
            section["children"] = _normalize_sections(section["children"], strip_commas=strip_commas)
        normalized.append(section)
    return normalized
