"""Local configuration for docschema."""

from __future__ import annotations

import os

DEFAULT_SCHEMA_PATH = "./doc-structure-schema.yaml"
DEFAULT_RULE_ID = "docschema-structure"
DEFAULT_CONTENT_NODE_TYPES = frozenset({"paragraph", "list", "code", "blockquote", "table"})
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "docschema/0.1"
DEFAULT_LOG_LEVEL = "WARNING"


def _split_types(raw: str | None) -> frozenset[str]:
    if not raw:
        return DEFAULT_CONTENT_NODE_TYPES
    return frozenset(item.strip() for item in raw.split(",") if item.strip())


DOCSCHEMA_SCHEMA_PATH = os.getenv("DOCSCHEMA_SCHEMA_PATH", DEFAULT_SCHEMA_PATH)
DOCSCHEMA_RULE_ID = os.getenv("DOCSCHEMA_RULE_ID", DEFAULT_RULE_ID)
# Used only when a schema does not declare its own contentNodeTypes.
DOCSCHEMA_CONTENT_NODE_TYPES = _split_types(os.getenv("DOCSCHEMA_CONTENT_NODE_TYPES"))
DOCSCHEMA_FETCH_TIMEOUT_S = float(os.getenv("DOCSCHEMA_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
DOCSCHEMA_FETCH_MAX_RETRIES = int(os.getenv("DOCSCHEMA_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
DOCSCHEMA_FETCH_BACKOFF_S = float(os.getenv("DOCSCHEMA_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
DOCSCHEMA_USER_AGENT = os.getenv("DOCSCHEMA_USER_AGENT", DEFAULT_USER_AGENT)
DOCSCHEMA_LOG_LEVEL = os.getenv("DOCSCHEMA_LOG_LEVEL", DEFAULT_LOG_LEVEL)
