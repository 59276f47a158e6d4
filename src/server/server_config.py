"""Server configuration."""

from __future__ import annotations

import os

MAX_DOCUMENT_SIZE_KB = int(os.getenv("DOCSCHEMA_MAX_DOCUMENT_SIZE_KB", "1024"))
MAX_DOCUMENT_CHARS = MAX_DOCUMENT_SIZE_KB * 1024

SERVER_HOST = os.getenv("DOCSCHEMA_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("DOCSCHEMA_PORT", "8000"))
SERVER_RELOAD = os.getenv("DOCSCHEMA_RELOAD", "false").lower() == "true"

# Hosts the API may fetch schema_url from; empty disables schema_url.
SCHEMA_URL_ALLOWLIST = frozenset(
    host.strip().lower()
    for host in os.getenv("DOCSCHEMA_SCHEMA_URL_ALLOWLIST", "").split(",")
    if host.strip()
)
