"""HTTP API for docschema."""
