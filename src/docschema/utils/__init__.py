"""Utility helpers for docschema."""
