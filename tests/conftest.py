"""Test setup for docschema."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


RUNBOOK_SCHEMA_YAML = """\
enforceOrder: true
sections:
  - title: Overview
    required: true
    nonEmpty: true
    description: What the service does
  - title: Prerequisites
    required: true
    nonEmpty: true
  - title: Procedure
    required: true
    children:
      - titlePattern: "^step \\\\d+"
        required: true
        nonEmpty: true
"""

RUNBOOK_MARKDOWN = """\
---
owner: platform
---

# Overview

Handles billing.

# Prerequisites

- VPN access

# Procedure

## Step 1

Restart the worker.
"""


@pytest.fixture
def runbook_schema_path(tmp_path: Path) -> Path:
    """A runbook schema written to disk."""
    path = tmp_path / "runbook-schema.yaml"
    path.write_text(RUNBOOK_SCHEMA_YAML, encoding="utf-8")
    return path


@pytest.fixture
def runbook_path(tmp_path: Path) -> Path:
    """A markdown runbook that satisfies the runbook schema."""
    path = tmp_path / "runbook.md"
    path.write_text(RUNBOOK_MARKDOWN, encoding="utf-8")
    return path
