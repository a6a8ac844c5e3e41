"""Bundled JSON schemas for raw API payloads."""

from __future__ import annotations

import json
from importlib import resources

TEMPLATE_SCHEMA_FILENAME = "permit_template.schema.json"


def load_template_schema() -> dict:
    schema_path = resources.files("parkpermits.schemas") / TEMPLATE_SCHEMA_FILENAME
    return json.loads(schema_path.read_text(encoding="utf-8"))
