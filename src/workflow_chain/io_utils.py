"""Input/output helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def load_edits(path: Path) -> dict[str, dict[str, Any]]:
    """
    Loads user modifications keyed by step name from a YAML or JSON file.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Edits file {path} must map step names to input overrides.")
    edits: dict[str, dict[str, Any]] = {}
    for step_name, overrides in raw.items():
        if not isinstance(overrides, dict):
            raise ValueError(f"Edits for step {step_name!r} in {path} must be a mapping.")
        edits[str(step_name)] = overrides
    return edits


def write_output(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
