"""Infrastructure helpers to load classified-model snapshots from YAML files."""

from typing import Any, Dict
import logging

import yaml

from .static_reasoner import StaticReasoner

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = {"namespace", "classes", "data_properties", "object_properties"}


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Snapshot section '{key}' must be a mapping")
    for name, spec in value.items():
        if spec is not None and not isinstance(spec, dict):
            raise ValueError(f"Entry '{name}' in '{key}' must be a mapping")
    return value


def load_snapshot(yaml_path: str) -> StaticReasoner:
    """
    Load a YAML snapshot of a classified ontology and return a reasoner
    answering from it.

    Raises ``ValueError`` on unknown top-level keys or malformed sections;
    YAML syntax errors propagate from PyYAML.
    """
    with open(yaml_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Snapshot {yaml_path} must contain a mapping")
    unknown = set(data) - SNAPSHOT_KEYS
    if unknown:
        raise ValueError(f"Unknown snapshot key(s): {', '.join(sorted(unknown))}")

    classes = _section(data, "classes")
    data_properties = _section(data, "data_properties")
    object_properties = _section(data, "object_properties")
    logger.info(
        "Loaded snapshot %s: %d classes, %d data properties, %d object properties",
        yaml_path,
        len(classes),
        len(data_properties),
        len(object_properties),
    )
    return StaticReasoner(
        classes,
        data_properties,
        object_properties,
        namespace=str(data.get("namespace") or ""),
    )

__all__ = ["load_snapshot"]
