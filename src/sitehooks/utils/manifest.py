# YAML manifest reading and writing
from pathlib import Path
from typing import Any

import yaml


class ManifestError(ValueError):
    """Raised when a manifest does not hold a top-level mapping."""


def load_manifest(path: Path) -> dict[str, Any]:
    """Read a YAML manifest into an ordered mapping.

    ABOUTME: Uses yaml.safe_load; dicts keep the file's key order
    ABOUTME: An empty file yields an empty mapping
    ABOUTME: yaml.YAMLError propagates for malformed YAML

    Args:
        path: Path to the .info.yml file

    Returns:
        Top-level mapping of the manifest

    Raises:
        ManifestError: If the document is not a mapping
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must contain a mapping, got {type(data).__name__}")

    return data


def dump_manifest(path: Path, data: dict[str, Any]) -> None:
    """Write a mapping back as a YAML manifest.

    ABOUTME: Keeps key order (sort_keys=False) and block style
    ABOUTME: Non-ASCII text is written as-is
    """
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            data,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def remove_key(data: dict[str, Any], key: str) -> bool:
    """Remove a top-level key if present.

    Returns:
        True if the key was present and removed
    """
    if key not in data:
        return False
    del data[key]
    return True
