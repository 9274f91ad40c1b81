"""YAML data file loader for tax-year tables."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml(path: Path) -> Any:
    """Load and parse a YAML file.

    Args:
        path: Absolute or relative path to the YAML file.

    Returns:
        Parsed YAML content (typically a dict or list).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    with open(path) as f:
        return yaml.safe_load(f)


def package_path(relative_path: str) -> Path:
    """Resolve a path relative to the taxtiers package root."""
    return Path(__file__).resolve().parent.parent / relative_path


def load_package_yaml(relative_path: str) -> Any:
    """Load a YAML file relative to the taxtiers package root.

    Args:
        relative_path: Path relative to ``src/taxtiers/``,
            e.g. ``"taxes/tables/us_federal_2024.yaml"``.

    Returns:
        Parsed YAML content.
    """
    return load_yaml(package_path(relative_path))
