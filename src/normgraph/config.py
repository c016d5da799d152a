"""
Configuration loading for normgraph caches.

Example normgraph.yaml:

    sort_variable_keys: true
    null_clears_reference: true
    missing_location_style: field
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import yaml

MissingLocationStyle = Literal["field", "path"]

MISSING_LOCATION_STYLES = ("field", "path")


@dataclass
class CacheSettings:
    """
    Behaviour switches for NodeCache.

    - sort_variable_keys: serialize variables with sorted keys in operation ids
    - null_clears_reference: an explicit null replaces a stored reference
    - missing_location_style: "field" records leaf names, "path" dotted paths
    """
    sort_variable_keys: bool = True
    null_clears_reference: bool = True
    missing_location_style: MissingLocationStyle = "field"

    def __post_init__(self):
        if self.missing_location_style not in MISSING_LOCATION_STYLES:
            raise ValueError(
                f"missing_location_style must be one of {MISSING_LOCATION_STYLES}, "
                f"got {self.missing_location_style!r}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheSettings":
        """Create settings from dictionary."""
        return cls(
            sort_variable_keys=data.get("sort_variable_keys", True),
            null_clears_reference=data.get("null_clears_reference", True),
            missing_location_style=data.get("missing_location_style", "field"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary for YAML serialization."""
        return {
            "sort_variable_keys": self.sort_variable_keys,
            "null_clears_reference": self.null_clears_reference,
            "missing_location_style": self.missing_location_style,
        }

    def save(self, path: Path | str = "normgraph.yaml") -> None:
        """Save settings to YAML file."""
        path = Path(path)
        content = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        path.write_text(content)


def load_settings(path: Path | str = "normgraph.yaml") -> CacheSettings | None:
    """Load settings from YAML file."""
    path = Path(path)
    if not path.exists():
        return None

    data = yaml.safe_load(path.read_text()) or {}
    return CacheSettings.from_dict(data)
