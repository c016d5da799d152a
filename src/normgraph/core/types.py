"""
Pydantic models for the normalized cache.

These define references between records, the result of a read and the
serializable snapshot of a cache.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import SnapshotError

logger = logging.getLogger(__name__)

# Marker key of a reference in the JSON form of a snapshot
REF_MARKER = "__ref"

# Wrapper key for JSON-object leaves that would otherwise look like a marker
ESCAPE_MARKER = "__value"


# --- Record values ---

class Reference(BaseModel):
    """
    Non-owning pointer to a normalized record.

    Stored in place of a nested object. The target record may be absent.

    JSON form: {"__ref": true, "type": "Node", "id": "0"}
    """
    model_config = ConfigDict(frozen=True)

    type: str
    id: str

    @property
    def key(self) -> str:
        """Record key of the target ("type:id")."""
        return f"{self.type}:{self.id}"

    def to_json(self) -> dict[str, Any]:
        return {REF_MARKER: True, "type": self.type, "id": self.id}

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Reference":
        return cls(type=data["type"], id=data["id"])


def is_reference_payload(value: Any) -> bool:
    """True if value is the JSON form of a Reference."""
    return (
        isinstance(value, dict)
        and value.get(REF_MARKER) is True
        and isinstance(value.get("type"), str)
        and isinstance(value.get("id"), str)
    )


def _is_escaped(value: Any) -> bool:
    return isinstance(value, dict) and len(value) == 1 and ESCAPE_MARKER in value


def _needs_escape(value: Any) -> bool:
    return isinstance(value, dict) and (REF_MARKER in value or ESCAPE_MARKER in value)


def decode_field_value(value: Any) -> Any:
    """Turn a JSON field value into its in-memory form."""
    if _is_escaped(value):
        return value[ESCAPE_MARKER]
    if is_reference_payload(value):
        return Reference.from_json(value)
    if isinstance(value, list):
        return [decode_field_value(item) for item in value]
    return value


def encode_field_value(value: Any) -> Any:
    """
    Turn an in-memory field value into its JSON form.

    JSON-object leaves carrying a marker key are wrapped as {"__value": ...}
    so they decode back to themselves and never to a Reference.
    """
    if isinstance(value, Reference):
        return value.to_json()
    if isinstance(value, list):
        return [encode_field_value(item) for item in value]
    if _needs_escape(value):
        return {ESCAPE_MARKER: value}
    return value


# --- Read result ---

class ReadResult(BaseModel):
    """
    Result of projecting the store through a query.

    data is None when the operation was never written or when any selected
    field is missing; missing_data_locations then lists what was missing.
    """
    data: Optional[dict[str, Any]] = None
    missing_data_locations: list[str] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.data is not None and not self.missing_data_locations

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "missingDataLocations": list(self.missing_data_locations),
        }


# --- Snapshot ---

class CacheSnapshot(BaseModel):
    """
    Serializable state of a cache.

    Holds in-memory records (Reference values). The JSON form is produced by
    to_dict() and read back by from_data() / load():
    {
        "normalizedData": {"Query:0": {"__typename": "Query", ...}},
        "operationResults": {"MyQuery/{}": "Query:0"}
    }
    """
    model_config = ConfigDict(populate_by_name=True)

    normalized_data: dict[str, dict[str, Any]] = Field(
        default_factory=dict, alias="normalizedData"
    )
    operation_results: dict[str, str] = Field(
        default_factory=dict, alias="operationResults"
    )

    @classmethod
    def from_records(
        cls,
        records: Mapping[str, dict[str, Any]],
        operation_results: Mapping[str, str],
    ) -> "CacheSnapshot":
        """Detached snapshot of in-memory maps, no JSON decoding involved."""
        return cls.model_construct(
            normalized_data=copy.deepcopy(dict(records)),
            operation_results=dict(operation_results),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible form, references encoded with the __ref marker."""
        return {
            "normalizedData": {
                key: {name: encode_field_value(v) for name, v in record.items()}
                for key, record in self.normalized_data.items()
            },
            "operationResults": dict(self.operation_results),
        }

    def save(self, path: Union[Path, str]) -> None:
        """Write snapshot as JSON."""
        path = Path(path)
        path.write_text(json.dumps(self.to_dict(), ensure_ascii=False, indent=2))
        logger.info(f"Saved snapshot with {len(self.normalized_data)} records to {path}")

    @classmethod
    def load(cls, path: Union[Path, str]) -> "CacheSnapshot":
        """Read snapshot from a JSON file."""
        path = Path(path)
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
        snapshot = cls.from_data(data)
        logger.info(f"Loaded snapshot with {len(snapshot.normalized_data)} records from {path}")
        return snapshot

    @classmethod
    def from_data(cls, data: Union["CacheSnapshot", Mapping[str, Any]]) -> "CacheSnapshot":
        """Accept a snapshot or its JSON form."""
        if isinstance(data, CacheSnapshot):
            return cls.from_records(data.normalized_data, data.operation_results)
        if not isinstance(data, Mapping):
            raise SnapshotError(f"Snapshot must be a mapping, got {type(data).__name__}")
        try:
            snapshot = cls.model_validate(copy.deepcopy(dict(data)))
        except ValueError as e:
            raise SnapshotError(f"Invalid snapshot: {e}") from e
        # decode only after validation: records are known to be dicts here
        snapshot.normalized_data = {
            key: {name: decode_field_value(v) for name, v in record.items()}
            for key, record in snapshot.normalized_data.items()
        }
        return snapshot
