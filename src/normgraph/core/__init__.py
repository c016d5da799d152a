"""
Core module - errors, value types and GraphQL AST helpers.
"""

from __future__ import annotations

from .directives import should_skip
from .document import (
    find_query_operation,
    get_fragment_map,
    load_document,
    parse_document,
    response_name,
)
from .errors import (
    FragmentNotFoundError,
    IllegalSelectionError,
    MissingOperationError,
    NormgraphError,
    SnapshotError,
    UnboundVariableError,
    UnnamedOperationError,
    UnsupportedValueNodeError,
)
from .types import (
    CacheSnapshot,
    ReadResult,
    Reference,
    decode_field_value,
    encode_field_value,
    is_reference_payload,
)
from .values import extract_default_values, merge_variables, resolve_value_node

__all__ = [
    # Errors
    "NormgraphError",
    "MissingOperationError",
    "UnnamedOperationError",
    "FragmentNotFoundError",
    "IllegalSelectionError",
    "UnboundVariableError",
    "UnsupportedValueNodeError",
    "SnapshotError",
    # Types
    "Reference",
    "ReadResult",
    "CacheSnapshot",
    "is_reference_payload",
    "decode_field_value",
    "encode_field_value",
    # Values
    "resolve_value_node",
    "extract_default_values",
    "merge_variables",
    # Directives
    "should_skip",
    # Document
    "parse_document",
    "load_document",
    "find_query_operation",
    "get_fragment_map",
    "response_name",
]
