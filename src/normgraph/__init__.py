"""
normgraph - normalized in-memory cache for GraphQL query results.

Stores results as flat records keyed by "<typename>:<id>" and projects
them back into the shape of any query that selects them:
- write(): decompose a nested result into records and merge on identity
- read(): rebuild the query-shaped result, or report what is missing
- serialize(): snapshot for persistence, restorable via NodeCache(initial_data=...)

Usage:
    from normgraph import NodeCache, parse_document

    cache = NodeCache()
    query = parse_document("query MyQuery { stringValue }")
    cache.write(query, {}, {"__typename": "Query", "stringValue": "hello"})
    cache.read(query, {}).data  # {"stringValue": "hello"}
"""

from __future__ import annotations

from .config import CacheSettings, load_settings
from .core import (
    CacheSnapshot,
    FragmentNotFoundError,
    IllegalSelectionError,
    MissingOperationError,
    NormgraphError,
    ReadResult,
    Reference,
    SnapshotError,
    UnboundVariableError,
    UnnamedOperationError,
    UnsupportedValueNodeError,
    extract_default_values,
    load_document,
    parse_document,
    resolve_value_node,
    should_skip,
)
from .store import (
    DefaultOperationIdGenerator,
    NodeCache,
    OperationIdGenerator,
)

__version__ = "0.1.0"

__all__ = [
    # Cache
    "NodeCache",
    "OperationIdGenerator",
    "DefaultOperationIdGenerator",
    # Types
    "Reference",
    "ReadResult",
    "CacheSnapshot",
    # Config
    "CacheSettings",
    "load_settings",
    # Errors
    "NormgraphError",
    "MissingOperationError",
    "UnnamedOperationError",
    "FragmentNotFoundError",
    "IllegalSelectionError",
    "UnboundVariableError",
    "UnsupportedValueNodeError",
    "SnapshotError",
    # AST helpers
    "parse_document",
    "load_document",
    "resolve_value_node",
    "extract_default_values",
    "should_skip",
]
