"""
Store module - the normalized cache and its read / write machinery.
"""

from __future__ import annotations

from .context import SelectionContext, type_condition_matches
from .node_cache import NodeCache
from .operation_id import DefaultOperationIdGenerator, OperationIdGenerator
from .reader import SelectionReader
from .writer import SelectionWriter

__all__ = [
    "NodeCache",
    "OperationIdGenerator",
    "DefaultOperationIdGenerator",
    "SelectionContext",
    "SelectionReader",
    "SelectionWriter",
    "type_condition_matches",
]
