"""
Operation identifiers.

An operation id names "this operation with these variables" and locates the
root record of a cached result.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from graphql.language import DocumentNode, OperationDefinitionNode

from ..core.errors import MissingOperationError, UnnamedOperationError


class OperationIdGenerator(ABC):
    """Strategy that derives a stable cache key for an operation call."""

    @abstractmethod
    def get_operation_id(
        self, document: DocumentNode, variables: Optional[Mapping[str, Any]]
    ) -> str:
        """Return the operation key for document + variables."""


class DefaultOperationIdGenerator(OperationIdGenerator):
    """
    "<OperationName>/<variables as JSON>".

    Usage:
        generator = DefaultOperationIdGenerator()
        generator.get_operation_id(parse("query MyQuery { a }"), {})
        # -> 'MyQuery/{}'
    """

    def __init__(self, sort_keys: bool = True):
        self.sort_keys = sort_keys

    def get_operation_id(
        self, document: DocumentNode, variables: Optional[Mapping[str, Any]]
    ) -> str:
        operation = next(
            (d for d in document.definitions if isinstance(d, OperationDefinitionNode)),
            None,
        )
        if operation is None:
            raise MissingOperationError()
        if operation.name is None:
            raise UnnamedOperationError()

        payload = json.dumps(
            dict(variables or {}),
            sort_keys=self.sort_keys,
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
        return f"{operation.name.value}/{payload}"
