"""
Normalized node cache.

Owns the record map and the operation -> root record map and exposes
read / write / serialize over parsed GraphQL documents.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from graphql.language import DocumentNode

from ..config import CacheSettings
from ..core.document import find_query_operation
from ..core.types import CacheSnapshot, ReadResult
from .context import SelectionContext
from .operation_id import DefaultOperationIdGenerator, OperationIdGenerator
from .reader import SelectionReader
from .writer import SelectionWriter

logger = logging.getLogger(__name__)


class NodeCache:
    """
    In-memory normalized cache for GraphQL query results.

    Usage:
        cache = NodeCache()
        query = parse_document("query MyQuery { nodes { name } }")

        cache.write(query, {}, {
            "__typename": "Query",
            "nodes": [{"__typename": "Node", "name": "hoge"}],
        })
        result = cache.read(query, {})
        # result.data -> {"nodes": [{"name": "hoge"}]}

        # Persist and restore
        snapshot = cache.serialize().to_dict()
        restored = NodeCache(initial_data=snapshot)

    Not thread safe: calls on one instance must be serialized by the caller.
    """

    def __init__(
        self,
        initial_data: Optional[Union[CacheSnapshot, Mapping[str, Any]]] = None,
        id_generator: Optional[OperationIdGenerator] = None,
        settings: Optional[CacheSettings] = None,
    ):
        """
        Initialize cache.

        Args:
            initial_data: Snapshot (or its JSON form) to rehydrate from
            id_generator: Operation id strategy, DefaultOperationIdGenerator if omitted
            settings: Behaviour switches, defaults if omitted
        """
        self.settings = settings or CacheSettings()

        if initial_data is not None:
            snapshot = CacheSnapshot.from_data(initial_data)
        else:
            snapshot = CacheSnapshot()
        self._normalized_data: dict[str, dict[str, Any]] = snapshot.normalized_data
        self._operation_results: dict[str, str] = snapshot.operation_results

        self._id_generator = id_generator or DefaultOperationIdGenerator(
            sort_keys=self.settings.sort_variable_keys
        )

    def __len__(self) -> int:
        return len(self._normalized_data)

    def __contains__(self, key: str) -> bool:
        return key in self._normalized_data

    def get_record(self, key: str) -> Optional[dict[str, Any]]:
        """Copy of the record stored under "type:id", None if absent."""
        record = self._normalized_data.get(key)
        return dict(record) if record is not None else None

    def get_operation_id(
        self, document: DocumentNode, variables: Optional[Mapping[str, Any]] = None
    ) -> str:
        return self._id_generator.get_operation_id(document, variables)

    def serialize(self) -> CacheSnapshot:
        """Snapshot of the current state, detached from the live maps."""
        return CacheSnapshot.from_records(self._normalized_data, self._operation_results)

    def read(
        self, document: DocumentNode, variables: Optional[Mapping[str, Any]] = None
    ) -> ReadResult:
        """
        Project cached records into the shape of the document's query.

        Returns:
            ReadResult with data, or data=None when the operation was never
            written or any selected field is missing

        Raises:
            MissingOperationError, UnnamedOperationError, FragmentNotFoundError,
            IllegalSelectionError, UnboundVariableError
        """
        operation = find_query_operation(document)
        operation_id = self.get_operation_id(document, variables)

        root_key = self._operation_results.get(operation_id)
        if root_key is None:
            logger.debug(f"Cache MISS: {operation_id}")
            return ReadResult()

        record = self._normalized_data.get(root_key)
        if record is None:
            logger.warning(f"Root record {root_key} of {operation_id} is not in the store")
            return ReadResult()

        context = SelectionContext.for_operation(document, operation, operation_id, variables)
        reader = SelectionReader(
            self._normalized_data,
            context,
            location_style=self.settings.missing_location_style,
        )
        data = reader.read(operation.selection_set, record)

        if reader.missing_data_locations:
            logger.debug(
                f"Cache PARTIAL: {operation_id} missing {reader.missing_data_locations}"
            )
            return ReadResult(
                data=None,
                missing_data_locations=reader.missing_data_locations,
            )

        logger.debug(f"Cache HIT: {operation_id}")
        return ReadResult(data=data)

    def write(
        self,
        document: DocumentNode,
        variables: Optional[Mapping[str, Any]],
        data: Mapping[str, Any],
    ) -> None:
        """
        Normalize a result and merge it into the store.

        The root object must carry __typename for the result to be recorded
        against the operation.
        """
        operation = find_query_operation(document)
        operation_id = self.get_operation_id(document, variables)
        context = SelectionContext.for_operation(document, operation, operation_id, variables)

        writer = SelectionWriter(
            self._normalized_data,
            context,
            null_clears_reference=self.settings.null_clears_reference,
        )
        ref = writer.write(operation.selection_set, data, [])

        if ref is not None:
            self._operation_results[operation_id] = ref.key
            logger.debug(f"Wrote {operation_id} -> {ref.key} ({len(writer.touched)} records)")
        else:
            logger.debug(f"Nothing written for {operation_id}: root has no __typename")
