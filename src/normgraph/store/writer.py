"""
Selection writer - decomposes a query-shaped tree into normalized records.

Every object carrying __typename becomes (or merges into) the record
"<typename>:<id>". Objects without an id get an id derived from the
operation key and their position in the result.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Mapping, Optional, Union

from graphql.language import (
    FieldNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    SelectionSetNode,
)

from ..core.document import response_name
from ..core.types import Reference
from .context import SelectionContext, type_condition_matches

logger = logging.getLogger(__name__)

PathSegment = Union[str, int]


class SelectionWriter:
    """
    Writes result objects into a record map, merging on identity.

    Usage:
        writer = SelectionWriter(records, context)
        ref = writer.write(operation.selection_set, data, [])
        # ref.key -> "Query:MyQuery/{}"
    """

    def __init__(
        self,
        records: dict[str, dict[str, Any]],
        context: SelectionContext,
        null_clears_reference: bool = True,
    ):
        self.records = records
        self.context = context
        self.null_clears_reference = null_clears_reference
        self.touched: set[str] = set()

    def write(
        self,
        selection_set: SelectionSetNode,
        obj: Any,
        path: list[PathSegment],
    ) -> Optional[Reference]:
        """
        Write one object and everything it selects.

        Returns:
            Reference to the written record, or None when obj is not a typed
            object (nothing is written then)
        """
        if not isinstance(obj, Mapping):
            return None
        typename = obj.get("__typename")
        if not typename:
            return None

        object_id = obj.get("id")
        if object_id is None:
            object_id = "/".join([self.context.operation_id, *(str(p) for p in path)])

        ref = Reference(type=typename, id=str(object_id))
        record = self.records.get(ref.key)
        if record is None:
            record = {"__typename": typename}
            self.records[ref.key] = record
            logger.debug(f"Created record {ref.key}")
        self.touched.add(ref.key)

        self._write_selection_set(selection_set, obj, record, path)
        return ref

    def _write_selection_set(
        self,
        selection_set: SelectionSetNode,
        obj: Mapping[str, Any],
        record: dict[str, Any],
        path: list[PathSegment],
    ) -> None:
        for selection in selection_set.selections:
            if self.context.is_skipped(selection):
                continue

            if isinstance(selection, FieldNode):
                self._write_field(selection, obj, record, path)
            elif isinstance(selection, FragmentSpreadNode):
                # same object, same path: fragment fields land in the same record
                fragment = self.context.get_fragment(selection.name.value)
                self._write_selection_set(fragment.selection_set, obj, record, path)
            elif isinstance(selection, InlineFragmentNode):
                if type_condition_matches(selection.type_condition, obj.get("__typename")):
                    self._write_selection_set(selection.selection_set, obj, record, path)

    def _write_field(
        self,
        field: FieldNode,
        obj: Mapping[str, Any],
        record: dict[str, Any],
        path: list[PathSegment],
    ) -> None:
        name = field.name.value
        key = response_name(field)
        present = key in obj
        value = obj.get(key)

        if field.selection_set is None:
            if present:
                record[name] = copy.deepcopy(value) if isinstance(value, (dict, list)) else value
            else:
                # an unset leaf reads back as missing
                record.pop(name, None)
            return

        if isinstance(value, list):
            record[name] = [
                self.write(field.selection_set, item, [*path, name, index])
                for index, item in enumerate(value)
            ]
        elif value is not None:
            record[name] = self.write(field.selection_set, value, [*path, name])
        elif present and self.null_clears_reference:
            record[name] = None
