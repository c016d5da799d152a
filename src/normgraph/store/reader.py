"""
Selection reader - projects normalized records into a query-shaped tree.

Handles:
- Following references and lists of references into nested objects
- Flattening fragment spreads and matching inline fragments
- Collecting the locations of selected fields that have no stored value
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
from ..core.errors import IllegalSelectionError
from ..core.types import Reference
from .context import SelectionContext, type_condition_matches

logger = logging.getLogger(__name__)

PathSegment = Union[str, int]


class SelectionReader:
    """
    Denormalizes records following a selection set.

    Usage:
        reader = SelectionReader(records, context)
        data = reader.read(operation.selection_set, records["Query:0"])
        if reader.missing_data_locations:
            ...  # incomplete, refetch
    """

    def __init__(
        self,
        records: Mapping[str, dict[str, Any]],
        context: SelectionContext,
        location_style: str = "field",
    ):
        self.records = records
        self.context = context
        self.location_style = location_style
        self.missing_data_locations: list[str] = []

    def read(self, selection_set: SelectionSetNode, record: dict[str, Any]) -> dict[str, Any]:
        return self._read_selection_set(selection_set, record, [])

    def _read_selection_set(
        self,
        selection_set: SelectionSetNode,
        record: dict[str, Any],
        path: list[PathSegment],
    ) -> dict[str, Any]:
        result: dict[str, Any] = {}

        for selection in selection_set.selections:
            if self.context.is_skipped(selection):
                continue

            if isinstance(selection, FieldNode):
                self._read_field(selection, record, path, result)
            elif isinstance(selection, FragmentSpreadNode):
                fragment = self.context.get_fragment(selection.name.value)
                result.update(
                    self._read_selection_set(fragment.selection_set, record, path)
                )
            elif isinstance(selection, InlineFragmentNode):
                if type_condition_matches(selection.type_condition, record.get("__typename")):
                    result.update(
                        self._read_selection_set(selection.selection_set, record, path)
                    )

        return result

    def _read_field(
        self,
        field: FieldNode,
        record: dict[str, Any],
        path: list[PathSegment],
        result: dict[str, Any],
    ) -> None:
        name = field.name.value
        key = response_name(field)
        field_path = [*path, key]

        if name not in record:
            self._add_missing(name, field_path)
            return

        value = record[name]

        if field.selection_set is None:
            # scalars are returned as stored; JSON scalars are copied
            result[key] = copy.deepcopy(value) if isinstance(value, (dict, list)) else value
            return

        if value is None:
            result[key] = None
        elif isinstance(value, Reference):
            result[key] = self._follow(value, field, field_path)
        elif isinstance(value, list):
            items = []
            for index, item in enumerate(value):
                if item is None:
                    items.append(None)
                elif isinstance(item, Reference):
                    items.append(self._follow(item, field, [*field_path, index]))
                else:
                    raise IllegalSelectionError(name, item)
            result[key] = items
        else:
            raise IllegalSelectionError(name, value)

    def _follow(
        self,
        ref: Reference,
        field: FieldNode,
        path: list[PathSegment],
    ) -> Optional[dict[str, Any]]:
        target = self.records.get(ref.key)
        if target is None:
            logger.debug(f"Dangling reference {ref.key} at {self._format_path(path)}")
            self._add_missing(field.name.value, path)
            return None
        return self._read_selection_set(field.selection_set, target, path)

    def _add_missing(self, name: str, path: list[PathSegment]) -> None:
        if self.location_style == "path":
            self.missing_data_locations.append(self._format_path(path))
        else:
            self.missing_data_locations.append(name)

    @staticmethod
    def _format_path(path: list[PathSegment]) -> str:
        return ".".join(str(segment) for segment in path)
