"""
Visit context shared by the selection reader and writer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from graphql.language import (
    DocumentNode,
    FragmentDefinitionNode,
    NamedTypeNode,
    OperationDefinitionNode,
    SelectionNode,
)

from ..core.directives import should_skip
from ..core.document import get_fragment_map
from ..core.errors import FragmentNotFoundError
from ..core.values import merge_variables


@dataclass
class SelectionContext:
    """
    Everything a selection walk needs besides the store itself.

    Contains:
    - operation_id: key of the operation being read or written
    - fragments: fragment definitions of the document by name
    - variables: caller variables merged over declared defaults
    """
    operation_id: str
    fragments: dict[str, FragmentDefinitionNode] = field(default_factory=dict)
    variables: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_operation(
        cls,
        document: DocumentNode,
        operation: OperationDefinitionNode,
        operation_id: str,
        variables: Optional[dict[str, Any]],
    ) -> "SelectionContext":
        return cls(
            operation_id=operation_id,
            fragments=get_fragment_map(document),
            variables=merge_variables(operation, variables),
        )

    def get_fragment(self, name: str) -> FragmentDefinitionNode:
        fragment = self.fragments.get(name)
        if fragment is None:
            raise FragmentNotFoundError(name)
        return fragment

    def is_skipped(self, selection: SelectionNode) -> bool:
        return should_skip(selection.directives, self.variables)


def type_condition_matches(
    type_condition: Optional[NamedTypeNode], typename: Optional[str]
) -> bool:
    """An inline fragment applies when untyped or when it names the object's type."""
    if type_condition is None:
        return True
    return type_condition.name.value == typename
