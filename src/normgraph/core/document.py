"""
Helpers for navigating parsed GraphQL documents.

Parsing itself is done by graphql-core; these helpers only look things up
in the resulting AST.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from graphql import parse
from graphql.language import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    OperationDefinitionNode,
    OperationType,
)

from .errors import MissingOperationError


def parse_document(source: str) -> DocumentNode:
    """Parse GraphQL source text into a document."""
    return parse(source, no_location=True)


def load_document(path: Union[Path, str]) -> DocumentNode:
    """Parse a .graphql file."""
    return parse_document(Path(path).read_text())


def find_query_operation(document: DocumentNode) -> OperationDefinitionNode:
    """
    First query operation of the document.

    Raises:
        MissingOperationError: the document defines no query
    """
    for definition in document.definitions:
        if (
            isinstance(definition, OperationDefinitionNode)
            and definition.operation == OperationType.QUERY
        ):
            return definition
    raise MissingOperationError("query")


def get_fragment_map(document: DocumentNode) -> dict[str, FragmentDefinitionNode]:
    """Fragment definitions of the document by name."""
    return {
        definition.name.value: definition
        for definition in document.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


def response_name(field: FieldNode) -> str:
    """Key of the field in a response: its alias if any, else its name."""
    return field.alias.value if field.alias else field.name.value
