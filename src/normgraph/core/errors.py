"""
Custom exceptions for the normgraph cache.
"""

from __future__ import annotations

from typing import Optional


class NormgraphError(Exception):
    """Base exception for all normgraph errors."""
    pass


class MissingOperationError(NormgraphError):
    """Raised when a document has no usable operation definition."""

    def __init__(self, operation: Optional[str] = None):
        self.operation = operation
        if operation:
            super().__init__(f"Document has no {operation} operation")
        else:
            super().__init__("Document has no operation definition")


class UnnamedOperationError(NormgraphError):
    """Raised when an operation id is requested for an anonymous operation."""

    def __init__(self):
        super().__init__("Operation needs a name to be cached")


class FragmentNotFoundError(NormgraphError):
    """Raised when a fragment spread names an undefined fragment."""

    def __init__(self, fragment_name: str):
        self.fragment_name = fragment_name
        super().__init__(f"Cannot find fragment definition for '{fragment_name}'")


class IllegalSelectionError(NormgraphError):
    """Raised when a selection set is applied to a scalar value."""

    def __init__(self, field_name: str, value: object = None):
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"Illegal selection on '{field_name}': "
            f"expected a reference or a list of references, got {type(value).__name__}"
        )


class UnboundVariableError(NormgraphError):
    """Raised when a value node refers to a variable that is not bound."""

    def __init__(self, variable_name: str, bound: Optional[list[str]] = None):
        self.variable_name = variable_name
        self.bound = bound or []
        super().__init__(
            f"Variable '${variable_name}' is not defined (bound: {', '.join(self.bound) or 'none'})"
        )


class UnsupportedValueNodeError(NormgraphError):
    """Raised when the value resolver meets an unknown value node kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unsupported value node: {kind}")


class SnapshotError(NormgraphError):
    """Raised when a cache snapshot cannot be loaded."""
    pass
