"""
Value node resolution.

Turns GraphQL literal / variable value nodes into plain Python values and
collects the default values declared on an operation's variables.
"""

from __future__ import annotations

from typing import Any, Mapping

from graphql.language import (
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    OperationDefinitionNode,
    StringValueNode,
    ValueNode,
    VariableNode,
)

from .errors import UnboundVariableError, UnsupportedValueNodeError


def resolve_value_node(value_node: ValueNode, variables: Mapping[str, Any]) -> Any:
    """
    Evaluate a value node against bound variables.

    Examples:
        $limit            with {"limit": 10}  -> 10
        [1, $x]           with {"x": 2}       -> [1, 2]
        {a: 1, b: "two"}                      -> {"a": 1, "b": "two"}
        ENUM_VALUE                            -> "ENUM_VALUE"

    Raises:
        UnboundVariableError: a referenced variable is not bound
    """
    if isinstance(value_node, VariableNode):
        name = value_node.name.value
        # presence, not truthiness: 0, False and "" are valid bindings
        if name not in variables:
            raise UnboundVariableError(name, sorted(variables))
        return variables[name]
    elif isinstance(value_node, ListValueNode):
        return [resolve_value_node(v, variables) for v in value_node.values]
    elif isinstance(value_node, ObjectValueNode):
        return {
            f.name.value: resolve_value_node(f.value, variables)
            for f in value_node.fields
        }
    elif isinstance(value_node, (StringValueNode, EnumValueNode)):
        return value_node.value
    elif isinstance(value_node, IntValueNode):
        return int(value_node.value, 10)
    elif isinstance(value_node, FloatValueNode):
        return float(value_node.value)
    elif isinstance(value_node, BooleanValueNode):
        return value_node.value
    elif isinstance(value_node, NullValueNode):
        return None
    raise UnsupportedValueNodeError(type(value_node).__name__)


def extract_default_values(operation: OperationDefinitionNode) -> dict[str, Any]:
    """
    Collect default values of an operation's variable definitions.

    Defaults cannot reference other variables, so they are resolved against
    an empty environment. Variables without a default are left out.
    """
    defaults: dict[str, Any] = {}
    for definition in operation.variable_definitions or ():
        if definition.default_value is None:
            continue
        defaults[definition.variable.name.value] = resolve_value_node(
            definition.default_value, {}
        )
    return defaults


def merge_variables(
    operation: OperationDefinitionNode,
    variables: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Effective variables of a call: declared defaults overridden by caller values."""
    return {**extract_default_values(operation), **(variables or {})}
