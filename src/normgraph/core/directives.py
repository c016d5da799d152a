"""
Built-in @skip / @include directive evaluation.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from graphql.language import DirectiveNode

from .values import resolve_value_node


def _find_directive(
    directives: Sequence[DirectiveNode], name: str
) -> Optional[DirectiveNode]:
    return next((d for d in directives if d.name.value == name), None)


def _get_if(directive: DirectiveNode, variables: Mapping[str, Any]) -> Any:
    """Value of the directive's `if` argument, False when absent."""
    arg = next((a for a in directive.arguments or () if a.name.value == "if"), None)
    if arg is None:
        return False
    return resolve_value_node(arg.value, variables)


def should_skip(
    directives: Optional[Sequence[DirectiveNode]],
    variables: Mapping[str, Any],
) -> bool:
    """
    Decide whether a selection is excluded by @skip / @include.

    | skip | include | skipped when                         |
    |------|---------|--------------------------------------|
    | -    | -       | never                                |
    | yes  | -       | skip.if is true                      |
    | -    | yes     | include.if is false                  |
    | yes  | yes     | not (skip.if false and include.if true) |

    @skip wins over @include when both are present.
    """
    if not directives:
        return False

    skip = _find_directive(directives, "skip")
    include = _find_directive(directives, "include")

    if skip is None and include is None:
        return False
    if include is None:
        return _get_if(skip, variables) is True
    if skip is None:
        return _get_if(include, variables) is False
    return not (
        _get_if(skip, variables) is False and _get_if(include, variables) is True
    )
