"""
Context model: dotted-path lookups into the caller-supplied context.

A context maps top-level names to context values: strings, integers,
floats, booleans, objects (mappings with string keys) and lists.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from .errors import InvalidVariableAccessError, NotAnObjectError, VariableNotFoundError
from .model import SCALAR_TYPES, Value, ValueType, type_name, type_of

# Caller-supplied context: name -> context value
Context = Mapping[str, Any]


def resolve(path: str, context: Context) -> Any:
    """
    Resolves a dotted path (user.address.city) against the context.

    The first component is looked up in the context itself, every
    following component in the object produced by the previous one.

    Args:
        path: Dotted variable path
        context: Context to look up in

    Returns:
        Resolved context value of any type (lists and objects included)

    Raises:
        VariableNotFoundError: Component is missing
        NotAnObjectError: Key lookup on a non-object value
    """
    components = path.split(".")
    head = components[0]
    if head not in context:
        raise VariableNotFoundError(path, head)
    current = context[head]

    for index, component in enumerate(components[1:], start=1):
        if type_of(current) is not ValueType.OBJECT:
            raise NotAnObjectError(".".join(components[:index]), component)
        if component not in current:
            raise VariableNotFoundError(path, component)
        current = current[component]

    return current


def resolve_value(path: str, context: Context) -> Value:
    """
    Resolves a dotted path that must produce a scalar value.

    Raises:
        InvalidVariableAccessError: Path resolves to an object, a list or
            a value type the engine does not support
    """
    value = resolve(path, context)
    if type_of(value) not in SCALAR_TYPES:
        raise InvalidVariableAccessError(path, type_name(value))
    return value


def bind(context: Context, name: str, value: Any) -> Dict[str, Any]:
    """
    Returns a copy of the context with name bound to value.

    The binding shadows any existing value of the same name; the
    original context is left untouched.
    """
    child = dict(context)
    child[name] = value
    return child


__all__ = ["Context", "resolve", "resolve_value", "bind"]
