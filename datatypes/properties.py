"""
datatypes/properties.py
-----------------------
Applies ``{name:value}`` properties from a type description to a resolved
instance.

Lookup order:
    1. The class's ``settable_properties`` table (``name → converter``).
       The converter turns the raw string into the attribute value.
    2. A plain, public, non-callable attribute already present on the
       instance itself and not declared on its class. The raw string is
       assigned unchanged.

Anything else is an :class:`UnsettablePropertyError`.
"""
from __future__ import annotations

from typing import Any

from datatypes.base import type_kind
from datatypes.exceptions import UnsettablePropertyError

_TRUE_WORDS = frozenset({"true", "1", "yes", "y", "on", "t"})
_FALSE_WORDS = frozenset({"false", "0", "no", "n", "off", "f"})


def to_bool(value: str) -> bool:
    """
    Convert a textual flag to ``bool``.

    Examples::

        to_bool("true")  →  True
        to_bool("OFF")   →  False
        to_bool("maybe") →  ValueError
    """
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def to_int(value: str) -> int:
    return int(value.strip())


def set_property(instance: Any, name: str, value: str) -> None:
    """
    Set property *name* on *instance* from its string *value*.

    Args:
        instance: A resolved type instance.
        name:     Property name as written in the description.
        value:    Raw property value (already trimmed).

    Raises:
        UnsettablePropertyError: If the instance has no such settable property
                                 or the converter rejects *value*.
    """
    table = getattr(type(instance), "settable_properties", None) or {}
    converter = table.get(name)
    if converter is not None:
        try:
            converted = converter(value)
        except (TypeError, ValueError) as exc:
            raise UnsettablePropertyError(name, type_kind(instance), str(exc)) from exc
        setattr(instance, name, converted)
        return

    # Class-level attributes (name, priority, methods...) are never settable.
    attrs = getattr(instance, "__dict__", {})
    if (
        name.isidentifier()
        and not name.startswith("_")
        and not hasattr(type(instance), name)
        and name in attrs
        and not callable(attrs[name])
    ):
        setattr(instance, name, value)
        return

    raise UnsettablePropertyError(name, type_kind(instance))
