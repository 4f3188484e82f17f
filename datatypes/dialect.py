"""
datatypes/dialect.py
--------------------
Lightweight dialect descriptions used when rendering types and literals.

The factory treats a :class:`Dialect` as an opaque value and passes it
through; only :class:`~datatypes.base.DataType` rendering looks inside.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Dialect:
    """
    Rendering traits of one SQL dialect.

    Attributes:
        name:             Lower-case identifier, e.g. ``"mysql"``.
        supports_boolean: True when ``TRUE``/``FALSE`` are valid literals.
        boolean_type:     Column type used for ``boolean``.
        quote:            String literal quote character.
    """
    name: str
    supports_boolean: bool = True
    boolean_type: str = "BOOLEAN"
    quote: str = "'"


GENERIC = Dialect("generic")
MYSQL = Dialect("mysql", supports_boolean=False, boolean_type="BIT(1)")
POSTGRESQL = Dialect("postgresql")
ORACLE = Dialect("oracle", supports_boolean=False, boolean_type="NUMBER(1)")
MSSQL = Dialect("mssql", supports_boolean=False, boolean_type="BIT")

_DIALECTS: dict[str, Dialect] = {
    d.name: d for d in (GENERIC, MYSQL, POSTGRESQL, ORACLE, MSSQL)
}


def get_dialect(name: str) -> Dialect:
    """
    Look up a predefined dialect by name (case-insensitive).

    Raises:
        ValueError: If *name* is not a known dialect.
    """
    try:
        return _DIALECTS[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(_DIALECTS))
        raise ValueError(f"Unknown dialect '{name}'. Known dialects: {known}") from None
