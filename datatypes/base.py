"""
datatypes/base.py
-----------------
Base class for every resolvable column type, plus the fallback type used
when a description names nothing registered.

A concrete type declares its registration metadata as class attributes::

    class VarcharType(DataType):
        name = "varchar"
        aliases = ("character varying",)
        max_parameters = 1
        settable_properties = {"charset": str}

Instances are created fresh for every resolution and configured through
:meth:`DataType.add_parameter` and the ``settable_properties`` table.
"""
from __future__ import annotations

from typing import Any, Callable

from datatypes.dialect import GENERIC, Dialect
from datatypes.exceptions import ParameterCountError

PRIORITY_DEFAULT = 1
PRIORITY_DATABASE = 5

PropertyConverter = Callable[[str], Any]


def type_kind(obj: object) -> str:
    """Return the fully qualified class name of *obj*, e.g. ``datatypes.core_types.IntType``."""
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


class DataType:
    """
    A column type resolved from a textual description.

    Class attributes:
        name:                Canonical (lower-case) type name.
        aliases:             Other names that resolve to this type.
        priority:            Higher wins when several types share a name.
        min_parameters:      Fewest positional parameters accepted.
        max_parameters:      Most positional parameters accepted (None = any).
        settable_properties: ``{property: converter}`` for ``{key:value}`` syntax.
    """

    name: str = ""
    aliases: tuple[str, ...] = ()
    priority: int = PRIORITY_DEFAULT
    min_parameters: int = 0
    max_parameters: int | None = 0
    settable_properties: dict[str, PropertyConverter] = {}

    def __init__(self) -> None:
        self._parameters: list[str] = []

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> tuple[str, ...]:
        return tuple(self._parameters)

    def add_parameter(self, value: str) -> None:
        self._parameters.append(value)

    def validate(self) -> None:
        """
        Check the parameter count against ``min_parameters``/``max_parameters``.

        Raises:
            ParameterCountError: If the count is out of range.
        """
        count = len(self._parameters)
        too_few = count < self.min_parameters
        too_many = self.max_parameters is not None and count > self.max_parameters
        if too_few or too_many:
            raise ParameterCountError(
                type_kind(self), count, self.min_parameters, self.max_parameters
            )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        """Return the SQL column type text, e.g. ``VARCHAR(255)``."""
        base = self.name.upper()
        if self._parameters:
            return f"{base}({', '.join(self._parameters)})"
        return base

    def object_to_sql(self, value: Any, dialect: Dialect = GENERIC) -> str:
        """Render *value* as a SQL literal of this type."""
        if value is None:
            return "NULL"
        if isinstance(value, str):
            q = dialect.quote
            return f"{q}{value.replace(q, q * 2)}{q}"
        return str(value)

    def __str__(self) -> str:
        if self._parameters:
            return f"{self.name}({', '.join(self._parameters)})"
        return self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class UnknownType(DataType):
    """
    Fallback for descriptions whose name is not registered.

    Keeps the name exactly as written (case preserved) and accepts any
    number of parameters. Never registered in a registry.
    """

    max_parameters = None

    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        if self._parameters:
            return f"{self.name}({', '.join(self._parameters)})"
        return self.name
