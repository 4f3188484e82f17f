"""
datatypes/exceptions.py
-----------------------
Error taxonomy for datatype resolution.

    DataTypeError
    ├── ConfigurationError         – one resolution call failed
    │   ├── UnsettablePropertyError
    │   ├── MalformedDescriptionError
    │   └── ParameterCountError
    └── InitializationError        – the whole factory is unusable

An unrecognised type name is deliberately *not* an error: it resolves to
:class:`~datatypes.base.UnknownType`.
"""
from __future__ import annotations


class DataTypeError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(DataTypeError):
    """Raised when a description cannot be applied to the resolved type."""


class UnsettablePropertyError(ConfigurationError):
    """Raised when a ``{key:value}`` property has no setter on the resolved type."""

    def __init__(self, property_name: str, type_kind: str, reason: str | None = None) -> None:
        self.property_name = property_name
        self.type_kind = type_kind
        message = f"Unknown property '{property_name}' for {type_kind}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MalformedDescriptionError(ConfigurationError):
    """Raised when a property token is not of the form ``key:value``."""

    def __init__(self, description: str, token: str) -> None:
        self.description = description
        self.token = token
        super().__init__(
            f"Malformed property '{token}' in type description {description!r}; "
            f"expected 'name:value'"
        )


class ParameterCountError(ConfigurationError):
    """Raised by ``DataType.validate()`` when the parameter count is out of range."""

    def __init__(self, type_kind: str, count: int, minimum: int, maximum: int | None) -> None:
        self.type_kind = type_kind
        self.count = count
        upper = "unbounded" if maximum is None else str(maximum)
        super().__init__(
            f"{type_kind} takes between {minimum} and {upper} parameter(s), got {count}"
        )


class InitializationError(DataTypeError):
    """Raised when descriptor discovery or registration fails for a factory."""
