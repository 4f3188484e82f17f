"""
datatypes/factory.py
--------------------
Resolves textual type descriptions into configured :class:`DataType` instances.

Design Decisions:
    * A factory owns its :class:`TypeRegistry`; callers hold the factory and
      pass it around. ``get_default_factory()`` offers a lazily built
      process-wide instance for convenience.
    * Descriptors come from an injected ``descriptor_source`` callable
      (the built-in table by default). Any failure while reading or
      registering them raises :class:`InitializationError` and the factory
      serves nothing until a later ``reset()`` succeeds.
    * ``reset()`` builds a complete new registry before swapping the
      reference, so concurrent resolutions see either the old registry or
      the new one.
    * Every call returns a fresh instance; nothing is cached.
"""
from __future__ import annotations

import threading
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Iterable
from uuid import UUID

from config import CONFIG
from datatypes.base import DataType, UnknownType, type_kind
from datatypes.core_types import builtin_descriptors
from datatypes.description import parse_description
from datatypes.descriptor import TypeDescriptor
from datatypes.dialect import Dialect, get_dialect
from datatypes.exceptions import (
    ConfigurationError,
    InitializationError,
    UnsettablePropertyError,
)
from datatypes.properties import set_property
from datatypes.registry import TypeRegistry
from logger import get_logger

log = get_logger(__name__)

DescriptorSource = Callable[[], Iterable[TypeDescriptor]]
PropertySetter = Callable[[Any, str, str], None]

# Provisional mapping used by from_object().
# Checked in order: bool before int, datetime before date.
_PYTHON_TYPE_NAMES: tuple[tuple[type, str], ...] = (
    (bool, "boolean"),
    (int, "bigint"),
    (float, "double"),
    (Decimal, "decimal"),
    (str, "varchar"),
    (datetime, "datetime"),
    (date, "date"),
    (time, "time"),
    (bytes, "blob"),
    (bytearray, "blob"),
    (UUID, "uuid"),
)


def default_dialect() -> Dialect:
    """Dialect named by ``DATATYPE_DEFAULT_DIALECT``."""
    return get_dialect(CONFIG.resolver.default_dialect)


class DataTypeFactory:
    """
    Maps descriptions such as ``"VARCHAR(255)"`` to configured type instances.

    Args:
        descriptor_source:   Callable returning the descriptors to register.
        property_setter:     ``(instance, name, value)`` callable used for
                             ``{name:value}`` properties.
        validate_parameters: When True, check each resolved type's parameter
                             count with ``DataType.validate()``.

    Raises:
        InitializationError: If the descriptor source or a registration fails.

    Example::

        factory = DataTypeFactory()
        dt = factory.from_description("decimal(10,2)")
        dt.parameters                    # ("10", "2")
        factory.true_literal(MYSQL)      # "1"
    """

    def __init__(
        self,
        descriptor_source: DescriptorSource = builtin_descriptors,
        *,
        property_setter: PropertySetter = set_property,
        validate_parameters: bool = False,
    ) -> None:
        self._descriptor_source = descriptor_source
        self._property_setter = property_setter
        self._validate_parameters = validate_parameters
        self._registry: TypeRegistry | None = self._build_registry()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _build_registry(self) -> TypeRegistry:
        registry = TypeRegistry()
        try:
            for descriptor in self._descriptor_source():
                registry.register(descriptor)
        except Exception as exc:
            log.error("Datatype discovery failed: %s", exc)
            raise InitializationError(
                f"Could not initialise the datatype registry: {exc}"
            ) from exc
        log.info("Datatype registry initialised with %d name(s).", len(registry))
        return registry

    def reset(self) -> None:
        """
        Discard the registry and rebuild it from the descriptor source.

        Types registered manually since construction are dropped. On failure
        the factory refuses every resolution until a later reset succeeds.

        Raises:
            InitializationError: If rebuilding fails.
        """
        try:
            registry = self._build_registry()
        except InitializationError:
            self._registry = None
            raise
        self._registry = registry

    @property
    def registry(self) -> TypeRegistry:
        """
        The current registry.

        Raises:
            InitializationError: If the last ``reset()`` failed.
        """
        registry = self._registry
        if registry is None:
            raise InitializationError(
                "Datatype factory is not initialised; the last reset() failed."
            )
        return registry

    # ------------------------------------------------------------------
    # Registry surface
    # ------------------------------------------------------------------

    def register(self, descriptor: TypeDescriptor | type[DataType]) -> None:
        """Register a descriptor, or a DataType subclass via ``TypeDescriptor.of``."""
        if isinstance(descriptor, type):
            descriptor = TypeDescriptor.of(descriptor)
        self.registry.register(descriptor)

    def unregister(self, name: str) -> bool:
        return self.registry.unregister(name)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def from_description(self, description: str) -> DataType:
        """
        Resolve *description* into a fresh, configured type instance.

        Unregistered names resolve to :class:`UnknownType` carrying the name
        as written.

        Raises:
            UnsettablePropertyError:   For a property the resolved type cannot take.
            MalformedDescriptionError: For a property token without ``name:``.
            ParameterCountError:       When validating and the count is out of range.
            InitializationError:       If the factory is not initialised.
        """
        registry = self.registry
        parsed = parse_description(description)

        descriptor = registry.first(parsed.name)
        if descriptor is None:
            log.debug("No datatype registered for '%s'; using UnknownType.", parsed.name)
            data_type: DataType = UnknownType(parsed.name)
        else:
            data_type = descriptor.create()

        for parameter in parsed.parameters:
            data_type.add_parameter(parameter)

        for key, value in parsed.properties.items():
            self._apply_property(data_type, key, value)

        if self._validate_parameters:
            data_type.validate()
        return data_type

    def _apply_property(self, data_type: DataType, key: str, value: str) -> None:
        try:
            self._property_setter(data_type, key, value)
        except ConfigurationError as exc:
            log.warning("Cannot apply property: %s", exc)
            raise
        except (AttributeError, TypeError, ValueError) as exc:
            log.warning("Cannot apply property '%s' to %s: %s", key, type_kind(data_type), exc)
            raise UnsettablePropertyError(key, type_kind(data_type), str(exc)) from exc

    def from_object(self, value: Any, dialect: Dialect | None = None) -> DataType:
        """
        Resolve the column type for a Python value.

        Known Python types map to a logical type name; anything else resolves
        to :class:`UnknownType` named after the value's class. *dialect* is
        accepted for call-site parity and not consulted.

        The Python-type table is provisional: dialect-aware value inference
        is still awaiting product clarification, so callers should not rely
        on a given value keeping its current mapping.
        """
        for python_type, type_name in _PYTHON_TYPE_NAMES:
            if isinstance(value, python_type):
                return self.from_description(type_name)
        return UnknownType(type(value).__name__)

    def true_literal(self, dialect: Dialect | None = None) -> str:
        return self.from_description("boolean").object_to_sql(True, dialect or default_dialect())

    def false_literal(self, dialect: Dialect | None = None) -> str:
        return self.from_description("boolean").object_to_sql(False, dialect or default_dialect())


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------

_default_factory: DataTypeFactory | None = None
_default_lock = threading.Lock()


def _build_default_factory() -> DataTypeFactory:
    return DataTypeFactory(validate_parameters=CONFIG.resolver.validate_parameters)


def get_default_factory() -> DataTypeFactory:
    """Return the process-wide factory, building it on first use."""
    global _default_factory
    factory = _default_factory
    if factory is None:
        with _default_lock:
            if _default_factory is None:
                _default_factory = _build_default_factory()
            factory = _default_factory
    return factory


def reset_default_factory() -> DataTypeFactory:
    """
    Replace the process-wide factory with a freshly built one.

    The new factory is fully built before it becomes visible. If building
    fails, the default is cleared and the next ``get_default_factory()``
    tries again.

    Raises:
        InitializationError: If the new factory cannot be built.
    """
    global _default_factory
    with _default_lock:
        try:
            factory = _build_default_factory()
        except InitializationError:
            _default_factory = None
            raise
        _default_factory = factory
    return factory
