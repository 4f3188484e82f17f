"""
datatypes/descriptor.py
-----------------------
Registration record for one type implementation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from datatypes.base import PRIORITY_DEFAULT, DataType


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Immutable description of a registrable type implementation.

    Attributes:
        name:     Canonical type name.
        factory:  Zero-argument callable returning a fresh default instance.
        aliases:  Secondary names resolving to the same implementation.
        priority: Higher wins among implementations sharing a name.
    """
    name: str
    factory: Callable[[], DataType]
    aliases: tuple[str, ...] = ()
    priority: int = PRIORITY_DEFAULT

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("TypeDescriptor requires a non-empty name")
        if not callable(self.factory):
            raise TypeError(f"factory for '{self.name}' is not callable")
        object.__setattr__(self, "aliases", tuple(self.aliases))

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical name followed by aliases."""
        return (self.name, *self.aliases)

    def create(self) -> DataType:
        return self.factory()

    @classmethod
    def of(cls, type_cls: type[DataType]) -> "TypeDescriptor":
        """
        Build a descriptor from a :class:`DataType` subclass's class attributes.

        The class's ``settable_properties`` table is checked here so a bad
        table fails at registration rather than on first use.

        Raises:
            ValueError: On an empty name or a property name that is not an identifier.
            TypeError:  On a property converter that is not callable.
        """
        for prop, converter in type_cls.settable_properties.items():
            if not prop.isidentifier() or prop.startswith("_"):
                raise ValueError(
                    f"{type_cls.__qualname__}: invalid settable property name {prop!r}"
                )
            if not callable(converter):
                raise TypeError(
                    f"{type_cls.__qualname__}: converter for '{prop}' is not callable"
                )
        return cls(
            name=type_cls.name,
            factory=type_cls,
            aliases=tuple(type_cls.aliases),
            priority=type_cls.priority,
        )

    def __str__(self) -> str:
        factory_name = getattr(self.factory, "__qualname__", repr(self.factory))
        return f"{self.name} (priority {self.priority}, {factory_name})"
