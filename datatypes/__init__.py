"""datatypes/__init__.py"""
from datatypes.exceptions import (
    DataTypeError,
    ConfigurationError,
    UnsettablePropertyError,
    MalformedDescriptionError,
    ParameterCountError,
    InitializationError,
)
from datatypes.dialect import Dialect, get_dialect, GENERIC, MYSQL, POSTGRESQL, ORACLE, MSSQL
from datatypes.base import DataType, UnknownType, PRIORITY_DEFAULT, PRIORITY_DATABASE
from datatypes.properties import set_property
from datatypes.descriptor import TypeDescriptor
from datatypes.registry import TypeRegistry
from datatypes.description import TypeDescription, parse_description
from datatypes.core_types import builtin_descriptors
from datatypes.factory import DataTypeFactory, get_default_factory, reset_default_factory

__all__ = [
    "DataTypeError",
    "ConfigurationError",
    "UnsettablePropertyError",
    "MalformedDescriptionError",
    "ParameterCountError",
    "InitializationError",
    "Dialect",
    "get_dialect",
    "GENERIC",
    "MYSQL",
    "POSTGRESQL",
    "ORACLE",
    "MSSQL",
    "DataType",
    "UnknownType",
    "PRIORITY_DEFAULT",
    "PRIORITY_DATABASE",
    "set_property",
    "TypeDescriptor",
    "TypeRegistry",
    "TypeDescription",
    "parse_description",
    "builtin_descriptors",
    "DataTypeFactory",
    "get_default_factory",
    "reset_default_factory",
]
