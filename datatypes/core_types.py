"""
datatypes/core_types.py
-----------------------
Built-in column types and the default descriptor table.

All built-ins register at ``PRIORITY_DEFAULT`` so a database-specific
implementation registered at a higher priority replaces them for a name.
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from datatypes.base import DataType
from datatypes.descriptor import TypeDescriptor
from datatypes.dialect import GENERIC, Dialect
from datatypes.properties import to_bool, to_int


# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------

class BooleanType(DataType):
    name = "boolean"
    aliases = ("bool",)

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        return dialect.boolean_type

    def object_to_sql(self, value: Any, dialect: Dialect = GENERIC) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, str):
            value = to_bool(value)
        flag = bool(value)
        if dialect.supports_boolean:
            return "TRUE" if flag else "FALSE"
        return "1" if flag else "0"


# ---------------------------------------------------------------------------
# Numeric
# ---------------------------------------------------------------------------

class _IntegerType(DataType):
    max_parameters = 1  # display width
    settable_properties = {
        "unsigned": to_bool,
        "auto_increment": to_bool,
        "start_with": to_int,
        "increment_by": to_int,
    }

    def __init__(self) -> None:
        super().__init__()
        self.unsigned = False
        self.auto_increment = False
        self.start_with: int | None = None
        self.increment_by: int | None = None

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        text = super().to_database_type(dialect)
        if self.unsigned and dialect.name == "mysql":
            text += " UNSIGNED"
        return text


class TinyIntType(_IntegerType):
    name = "tinyint"


class SmallIntType(_IntegerType):
    name = "smallint"
    aliases = ("int2",)


class IntType(_IntegerType):
    name = "int"
    aliases = ("integer", "int4", "mediumint")


class BigIntType(_IntegerType):
    name = "bigint"
    aliases = ("int8",)


class DecimalType(DataType):
    name = "decimal"
    aliases = ("numeric", "fixed", "number")
    max_parameters = 2


class FloatType(DataType):
    name = "float"
    aliases = ("real",)
    max_parameters = 2


class DoubleType(DataType):
    name = "double"
    aliases = ("double precision", "float8")
    max_parameters = 2

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        if dialect.name == "postgresql":
            return "DOUBLE PRECISION"
        return super().to_database_type(dialect)


# ---------------------------------------------------------------------------
# Character
# ---------------------------------------------------------------------------

class _CharacterType(DataType):
    max_parameters = 1
    settable_properties = {"charset": str, "collation": str}

    def __init__(self) -> None:
        super().__init__()
        self.charset: str | None = None
        self.collation: str | None = None

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        text = super().to_database_type(dialect)
        if dialect.name == "mysql":
            if self.charset:
                text += f" CHARACTER SET {self.charset}"
            if self.collation:
                text += f" COLLATE {self.collation}"
        return text


class CharType(_CharacterType):
    name = "char"
    aliases = ("character",)


class VarcharType(_CharacterType):
    name = "varchar"
    aliases = ("character varying", "varchar2")


class NVarcharType(_CharacterType):
    name = "nvarchar"
    aliases = ("nvarchar2", "national character varying")


class ClobType(_CharacterType):
    name = "clob"
    aliases = ("text", "tinytext", "mediumtext", "longtext")
    max_parameters = 0

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        if dialect.name == "mysql":
            return "LONGTEXT"
        if dialect.name == "postgresql":
            return "TEXT"
        if dialect.name == "mssql":
            return "NVARCHAR(MAX)"
        return "CLOB"


# ---------------------------------------------------------------------------
# Binary
# ---------------------------------------------------------------------------

class BlobType(DataType):
    name = "blob"
    aliases = ("tinyblob", "mediumblob", "longblob", "bytea", "varbinary", "binary")
    max_parameters = 1

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        if dialect.name == "postgresql":
            return "BYTEA"
        if dialect.name == "mysql":
            return "LONGBLOB"
        if dialect.name == "mssql":
            return "VARBINARY(MAX)"
        return "BLOB"


# ---------------------------------------------------------------------------
# Temporal
# ---------------------------------------------------------------------------

class _TemporalType(DataType):
    def object_to_sql(self, value: Any, dialect: Dialect = GENERIC) -> str:
        if isinstance(value, (date, time)):
            value = value.isoformat(sep=" ") if isinstance(value, datetime) else value.isoformat()
        return super().object_to_sql(value, dialect)


class DateType(_TemporalType):
    name = "date"


class TimeType(_TemporalType):
    name = "time"
    max_parameters = 1


class DateTimeType(_TemporalType):
    name = "datetime"
    aliases = ("timestamp", "smalldatetime", "datetime2")
    max_parameters = 1

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        if dialect.name in ("postgresql", "oracle"):
            precision = f"({self.parameters[0]})" if self.parameters else ""
            return f"TIMESTAMP{precision}"
        return super().to_database_type(dialect)


# ---------------------------------------------------------------------------
# Other
# ---------------------------------------------------------------------------

class UUIDType(DataType):
    name = "uuid"
    aliases = ("uniqueidentifier",)

    def to_database_type(self, dialect: Dialect = GENERIC) -> str:
        if dialect.name == "postgresql":
            return "UUID"
        if dialect.name == "mssql":
            return "UNIQUEIDENTIFIER"
        return "CHAR(36)"

    def object_to_sql(self, value: Any, dialect: Dialect = GENERIC) -> str:
        return super().object_to_sql(None if value is None else str(value), dialect)


BUILTIN_TYPES: tuple[type[DataType], ...] = (
    BooleanType,
    TinyIntType,
    SmallIntType,
    IntType,
    BigIntType,
    DecimalType,
    FloatType,
    DoubleType,
    CharType,
    VarcharType,
    NVarcharType,
    ClobType,
    BlobType,
    DateType,
    TimeType,
    DateTimeType,
    UUIDType,
)


def builtin_descriptors() -> list[TypeDescriptor]:
    """Default descriptor source for :class:`~datatypes.factory.DataTypeFactory`."""
    return [TypeDescriptor.of(type_cls) for type_cls in BUILTIN_TYPES]
