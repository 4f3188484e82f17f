"""
tests/test_factory.py
---------------------
Unit tests for datatypes/factory.py.
Run with: python -m pytest tests/
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable
from uuid import uuid4

import pytest

from datatypes.base import PRIORITY_DATABASE, DataType, UnknownType
from datatypes.core_types import (
    BigIntType,
    BooleanType,
    DateTimeType,
    DateType,
    DecimalType,
    IntType,
    UUIDType,
    VarcharType,
    builtin_descriptors,
)
from datatypes.descriptor import TypeDescriptor
from datatypes.dialect import GENERIC, MYSQL, ORACLE, POSTGRESQL
from datatypes.exceptions import (
    InitializationError,
    MalformedDescriptionError,
    ParameterCountError,
    UnsettablePropertyError,
)
from datatypes.factory import (
    DataTypeFactory,
    get_default_factory,
    reset_default_factory,
)


class CustomType(DataType):
    name = "custom"
    max_parameters = None
    settable_properties = {"scale": str, "unsigned": str}

    def __init__(self) -> None:
        super().__init__()
        self.scale: str | None = None
        self.unsigned: str | None = None


class MySQLVarcharType(VarcharType):
    priority = PRIORITY_DATABASE


class OtherVarcharType(VarcharType):
    pass


@pytest.fixture
def factory() -> DataTypeFactory:
    f = DataTypeFactory()
    f.register(CustomType)
    return f


class TestFromDescription:
    def test_case_insensitive_name(self, factory: DataTypeFactory) -> None:
        upper = factory.from_description("VARCHAR(10)")
        lower = factory.from_description("varchar(10)")
        assert type(upper) is type(lower) is VarcharType
        assert upper.parameters == lower.parameters == ("10",)

    def test_alias_resolves(self, factory: DataTypeFactory) -> None:
        assert isinstance(factory.from_description("INTEGER"), IntType)

    def test_parameters_in_order(self, factory: DataTypeFactory) -> None:
        dt = factory.from_description("decimal(10,2)")
        assert isinstance(dt, DecimalType)
        assert dt.parameters == ("10", "2")

    def test_properties_applied(self, factory: DataTypeFactory) -> None:
        dt = factory.from_description("custom{scale:2,unsigned:true}")
        assert isinstance(dt, CustomType)
        assert dt.scale == "2"
        assert dt.unsigned == "true"

    def test_typed_property(self, factory: DataTypeFactory) -> None:
        dt = factory.from_description("int(11){unsigned:true}")
        assert dt.unsigned is True
        assert dt.parameters == ("11",)

    def test_integer_properties(self, factory: DataTypeFactory) -> None:
        dt = factory.from_description("bigint{auto_increment:true, start_with:100, increment_by:5}")
        assert dt.auto_increment is True
        assert dt.start_with == 100
        assert dt.increment_by == 5

    def test_non_integer_start_with_fails(self, factory: DataTypeFactory) -> None:
        with pytest.raises(UnsettablePropertyError) as info:
            factory.from_description("int{start_with:ten}")
        assert info.value.property_name == "start_with"

    def test_unknown_property_fails(self, factory: DataTypeFactory) -> None:
        with pytest.raises(UnsettablePropertyError) as info:
            factory.from_description("custom{scale:2,precision:4}")
        assert info.value.property_name == "precision"
        assert info.value.type_kind == f"{CustomType.__module__}.CustomType"
        assert "precision" in str(info.value)

    def test_malformed_property_fails(self, factory: DataTypeFactory) -> None:
        with pytest.raises(MalformedDescriptionError):
            factory.from_description("custom{scale}")

    def test_fresh_instance_per_call(self, factory: DataTypeFactory) -> None:
        a = factory.from_description("varchar(10)")
        b = factory.from_description("varchar(10)")
        assert a is not b
        a.add_parameter("20")
        assert b.parameters == ("10",)


class TestFallback:
    def test_unknown_name_preserved(self, factory: DataTypeFactory) -> None:
        dt = factory.from_description("frobnicate")
        assert isinstance(dt, UnknownType)
        assert dt.name == "frobnicate"

    def test_unknown_name_keeps_casing_and_parameters(self, factory: DataTypeFactory) -> None:
        dt = factory.from_description("FrobNicate(3, 4)")
        assert isinstance(dt, UnknownType)
        assert dt.name == "FrobNicate"
        assert dt.parameters == ("3", "4")

    def test_unknown_type_rejects_properties(self, factory: DataTypeFactory) -> None:
        with pytest.raises(UnsettablePropertyError) as info:
            factory.from_description("frobnicate{size:1}")
        assert info.value.type_kind.endswith("UnknownType")

    def test_unknown_type_name_not_settable(self, factory: DataTypeFactory) -> None:
        with pytest.raises(UnsettablePropertyError) as info:
            factory.from_description("frobnicate{name:varchar}")
        assert info.value.property_name == "name"

    def test_unregister_falls_back(self, factory: DataTypeFactory) -> None:
        factory.register(MySQLVarcharType)
        assert factory.unregister("varchar")
        assert isinstance(factory.from_description("varchar(10)"), UnknownType)
        assert isinstance(factory.from_description("varchar2(10)"), VarcharType)


class TestPriority:
    def test_highest_priority_wins(self, factory: DataTypeFactory) -> None:
        factory.register(MySQLVarcharType)
        for _ in range(5):
            assert type(factory.from_description("varchar(10)")) is MySQLVarcharType

    def test_equal_priority_earliest_wins(self, factory: DataTypeFactory) -> None:
        factory.register(OtherVarcharType)
        assert type(factory.from_description("varchar")) is VarcharType
        assert len(factory.registry.get("varchar")) == 2

    def test_register_same_descriptor_twice(self, factory: DataTypeFactory) -> None:
        factory.register(TypeDescriptor.of(CustomType))
        factory.register(TypeDescriptor.of(CustomType))
        assert len(factory.registry.get("custom")) == 1


class TestValidation:
    def test_off_by_default(self, factory: DataTypeFactory) -> None:
        assert factory.from_description("int(1,2,3)").parameters == ("1", "2", "3")

    def test_parameter_count_checked(self) -> None:
        strict = DataTypeFactory(validate_parameters=True)
        with pytest.raises(ParameterCountError) as info:
            strict.from_description("decimal(10,2,1)")
        assert info.value.count == 3

    def test_valid_count_passes(self) -> None:
        strict = DataTypeFactory(validate_parameters=True)
        assert strict.from_description("decimal(10,2)").parameters == ("10", "2")


class TestInitialization:
    def test_discovery_failure(self) -> None:
        def broken() -> Iterable[TypeDescriptor]:
            raise RuntimeError("plugin scan failed")

        with pytest.raises(InitializationError) as info:
            DataTypeFactory(broken)
        assert isinstance(info.value.__cause__, RuntimeError)

    def test_registration_failure(self) -> None:
        class BadType(DataType):
            name = "bad"
            settable_properties = {"x": None}  # type: ignore[dict-item]

        def source() -> Iterable[TypeDescriptor]:
            yield from builtin_descriptors()
            yield TypeDescriptor.of(BadType)

        with pytest.raises(InitializationError):
            DataTypeFactory(source)

    def test_failed_reset_refuses_service(self) -> None:
        state = {"fail": False}

        def source() -> Iterable[TypeDescriptor]:
            if state["fail"]:
                raise OSError("descriptor table unavailable")
            return builtin_descriptors()

        f = DataTypeFactory(source)
        state["fail"] = True
        with pytest.raises(InitializationError):
            f.reset()
        with pytest.raises(InitializationError):
            f.from_description("int")

        state["fail"] = False
        f.reset()
        assert isinstance(f.from_description("int"), IntType)

    def test_reset_drops_manual_registrations(self, factory: DataTypeFactory) -> None:
        factory.reset()
        assert isinstance(factory.from_description("custom"), UnknownType)

    def test_custom_source(self) -> None:
        f = DataTypeFactory(lambda: [TypeDescriptor.of(CustomType)])
        assert isinstance(f.from_description("custom"), CustomType)
        assert isinstance(f.from_description("int"), UnknownType)


class TestPropertySetterInjection:
    def test_setter_faults_become_configuration_errors(self) -> None:
        def setter(instance: object, name: str, value: str) -> None:
            raise AttributeError(f"cannot set {name}")

        f = DataTypeFactory(property_setter=setter)
        with pytest.raises(UnsettablePropertyError) as info:
            f.from_description("int{unsigned:true}")
        assert info.value.property_name == "unsigned"
        assert isinstance(info.value.__cause__, AttributeError)


class TestLiterals:
    @pytest.mark.parametrize("dialect, true_text, false_text", [
        (GENERIC, "TRUE", "FALSE"),
        (POSTGRESQL, "TRUE", "FALSE"),
        (MYSQL, "1", "0"),
        (ORACLE, "1", "0"),
    ])
    def test_boolean_literals(
        self, factory: DataTypeFactory, dialect, true_text: str, false_text: str
    ) -> None:
        assert factory.true_literal(dialect) == true_text
        assert factory.false_literal(dialect) == false_text

    def test_default_dialect_used(self, factory: DataTypeFactory) -> None:
        assert factory.true_literal() in ("TRUE", "1")


class TestFromObject:
    @pytest.mark.parametrize("value, expected", [
        (True, BooleanType),
        (7, BigIntType),
        (Decimal("1.50"), DecimalType),
        ("text", VarcharType),
        (datetime(2024, 1, 2, 3, 4, 5), DateTimeType),
        (date(2024, 1, 2), DateType),
        (uuid4(), UUIDType),
    ])
    def test_known_python_types(self, factory: DataTypeFactory, value, expected) -> None:
        assert type(factory.from_object(value, MYSQL)) is expected

    def test_unknown_python_type(self, factory: DataTypeFactory) -> None:
        dt = factory.from_object(object())
        assert isinstance(dt, UnknownType)
        assert dt.name == "object"


class TestConcurrentResolution:
    def test_parallel_calls_do_not_interfere(self, factory: DataTypeFactory) -> None:
        descriptions = [f"decimal({n},{n % 5})" for n in range(1, 200)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(factory.from_description, descriptions))
        for n, dt in enumerate(results, start=1):
            assert dt.parameters == (str(n), str(n % 5))


class TestDefaultFactory:
    def test_lazily_built_once(self) -> None:
        assert get_default_factory() is get_default_factory()

    def test_reset_swaps_instance(self) -> None:
        before = get_default_factory()
        after = reset_default_factory()
        assert after is not before
        assert get_default_factory() is after
        assert isinstance(after.from_description("boolean"), BooleanType)
