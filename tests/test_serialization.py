"""Tests for serialization utilities."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from chari_stub.models import Absence, CustomerStatus
from chari_stub.serialization import (
    camel_case,
    dataclass_to_dict,
    format_timestamp,
    serialize_value,
)


class _SampleEnum(str, Enum):
    VALUE_A = "VALUE_A"


@dataclass
class _SampleData:
    first_name: str
    balance_after: Decimal
    created_at: datetime


class TestCamelCase:
    def test_snake_to_camel(self) -> None:
        assert camel_case("balance_after") == "balanceAfter"
        assert camel_case("transaction_reference") == "transactionReference"

    def test_single_word(self) -> None:
        assert camel_case("amount") == "amount"


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal_becomes_number(self) -> None:
        assert serialize_value(Decimal("99.99")) == 99.99

    def test_utc_datetime_has_z_suffix(self) -> None:
        dt = datetime(2024, 1, 26, 11, 15, tzinfo=timezone.utc)
        assert serialize_value(dt) == "2024-01-26T11:15:00Z"

    def test_naive_datetime(self) -> None:
        assert format_timestamp(datetime(2024, 6, 15, 10, 30)) == "2024-06-15T10:30:00"

    def test_date(self) -> None:
        assert serialize_value(date(2024, 6, 15)) == "2024-06-15"

    def test_enums(self) -> None:
        assert serialize_value(_SampleEnum.VALUE_A) == "VALUE_A"
        assert serialize_value(CustomerStatus.ACTIVE) == 3

    def test_absence_is_null(self) -> None:
        assert serialize_value(Absence.NOT_FOUND) is None
        assert serialize_value(Absence.NOT_APPLICABLE) is None

    def test_nested(self) -> None:
        data = {"amounts": [Decimal("10.00")], "info": {"status": CustomerStatus.NOT_CONFIRMED}}
        assert serialize_value(data) == {"amounts": [10.0], "info": {"status": 1}}

    def test_passthrough(self) -> None:
        assert serialize_value("hello") == "hello"
        assert serialize_value(42) == 42
        assert serialize_value(None) is None
        assert serialize_value(True) is True


class TestDataclassToDict:
    """Tests for dataclass_to_dict function."""

    def test_camel_case_keys(self) -> None:
        obj = _SampleData("Ahmed", Decimal("100.50"), datetime(2024, 1, 1))
        result = dataclass_to_dict(obj)
        assert result == {
            "firstName": "Ahmed",
            "balanceAfter": 100.5,
            "createdAt": "2024-01-01T00:00:00",
        }

    def test_exclude(self) -> None:
        obj = _SampleData("Ahmed", Decimal("1.00"), datetime(2024, 1, 1))
        assert "balanceAfter" not in dataclass_to_dict(obj, exclude=("balance_after",))
