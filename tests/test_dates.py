import uuid
from datetime import datetime

import pytest

from subscription_service.dates import (
    format_month_year,
    parse_month_year,
    parse_optional_month_year,
    parse_user_id,
    to_first_day_of_month,
)
from subscription_service.exceptions import ValidationError


def test_parse_month_year_first_of_month():
    assert parse_month_year("03-2024", "start_date") == datetime(2024, 3, 1)
    assert parse_month_year("12-1999", "start_date") == datetime(1999, 12, 1)


@pytest.mark.parametrize(
    "value",
    ["2024-01", "13-2024", "00-2024", "1-2024", "01-24", "01/2024", "01-2024 ", "01-2024\n", "01-0000"],
)
def test_parse_month_year_rejects_malformed(value):
    with pytest.raises(ValidationError, match="invalid start_date format, expected MM-YYYY"):
        parse_month_year(value, "start_date")


@pytest.mark.parametrize("value", [None, ""])
def test_parse_month_year_requires_value(value):
    with pytest.raises(ValidationError, match="end_date is required"):
        parse_month_year(value, "end_date")


def test_parse_optional_month_year():
    assert parse_optional_month_year("", "end_date") is None
    assert parse_optional_month_year(None, "end_date") is None
    assert parse_optional_month_year("07-2025", "end_date") == datetime(2025, 7, 1)
    with pytest.raises(ValidationError):
        parse_optional_month_year("7-2025", "end_date")


def test_format_month_year_discards_day_and_time():
    assert format_month_year(datetime(2024, 3, 17, 13, 45)) == "03-2024"
    assert to_first_day_of_month(datetime(2024, 3, 17, 13, 45)) == datetime(2024, 3, 1)


def test_parse_user_id():
    value = "11111111-1111-1111-1111-111111111111"
    assert parse_user_id(value) == uuid.UUID(value)
    assert parse_user_id(uuid.UUID(value)) == uuid.UUID(value)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not-a-uuid",
        "11111111111111111111111111111111",
        "{11111111-1111-1111-1111-111111111111}",
        "urn:uuid:11111111-1111-1111-1111-111111111111",
        "11111111-1111-1111-1111-11111111111g",
    ],
)
def test_parse_user_id_rejects_malformed(value):
    with pytest.raises(ValidationError, match="invalid user_id"):
        parse_user_id(value)
