import pytest

from relief.core.exceptions import ValidationError
from relief.services.inputs import parse_period, parse_periods, validate_periods


@pytest.mark.parametrize("value, expected", [(3, 3), ("4", 4), (" 7 ", 7)])
def test_parse_period_accepts_positive_numbers(value, expected):
    assert parse_period(value) == expected


@pytest.mark.parametrize("value", ["abc", "", "0", -2, "2.5", True])
def test_parse_period_strict_rejects_bad_input(value):
    with pytest.raises(ValidationError) as excinfo:
        parse_period(value)
    assert excinfo.value.status_code == 422


@pytest.mark.parametrize("value", ["abc", "", "0", -2])
def test_parse_period_lenient_defaults_to_first_period(value):
    assert parse_period(value, strict=False) == 1


def test_parse_periods_from_text_keeps_order():
    assert parse_periods("5, 2,3") == [5, 2, 3]


def test_parse_periods_strict_ignores_blank_tokens():
    assert parse_periods("1,,3,") == [1, 3]


def test_parse_periods_strict_requires_at_least_one_period():
    with pytest.raises(ValidationError):
        parse_periods(" , ")
    with pytest.raises(ValidationError):
        parse_periods([])


def test_parse_periods_strict_rejects_non_numeric_token():
    with pytest.raises(ValidationError):
        parse_periods("1, two, 3")


def test_parse_periods_lenient_matches_mobile_app():
    assert parse_periods("1, two,,3", strict=False) == [1, 1, 1, 3]
    assert parse_periods("", strict=False) == [1]


def test_parse_periods_accepts_mixed_list():
    assert parse_periods([2, "4"]) == [2, 4]


@pytest.mark.parametrize("strict", [True, False])
def test_parse_period_refuses_numbers_above_the_last_period(strict):
    assert parse_period("99", strict=strict) == 99
    with pytest.raises(ValidationError) as excinfo:
        parse_period("100", strict=strict)
    assert excinfo.value.details["max_period"] == 99
    with pytest.raises(ValidationError):
        parse_period("99999999999999999999", strict=strict)


def test_parse_periods_lenient_empty_list_becomes_first_period():
    assert parse_periods([], strict=False) == [1]


def test_validate_periods_checks_parsed_numbers():
    assert validate_periods([4, 1]) == [4, 1]
    for bad in ([], [0], [2, -1], [100], [True]):
        with pytest.raises(ValidationError):
            validate_periods(bad)
