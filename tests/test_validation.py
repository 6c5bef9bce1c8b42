import pytest

from tokbox_server.exceptions import InvalidArgumentError
from tokbox_server.models.token_model import Role
from tokbox_server.utils.validation import (
    validate_connection_data,
    validate_expire_time,
    validate_layout_class_list,
    validate_role,
)

NOW = 1700000000
DAY = 86400


def test_expire_time_zero_defaults_to_one_day():
    assert validate_expire_time(0, NOW) == NOW + DAY
    assert validate_expire_time(None, NOW) == NOW + DAY


def test_expire_time_in_the_past_is_rejected():
    with pytest.raises(InvalidArgumentError, match="100 seconds in the past"):
        validate_expire_time(NOW - 100, NOW)


def test_expire_time_grace_boundary():
    assert validate_expire_time(NOW, NOW) == NOW
    assert validate_expire_time(NOW - 1, NOW) == NOW - 1
    with pytest.raises(InvalidArgumentError):
        validate_expire_time(NOW - 2, NOW)


def test_expire_time_thirty_day_window():
    assert validate_expire_time(NOW + 29 * DAY, NOW) == NOW + 29 * DAY
    assert validate_expire_time(NOW + 30 * DAY, NOW) == NOW + 30 * DAY
    with pytest.raises(InvalidArgumentError, match="next 30 days"):
        validate_expire_time(NOW + 31 * DAY, NOW)


def test_expire_time_float_is_truncated():
    result = validate_expire_time(NOW + 3600.75, NOW)
    assert result == NOW + 3600
    assert isinstance(result, int)


def test_expire_time_rejects_non_numbers():
    with pytest.raises(InvalidArgumentError):
        validate_expire_time("tomorrow", NOW)


def test_connection_data_length_limit():
    assert validate_connection_data("x" * 1000) == "x" * 1000
    assert validate_connection_data(None) is None
    with pytest.raises(InvalidArgumentError, match="1001"):
        validate_connection_data("x" * 1001)


def test_connection_data_counts_characters_not_bytes():
    data = "ç" * 1000
    assert validate_connection_data(data) == data


@pytest.mark.parametrize("value,expected", [
    ("subscriber", Role.SUBSCRIBER),
    ("publisher", Role.PUBLISHER),
    ("moderator", Role.MODERATOR),
    (Role.MODERATOR, Role.MODERATOR),
])
def test_validate_role_known_values(value, expected):
    assert validate_role(value) is expected


@pytest.mark.parametrize("value", ["asdfasdf", "PUBLISHER", "", None])
def test_validate_role_rejects_unknown(value):
    with pytest.raises(InvalidArgumentError, match="not a recognized role"):
        validate_role(value)


def test_layout_class_list():
    assert validate_layout_class_list(["focus", "full"]) == ("focus", "full")
    assert validate_layout_class_list(None) is None
    with pytest.raises(InvalidArgumentError):
        validate_layout_class_list("focus")


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_expire_time_rejects_non_finite(value):
    with pytest.raises(InvalidArgumentError, match="finite"):
        validate_expire_time(value, NOW)
