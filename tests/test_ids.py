import pytest

from files_manager.core.ids import MAX_ID, is_root, parse_id


@pytest.mark.parametrize("value, expected", [
    (1, 1),
    ("42", 42),
    (0, None),
    ("0", None),
    (-3, None),
    ("-3", None),
    ("4a", None),
    ("", None),
    (None, None),
    (True, None),
    ("١٢", None),
    (1.0, None),
    (MAX_ID, MAX_ID),
    (str(MAX_ID), MAX_ID),
    (MAX_ID + 1, None),
    ("99999999999999999999999", None),
])
def test_parse_id(value, expected):
    assert parse_id(value) == expected


@pytest.mark.parametrize("value, expected", [
    (None, True),
    ("", True),
    (0, True),
    ("0", True),
    (False, False),
    (1, False),
    ("abc", False),
])
def test_is_root(value, expected):
    assert is_root(value) is expected
