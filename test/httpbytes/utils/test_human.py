import pytest

from httpbytes.utils import human


def test_parse_size():
    assert human.parse_size("0") == 0
    assert human.parse_size("0b") == 0
    assert human.parse_size("1") == 1
    assert human.parse_size("1k") == 1024
    assert human.parse_size("1m") == 1024**2
    assert human.parse_size("1g") == 1024**3
    assert human.parse_size("3M") == 3 * 1024**2
    assert human.parse_size(" 2k ") == 2048
    with pytest.raises(ValueError):
        human.parse_size("1f")
    with pytest.raises(ValueError):
        human.parse_size("ak")
    assert human.parse_size(None) is None


def test_pretty_size():
    assert human.pretty_size(0) == "0b"
    assert human.pretty_size(100) == "100b"
    assert human.pretty_size(1024) == "1.0k"
    assert human.pretty_size(1024 + 512) == "1.5k"
    assert human.pretty_size(1024 * 1024) == "1.0m"
    assert human.pretty_size(10 * 1024 * 1024) == "10.0m"
    assert human.pretty_size(100 * 1024 * 1024) == "100m"
    assert human.pretty_size(10 * 1024 * 1024 * 1024) == "10.0g"
    assert human.pretty_size(1024 * 1024 * 1024 * 1024) == "1024g"
