from collections.abc import Callable
from collections.abc import Sequence
from typing import Any
from typing import Optional
from typing import Union

import pytest

from httpbytes.utils import typecheck


def test_check_option_type():
    typecheck.check_option_type("foo", 42, int)
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", 42, str)
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", None, str)
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", b"foo", str)


def test_check_bool_is_not_int():
    typecheck.check_option_type("foo", True, bool)
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", True, int)


def test_check_union():
    typecheck.check_option_type("foo", 42, Union[int, str])
    typecheck.check_option_type("foo", "42", int | str)
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", [], Union[int, str])


def test_check_option():
    typecheck.check_option_type("foo", None, Optional[int])
    typecheck.check_option_type("foo", 1, int | None)
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", "1", int | None)


def test_check_sequence():
    typecheck.check_option_type("foo", [10], Sequence[int])
    typecheck.check_option_type("foo", (10, 11), Sequence[int])
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", ["foo"], Sequence[int])
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", [10, "foo"], Sequence[int])
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", "foo", Sequence[str])


def test_check_callable():
    typecheck.check_option_type("foo", len, Callable)
    typecheck.check_option_type("foo", lambda x: x, Callable[[Any], bytes])
    typecheck.check_option_type("foo", None, Callable | None)
    with pytest.raises(TypeError):
        typecheck.check_option_type("foo", 42, Callable[[Any], bytes])


def test_check_any():
    typecheck.check_option_type("foo", 42, Any)
    typecheck.check_option_type("foo", object(), Any)
