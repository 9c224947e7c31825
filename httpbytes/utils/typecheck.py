import typing
from collections import abc
from types import UnionType

Type = typing.Union[
    typing.Any  # anything more elaborate really fails with mypy at the moment.
]


def check_option_type(name: str, value: typing.Any, typeinfo: Type) -> None:
    """
    Check if the provided value is an instance of typeinfo and raises a
    TypeError otherwise. This function supports only those types required for
    converter options.
    """
    e = TypeError(f"Expected {typeinfo} for {name}, but got {type(value)}.")

    origin = typing.get_origin(typeinfo)

    if origin is typing.Union or origin is UnionType:
        for T in typing.get_args(typeinfo):
            try:
                check_option_type(name, value, T)
            except TypeError:
                pass
            else:
                return
        raise e
    elif origin is abc.Sequence:
        T = typing.get_args(typeinfo)[0]
        if not isinstance(value, (tuple, list)):
            raise e
        for v in value:
            check_option_type(name, v, T)
    elif origin is abc.Callable or typeinfo is abc.Callable:
        if not callable(value):
            raise e
    elif typeinfo is typing.Any:
        return
    elif typeinfo is int and isinstance(value, bool):
        raise e
    elif not isinstance(value, typeinfo):
        raise e
