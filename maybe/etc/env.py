from os import environ
from typing import TypeVar, cast

from splatlog.lib.text import fmt

from maybe.maybe import Maybe, NOTHING, Some

from .txt import join

T = TypeVar("T")

TRUE_STRINGS = frozenset(
    (
        "1",
        "t",
        "y",
        "true",
        "yes",
    )
)
FALSE_STRINGS = frozenset(
    (
        "",
        "0",
        "f",
        "n",
        "false",
        "no",
    )
)


class UnreachableError(RuntimeError):
    def __init__(self):
        super().__init__("This code should never be reachable")


def is_set(name: str) -> bool:
    """`True` when the variable is present _and_ non-empty."""
    return environ.get(name, "") != ""


def get_bool(name: str) -> bool:
    match environ.get(name):
        case None:
            return False
        case str(s):
            if s.lower() in TRUE_STRINGS:
                return True
            if s.lower() in FALSE_STRINGS:
                return False
            raise TypeError(
                f"can't get `bool` from env var {name}={s!r}; "
                f"recognized values are "
                f"True={join(sorted(TRUE_STRINGS), coordinator=None, seperator='|')} "
                f"and False={join(sorted(FALSE_STRINGS), coordinator=None, seperator='|')} "
                "(case-insensitive)"
            )
    raise UnreachableError()


def get_int(name: str) -> int:
    match environ.get(name):
        case None | "":
            return 0
        case str(s):
            return int(s)
    raise UnreachableError()


def get_as(name: str, as_a: type[T]) -> T:
    match as_a:
        case t if t is bool:
            return cast(T, get_bool(name))
        case t if t is int:
            return cast(T, get_int(name))
        case _:
            raise TypeError(
                f"can't read env var {name} as {fmt(as_a)}; "
                "only `bool` and `int` settings are supported"
            )


def get_maybe(name: str, as_a: type[T]) -> Maybe[T]:
    """`Nothing` when the variable is unset or empty, otherwise `Some` of the
    value as read by `get_as`. Lets you tell "not configured" apart from a
    configured falsy value.
    """
    if not is_set(name):
        return NOTHING
    return Some(get_as(name, as_a))
