"""Formatting for the messages we hand back to people, mostly in errors.

> ❗ WARNING ❗
>
> This module is used in already bad situations, like formatting error
> messages.
>
> As such, it must **_NOT_** depend on any parts of the package outside
> `maybe.etc`, and it must **_NOT_** raise exceptions unless there is a logic
> error that needs to be fixed.
>
"""

from functools import reduce
from itertools import chain
from typing import Callable, Any
import os
import re

import splatlog.lib.text
from splatlog.lib.text import fmt as splat_fmt

from rich.console import Console
from rich.pretty import Pretty
from rich.padding import Padding

from more_itertools import collapse

_CONSOLE = Console(
    file=open(os.devnull, "w"),
    force_terminal=False,
    width=80,
)

fmt_type_of = splatlog.lib.text.fmt_type_of


_SQUISH_RE = re.compile(r"\s+")

_ENV_NAME_SUBS = (
    # Trim anything we can't use from the start (don't create leading '_')
    (re.compile(r"^[^A-Za-z0-9_]+"), ""),
    # Trim anything we can't use from the end (don't create trailing '_')
    (re.compile(r"[^A-Za-z0-9_]+$"), ""),
    # Replace any runs we can't use with a single '_'
    (re.compile(r"[^A-Za-z0-9_]+"), "_"),
)


def as_env_name(name: str) -> str:
    """
    ##### Examples #####

    ```python
    >>> as_env_name("maybe.map_nullable")
    'MAYBE_MAP_NULLABLE'

    >>> as_env_name("[[a/b/c?]]")
    'A_B_C'

    >>> as_env_name("?^%!$@%^$!")
    Traceback (most recent call last):
        ...
    ValueError: no usable characters in `name`; converted '?^%!$@%^$!' -> ''

    ```
    """
    env_name = reduce(
        lambda name, sub: sub[0].sub(sub[1], name), _ENV_NAME_SUBS, name
    ).upper()

    if env_name == "" or set(env_name) == {"_"}:
        raise ValueError(
            "no usable characters in `name`; "
            f"converted {name!r} -> {env_name!r}"
        )

    return env_name


def squish(string: str) -> str:
    """
    Condense any whitespace runs into a single space and strip any leading and
    trailing whitespace.

    ##### Examples #####

    ```python
    >>> squish('''
    ...     Expected `converter` to be
    ...        `typing.Callable`.
    ... ''')
    'Expected `converter` to be `typing.Callable`.'

    ```
    """

    return _SQUISH_RE.sub(" ", string).strip()


def fmt(x: Any) -> str:
    match x:
        case str(s):
            return s
        case other:
            return splat_fmt(other)


def fmt_pretty(obj: object) -> str:
    with _CONSOLE.capture() as capture:
        _CONSOLE.print(Padding(Pretty(obj), (0, 4)))
    return capture.get()


def join(
    *iterable: Any,
    seperator: str = ", ",
    coordinator: str | None = " and ",
    to_s: Callable[[Any], str] = fmt,
    empty: str = "",
) -> str:
    """
    Joins items into a textual list suitable for prose, with `coordinator`
    between the last two items.

    ##### Examples #####

    ```python
    >>> join("a", "b", "c")
    'a, b and c'

    >>> join("yes", ("true", "t"), coordinator=" or ")
    'yes, true or t'

    >>> join("a", "b", "c", coordinator=None)
    'a, b, c'

    >>> join([], empty="(none)")
    '(none)'

    >>> join("x", "y")
    'x and y'

    ```
    """
    if coordinator is None:
        return seperator.join(to_s(i) for i in collapse(iterable))

    items = list(collapse(iterable))

    match items:
        case []:
            return empty
        case [only]:
            return to_s(only)
        case [penult, ult]:
            return to_s(penult) + coordinator + to_s(ult)
        case [*rest, penult, ult]:
            return seperator.join(
                chain(
                    (to_s(i) for i in rest),
                    (to_s(penult) + coordinator + to_s(ult),),
                )
            )
    assert False, "unreachable"
