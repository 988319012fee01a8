##############################################################################
# Maybe
# ============================================================================
#
# A value that is either `Some(value)` or `Nothing`, where `Some(None)` is a
# perfectly good value. It's the difference between "the setting is `None`"
# and "there is no setting", which a bare `None` can't tell you.
#
##############################################################################

"""The `Maybe` type and the free functions that operate on it.

```python
>>> Maybe.some(1)
Some(1)

>>> Maybe.some(None)
Nothing

>>> Maybe.some(None, nullable=True)
Some(None)

>>> match Maybe.some("hey"):
...     case Some(value):
...         print(value)
...     case Nothing():
...         print("nada")
hey

```
"""

from __future__ import annotations
from abc import ABCMeta, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar, final

from rich.repr import RichReprResult
from more_itertools import ilen

from .etc.err import ArgTypeError

T = TypeVar("T")
U = TypeVar("U")


class Maybe(Generic[T], metaclass=ABCMeta):
    """Either `Some` value or `Nothing`. Not instantiated directly; use the
    `Maybe.some` / `Maybe.nothing` constructors or the `Some` / `Nothing`
    classes.
    """

    __slots__ = ()

    # Constructors
    # ========================================================================

    @staticmethod
    def nothing() -> Maybe[T]:
        return NOTHING

    @staticmethod
    def some(
        value: T,
        *,
        nullable: bool = False,
        nothing_when: Callable[[T], bool] | None = None,
    ) -> Maybe[T]:
        """Wrap `value`, collapsing to `Nothing` when `value` is `None` (unless
        `nullable`) or when `nothing_when(value)` holds.

        ```python
        >>> Maybe.some("")
        Some('')

        >>> Maybe.some("", nothing_when=lambda s: s == "")
        Nothing

        ```
        """
        if not nullable and value is None:
            return NOTHING
        if nothing_when is not None and nothing_when(value):
            return NOTHING
        return Some(value)

    # Sequence Helpers
    # ========================================================================
    #
    # Same as the module-level functions of the same names.
    #

    @staticmethod
    def flatten(maybe: Maybe[Maybe[T]] | None) -> Maybe[T]:
        return flatten(maybe)

    @staticmethod
    def filter(maybes: Iterable[Maybe[T] | None] | None) -> Iterable[T]:
        return filter(maybes)

    @staticmethod
    def for_each(
        maybes: Iterable[Maybe[T] | None] | None, f: Callable[[T], Any]
    ) -> None:
        for_each(maybes, f)

    @staticmethod
    def count(maybes: Iterable[Maybe[Any] | None] | None) -> int:
        return count(maybes)

    # Instance API
    # ========================================================================

    @abstractmethod
    def is_some(self) -> bool:
        ...

    def is_nothing(self) -> bool:
        return not self.is_some()

    def get(self, default: U) -> T | U:
        return some(self, default)

    def map(self, converter: Callable[[T], U]) -> Maybe[U]:
        return map_some(self, converter)

    def __bool__(self) -> bool:
        return self.is_some()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Maybe):
            if self.is_nothing() or other.is_nothing():
                return self.is_nothing() and other.is_nothing()
            return self.value == other.value  # type: ignore[attr-defined]
        if other is None:
            return self.is_nothing()
        return NotImplemented

    def __hash__(self) -> int:
        if self.is_nothing():
            return 0
        return hash(self.value)  # type: ignore[attr-defined]


@final
class Some(Maybe[T]):
    __slots__ = ("_value",)
    __match_args__ = ("value",)

    _value: T

    def __init__(self, value: T):
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"can't set {name!r}; `Some` is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"can't delete {name!r}; `Some` is immutable")

    @property
    def value(self) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __rich_repr__(self) -> RichReprResult:
        yield self._value


@final
class Nothing(Maybe[T]):
    __slots__ = ()

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing"


#: The `Nothing`. Other `Nothing` instances are equal to it, but this is the
#: one the package hands out.
NOTHING: Nothing[Any] = Nothing()


# Free Functions
# ============================================================================


def is_nothing(maybe: Maybe[Any] | None) -> bool:
    """`True` for a `Nothing`, and for a `None` where a `Maybe` should be.

    ```python
    >>> is_nothing(NOTHING), is_nothing(None), is_nothing(Some(None))
    (True, True, False)

    ```
    """
    return maybe is None or maybe.is_nothing()


def is_some(maybe: Maybe[Any] | None) -> bool:
    return not is_nothing(maybe)


def some(maybe: Maybe[T] | None, default: U) -> T | U:
    """The held value, or `default` when there isn't one.

    ```python
    >>> some(Some(1), 0), some(NOTHING, 0)
    (1, 0)

    ```
    """
    match maybe:
        case Some(value):
            return value
        case _:
            return default


def map_some(
    maybe: Maybe[T] | None, converter: Callable[[T], U]
) -> Maybe[U]:
    """Apply `converter` to the held value, if any. The result is wrapped with
    `Maybe.some`, so a converter returning `None` gives `Nothing`.

    The `converter` is required even when `maybe` is `Nothing`.

    ```python
    >>> map_some(Some(2), lambda x: x * 10)
    Some(20)

    >>> map_some(Some({}), lambda d: d.get("missing"))
    Nothing

    >>> map_some(NOTHING, None)
    Traceback (most recent call last):
        ...
    maybe.etc.err.ArgTypeError: Expected `converter` to be ...

    ```
    """
    if not callable(converter):
        raise ArgTypeError("converter", Callable, converter)
    match maybe:
        case Some(value):
            return Maybe.some(converter(value))
        case _:
            return NOTHING


def when(
    maybe: Maybe[T] | None,
    nothing: Callable[[], Any] | None = None,
    some: Callable[[T], Any] | None = None,
    default_value: Callable[[], T] | None = None,
) -> Any:
    """Branch on `maybe`, calling `some` with the held value or `nothing` when
    there isn't one. Returns whatever the called callback returns (`None` if
    no callback got called).

    With `default_value`, a `Nothing` calls `some(default_value())` instead of
    `nothing()`.

    ```python
    >>> when(Some(2), some=lambda x: x + 1)
    3

    >>> when(NOTHING, nothing=lambda: "nope", some=lambda x: x + 1)
    'nope'

    >>> when(NOTHING, some=lambda x: x + 1, default_value=lambda: 10)
    11

    ```
    """
    match maybe:
        case Some(value):
            if some is not None:
                return some(value)
        case _:
            if default_value is not None:
                if some is not None:
                    return some(default_value())
            elif nothing is not None:
                return nothing()
    return None


def flatten(maybe: Maybe[Maybe[T]] | None) -> Maybe[T]:
    """Remove one level of nesting.

    ```python
    >>> flatten(Some(Some(1))), flatten(Some(NOTHING)), flatten(NOTHING)
    (Some(1), Nothing, Nothing)

    ```
    """
    match maybe:
        case Some(inner) if inner is not None:
            return inner
        case _:
            return NOTHING


class _SomeValues(Iterable[T]):
    """Lazy view of the held values in an iterable of `Maybe`. Iterating it
    again iterates the source again.
    """

    __slots__ = ("_maybes",)

    _maybes: Iterable[Maybe[T] | None]

    def __init__(self, maybes: Iterable[Maybe[T] | None]):
        self._maybes = maybes

    def __iter__(self) -> Iterator[T]:
        for maybe in self._maybes:
            if isinstance(maybe, Some):
                yield maybe.value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._maybes!r})"


def filter(maybes: Iterable[Maybe[T] | None] | None) -> Iterable[T]:
    """The held values of the `Some` elements of `maybes`, in order.

    ```python
    >>> list(filter([Some(1), NOTHING, None, Some(2)]))
    [1, 2]

    >>> list(filter(None))
    []

    ```
    """
    if maybes is None:
        return ()
    return _SomeValues(maybes)


def for_each(
    maybes: Iterable[Maybe[T] | None] | None, f: Callable[[T], Any]
) -> None:
    """Call `f` with each held value in `maybes`, in order.

    ```python
    >>> for_each([Some("a"), NOTHING, Some("b")], print)
    a
    b

    ```
    """
    if not callable(f):
        raise ArgTypeError("f", Callable, f)
    for value in filter(maybes):
        f(value)


def count(maybes: Iterable[Maybe[Any] | None] | None) -> int:
    """
    ```python
    >>> count([Some(1), NOTHING, Some(3)])
    2

    ```
    """
    return ilen(filter(maybes))
