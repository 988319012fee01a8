"""A mapping whose values are `Maybe`.

Missing keys read as `Nothing`, and writing `Nothing` deletes the key, so
"there is no value" is always expressed as key absence, never as a stored
sentinel.

```python
>>> m = MaybeMap()
>>> m["a"] = Some(1)
>>> m["b"] = NOTHING
>>> m["a"], m["b"]
(Some(1), Nothing)
>>> list(m)
['a']
>>> m["a"] = NOTHING
>>> m.is_empty
True

```
"""

from __future__ import annotations
from collections.abc import (
    Callable,
    ItemsView,
    Iterable,
    Iterator,
    KeysView,
    Mapping,
    MutableMapping,
    ValuesView,
)
from copy import copy as shallow_copy
from typing import Any, Generic, TypeVar

from splatlog.loggers import LoggerProperty
from splatlog.lib.typeguard import satisfies
from rich.repr import RichReprResult

from . import cfg
from .err import ArgTypeError, CastError, MissingKeyError
from .maybe import Maybe, NOTHING, Nothing, Some

K = TypeVar("K")
V = TypeVar("V")
K2 = TypeVar("K2")
V2 = TypeVar("V2")
TDefault = TypeVar("TDefault")


class MaybeItemsView(ItemsView):
    """`(key, Some(value))` pairs."""

    __slots__ = ()

    _mapping: MaybeMap

    def __contains__(self, item: object) -> bool:
        key, value = item  # type: ignore[misc]
        return key in self._mapping and self._mapping[key] == value


class MaybeValuesView(ValuesView):
    """Stored values, wrapped according to the map's `nullable` flag: with
    `nullable=False` a stored `None` comes out as `Nothing`.
    """

    __slots__ = ()

    _mapping: MaybeMap

    def __contains__(self, value: object) -> bool:
        return any(v == value for v in self)

    def __iter__(self) -> Iterator[Maybe[Any]]:
        nullable = self._mapping.nullable
        for value in self._mapping._map.values():
            yield Maybe.some(value, nullable=nullable)


class MaybeMap(MutableMapping[K, Maybe[V]], Generic[K, V]):
    """A `collections.abc.MutableMapping` of keys to `Maybe` values that wraps
    around a plain mapping (such as a `builtin.dict`) of keys to values.

    All writes go through `__setitem__`: `Some(value)` stores `value`, and
    `Nothing` (or `None`) removes the key.

    The wrapped mapping is adopted, not copied.

    ```python
    >>> d = {"x": 1}
    >>> m = MaybeMap(d)
    >>> m["y"] = Some(2)
    >>> d
    {'x': 1, 'y': 2}

    ```
    """

    _log = LoggerProperty()

    _map: MutableMapping[K, V]
    _nullable: bool

    def __init__(
        self,
        mapping: MutableMapping[K, V] | None = None,
        *,
        nullable: bool | None = None,
    ):
        if mapping is None:
            mapping = {}
        elif not isinstance(mapping, MutableMapping):
            raise ArgTypeError("mapping", MutableMapping, mapping)

        self._map = mapping
        self._nullable = (
            cfg.get_map_nullable() if nullable is None else nullable
        )

    @classmethod
    def from_map(
        cls, mapping: MutableMapping[K, V], *, nullable: bool | None = None
    ) -> MaybeMap[K, V]:
        return cls(mapping, nullable=nullable)

    @classmethod
    def of(
        cls,
        entries: Mapping[K, Maybe[V]] | Iterable[tuple[K, Maybe[V]]] = (),
        /,
        *,
        nullable: bool | None = None,
        **kwds: Maybe[V],
    ) -> MaybeMap[K, V]:
        """
        ```python
        >>> MaybeMap.of({"a": Some(1), "b": NOTHING}, c=Some(None))
        MaybeMap({'a': 1, 'c': None}, nullable=True)

        ```
        """
        maybe_map = cls(nullable=nullable)
        maybe_map.add_all(entries, **kwds)
        return maybe_map

    @property
    def nullable(self) -> bool:
        return self._nullable

    @property
    def is_empty(self) -> bool:
        return len(self._map) == 0

    @property
    def is_not_empty(self) -> bool:
        return len(self._map) != 0

    @property
    def _splatlog_self_(self) -> str:
        return f"MaybeMap(nullable={self._nullable!r})"

    def _some_value(self, value: V) -> Maybe[V]:
        # Already stored, so it's a value even if it's `None`
        return Maybe.some(value, nullable=True)

    # Collections API
    # ========================================================================

    def __getitem__(self, key: K) -> Maybe[V]:
        if key not in self._map:
            return NOTHING
        return self._some_value(self._map[key])

    def __setitem__(self, key: K, value: Maybe[V] | None) -> None:
        match value:
            case Some(stored):
                self._map[key] = stored
            case Nothing() | None:
                if key in self._map:
                    self._log.debug("Removing key set to nothing", key=key)
                    del self._map[key]
            case _:
                raise ArgTypeError("value", Maybe, value)

    def __delitem__(self, key: K) -> None:
        del self._map[key]

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[K]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def get(self, key: K, default: TDefault = NOTHING) -> Maybe[V] | TDefault:
        if key in self._map:
            return self[key]
        return default

    def keys(self) -> KeysView[K]:
        return self._map.keys()

    def items(self) -> MaybeItemsView:
        return MaybeItemsView(self)

    def values(self) -> MaybeValuesView:
        return MaybeValuesView(self)

    @property
    def entries(self) -> MaybeItemsView:
        return self.items()

    def clear(self) -> None:
        self._map.clear()

    def copy(self) -> MaybeMap[K, V]:
        return self.__class__(shallow_copy(self._map), nullable=self._nullable)

    # Lookup
    # ========================================================================

    def contains_key(self, key: object) -> bool:
        return key in self._map

    def contains_value(self, value: object) -> bool:
        """Is the value held by `value` stored under any key?

        ```python
        >>> m = MaybeMap.of(a=Some(1), b=Some(None))
        >>> m.contains_value(Some(1)), m.contains_value(Some(2))
        (True, False)
        >>> m.contains_value(None), m.contains_value(NOTHING)
        (True, False)

        ```
        """
        match value:
            case Some(held):
                return held in self._map.values()
            case None:
                return None in self._map.values()
            case _:
                return False

    # Writing
    # ========================================================================

    def put_if_absent(
        self, key: K, if_absent: Callable[[], Maybe[V]]
    ) -> Maybe[V]:
        if key in self._map:
            return self[key]
        result = if_absent()
        self[key] = result
        return result

    def setdefault(self, key: K, default: Maybe[V] = NOTHING) -> Maybe[V]:
        return self.put_if_absent(key, lambda: default)

    def remove(self, key: K) -> Maybe[V]:
        if key in self._map:
            return self._some_value(self._map.pop(key))
        return NOTHING

    def pop(self, key: K, default: TDefault = NOTHING) -> Maybe[V] | TDefault:
        if key in self._map:
            return self.remove(key)
        return default

    def update_at(
        self,
        key: K,
        update: Callable[[Maybe[V]], Maybe[V]],
        if_absent: Callable[[], Maybe[V]] | None = None,
    ) -> Maybe[V]:
        """Replace the value at `key` with `update(current)`, or with
        `if_absent()` when `key` isn't there. Returns the new value.

        ```python
        >>> m = MaybeMap()
        >>> m.update_at("x", lambda v: v, if_absent=lambda: Some(10))
        Some(10)
        >>> m.update_at("x", lambda v: v.map(lambda x: x + 1))
        Some(11)
        >>> m.update_at("y", lambda v: v)
        Traceback (most recent call last):
            ...
        maybe.err.MissingKeyError: update on missing key requires a default; key y not found

        ```
        """
        if key in self._map:
            updated = update(self[key])
        elif if_absent is not None:
            updated = if_absent()
        else:
            raise MissingKeyError(key)

        self[key] = updated
        return updated

    def update_all(self, update: Callable[[K, Maybe[V]], Maybe[V]]) -> None:
        snapshot = list(self._map.items())

        self._log.debug("Updating all entries", count=len(snapshot))

        for key, value in snapshot:
            self[key] = update(key, self._some_value(value))

    def remove_where(self, predicate: Callable[[K, Maybe[V]], bool]) -> None:
        doomed = [
            key
            for key, value in self._map.items()
            if predicate(key, self._some_value(value))
        ]

        self._log.debug("Removing entries", count=len(doomed))

        for key in doomed:
            del self._map[key]

    def add_entries(self, entries: Iterable[tuple[K, Maybe[V] | None]]) -> None:
        """Write each `Some` entry. `Nothing` entries are skipped; unlike
        `m[key] = NOTHING` they do _not_ remove an existing key.

        ```python
        >>> m = MaybeMap.of(a=Some(1))
        >>> m.add_entries([("a", NOTHING), ("b", Some(2))])
        >>> m
        MaybeMap({'a': 1, 'b': 2}, nullable=True)

        ```
        """
        skipped = []

        for key, value in entries:
            match value:
                case Nothing() | None:
                    skipped.append(key)
                case _:
                    self[key] = value

        if skipped:
            self._log.debug("Skipped nothing entries", keys=skipped)

    def add_all(
        self,
        other: Mapping[K, Maybe[V]] | Iterable[tuple[K, Maybe[V]]] = (),
        /,
        **kwds: Maybe[V],
    ) -> None:
        if isinstance(other, Mapping):
            self.add_entries(other.items())
        elif hasattr(other, "keys"):
            self.add_entries((key, other[key]) for key in other.keys())
        else:
            self.add_entries(other)
        self.add_entries(kwds.items())  # type: ignore[arg-type]

    def update(self, other=(), /, **kwds) -> None:
        self.add_all(other, **kwds)

    # Iteration & Transformation
    # ========================================================================

    def for_each(self, f: Callable[[K, Maybe[V]], Any]) -> None:
        for key, value in self._map.items():
            f(key, self._some_value(value))

    def map(self, f: Callable[[K, Maybe[V]], tuple[K2, V2]]) -> dict[K2, V2]:
        """
        ```python
        >>> MaybeMap.of(a=Some(1)).map(lambda k, v: (k.upper(), v.get(0) * 2))
        {'A': 2}

        ```
        """
        return dict(f(key, value) for key, value in self.items())

    def cast(self, key_type: type[K2], value_type: type[V2]) -> MaybeMap[K2, V2]:
        """A new `MaybeMap` with the same entries, checked against `key_type`
        and `value_type`.

        ```python
        >>> MaybeMap.of(a=Some(1)).cast(str, int)
        MaybeMap({'a': 1}, nullable=True)

        >>> MaybeMap.of(a=Some("x")).cast(str, int)
        Traceback (most recent call last):
            ...
        maybe.err.CastError: can't cast value at key 'a' to ...; found ...: 'x'

        ```
        """

        def cast_entry(key: K, value: Maybe[V]) -> tuple[K2, Maybe[V2]]:
            if not satisfies(key, key_type):
                self._log.debug("Key failed cast", key=key, key_type=key_type)
                raise CastError("key", key, key, key_type)
            held = value.get(None)
            if not satisfies(held, value_type):
                self._log.debug(
                    "Value failed cast", key=key, value_type=value_type
                )
                raise CastError("value", key, held, value_type)
            return key, Maybe.some(held, nullable=True)

        return MaybeMap.of(self.map(cast_entry), nullable=self._nullable)

    # Rendering
    # ========================================================================

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self._map!r}, "
            f"nullable={self._nullable!r})"
        )

    def __rich_repr__(self) -> RichReprResult:
        yield self._map
        yield "nullable", self._nullable
