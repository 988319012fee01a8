"""Tests for `MaybeMap`."""

from collections.abc import MutableMapping
from typing import Optional

import pytest

from maybe import (
    MaybeMap,
    Maybe,
    Some,
    NOTHING,
    ArgTypeError,
    CastError,
    MaybeError,
    MissingKeyError,
    is_nothing,
    some,
)


@pytest.fixture
def abc_map() -> MaybeMap[str, int]:
    return MaybeMap({"a": 1, "b": 2, "c": 3})


class TestConstruction:
    def test_empty(self):
        m = MaybeMap()
        assert len(m) == 0
        assert m.is_empty
        assert not m.is_not_empty

    def test_is_a_mutable_mapping(self):
        assert isinstance(MaybeMap(), MutableMapping)

    def test_adopts_mapping_by_reference(self):
        backing = {"x": 1}
        m = MaybeMap(backing)

        m["y"] = Some(2)
        m["x"] = NOTHING

        assert backing == {"y": 2}

    def test_from_map(self):
        backing = {"x": 1}
        m = MaybeMap.from_map(backing, nullable=False)
        assert m["x"] == Some(1)
        assert m.nullable is False

    def test_rejects_non_mutable_mapping(self):
        with pytest.raises(ArgTypeError):
            MaybeMap([("a", 1)])  # type: ignore[arg-type]

    def test_of(self):
        m = MaybeMap.of({"a": Some(1), "b": NOTHING}, c=Some(3))
        assert dict(m.items()) == {"a": Some(1), "c": Some(3)}

    def test_nullable_defaults_to_true(self, monkeypatch):
        monkeypatch.delenv("MAYBE_MAP_NULLABLE", raising=False)
        assert MaybeMap().nullable is True

    def test_nullable_default_from_env(self, monkeypatch):
        monkeypatch.setenv("MAYBE_MAP_NULLABLE", "false")
        assert MaybeMap().nullable is False
        assert MaybeMap(nullable=True).nullable is True


class TestIndexing:
    def test_missing_key_is_nothing(self):
        assert MaybeMap()["missing"] == NOTHING

    def test_set_some_then_get(self):
        m = MaybeMap()
        m["k"] = Some("v")
        assert m["k"] == Some("v")

    def test_set_some_overwrites(self):
        m = MaybeMap({"k": 1})
        m["k"] = Some(2)
        assert m["k"] == Some(2)

    def test_set_nothing_removes(self):
        m = MaybeMap({"k": 1})
        m["k"] = NOTHING
        assert "k" not in m
        assert m["k"] == NOTHING

    def test_set_nothing_on_missing_is_noop(self):
        m = MaybeMap({"k": 1})
        m["other"] = NOTHING
        assert list(m) == ["k"]

    def test_set_none_removes(self):
        m = MaybeMap({"k": 1})
        m["k"] = None
        assert m.is_empty

    def test_stored_none_reads_as_some_none(self):
        m = MaybeMap({"k": None}, nullable=False)
        assert m["k"] == Some(None)
        assert not is_nothing(m["k"])

    def test_set_some_none_stores_none(self):
        m = MaybeMap()
        m["k"] = Some(None)
        assert m._map == {"k": None}

    def test_set_raw_value_is_rejected(self):
        m = MaybeMap()
        with pytest.raises(ArgTypeError):
            m["k"] = 1  # type: ignore[assignment]
        assert m.is_empty

    def test_del(self):
        m = MaybeMap({"k": 1})
        del m["k"]
        assert m.is_empty

    def test_del_missing_raises(self):
        m = MaybeMap({"k": 1})
        with pytest.raises(KeyError):
            del m["nope"]
        assert list(m) == ["k"]

    def test_get(self):
        m = MaybeMap({"k": 1})
        assert m.get("k") == Some(1)
        assert m.get("nope") == NOTHING
        assert m.get("nope", Some(0)) == Some(0)


class TestLookup:
    def test_contains_key(self, abc_map):
        assert abc_map.contains_key("a")
        assert not abc_map.contains_key("z")
        assert "a" in abc_map
        assert "z" not in abc_map

    def test_contains_value(self, abc_map):
        assert abc_map.contains_value(Some(2))
        assert not abc_map.contains_value(Some(9))

    def test_contains_value_nothing(self, abc_map):
        assert not abc_map.contains_value(NOTHING)

    def test_contains_value_raw(self, abc_map):
        assert not abc_map.contains_value(2)

    def test_contains_value_none(self):
        assert MaybeMap({"k": None}).contains_value(None)
        assert not MaybeMap({"k": 0}).contains_value(None)

    def test_values_view_contains(self, abc_map):
        assert Some(1) in abc_map.values()
        assert Some(7) not in abc_map.values()

    def test_items_view_contains(self, abc_map):
        assert ("a", Some(1)) in abc_map.items()
        assert ("a", Some(2)) not in abc_map.items()
        assert ("z", NOTHING) not in abc_map.items()


class TestViews:
    def test_keys(self, abc_map):
        assert abc_map.keys() == {"a", "b", "c"}

    def test_items(self, abc_map):
        assert list(abc_map.items()) == [
            ("a", Some(1)),
            ("b", Some(2)),
            ("c", Some(3)),
        ]
        assert list(abc_map.entries) == list(abc_map.items())

    def test_values(self, abc_map):
        assert list(abc_map.values()) == [Some(1), Some(2), Some(3)]

    def test_values_nullable(self):
        m = MaybeMap({"a": None, "b": 1}, nullable=True)
        assert list(m.values()) == [Some(None), Some(1)]

    def test_values_not_nullable(self):
        m = MaybeMap({"a": None, "b": 1}, nullable=False)
        assert list(m.values()) == [NOTHING, Some(1)]

    def test_values_contains_not_nullable(self):
        m = MaybeMap({"k": None}, nullable=False)
        assert NOTHING in m.values()
        assert Some(None) not in m.values()

    def test_values_contains_nullable(self):
        m = MaybeMap({"k": None}, nullable=True)
        assert Some(None) in m.values()
        assert NOTHING not in m.values()

    @pytest.mark.parametrize("nullable", [True, False])
    @pytest.mark.parametrize("value", [NOTHING, Some(None), Some(1), Some(2)])
    def test_values_contains_agrees_with_iteration(self, nullable, value):
        m = MaybeMap({"a": None, "b": 1}, nullable=nullable)
        assert (value in m.values()) == (value in list(m.values()))

    def test_items_ignore_nullable(self):
        m = MaybeMap({"a": None}, nullable=False)
        assert list(m.items()) == [("a", Some(None))]

    def test_equality(self, abc_map):
        assert abc_map == {"a": Some(1), "b": Some(2), "c": Some(3)}
        assert abc_map == MaybeMap({"a": 1, "b": 2, "c": 3})
        assert abc_map != {"a": 1, "b": 2, "c": 3}

    def test_repr(self):
        assert repr(MaybeMap({"a": 1}, nullable=False)) == (
            "MaybeMap({'a': 1}, nullable=False)"
        )


class TestPutIfAbsent:
    def test_absent_inserts(self):
        m = MaybeMap()
        assert m.put_if_absent("k", lambda: Some(5)) == Some(5)
        assert m["k"] == Some(5)

    def test_absent_nothing_does_not_insert(self):
        m = MaybeMap()
        assert m.put_if_absent("k", lambda: NOTHING) == NOTHING
        assert "k" not in m

    def test_present_returns_existing_without_calling(self):
        m = MaybeMap({"k": 1})
        calls = []

        def if_absent():
            calls.append(True)
            return Some(99)

        assert m.put_if_absent("k", if_absent) == Some(1)
        assert calls == []
        assert m["k"] == Some(1)

    def test_setdefault(self):
        m = MaybeMap({"k": 1})
        assert m.setdefault("k", Some(2)) == Some(1)
        assert m.setdefault("j", Some(2)) == Some(2)
        assert m.setdefault("i") == NOTHING
        assert set(m) == {"k", "j"}


class TestRemove:
    def test_remove_present(self, abc_map):
        assert abc_map.remove("a") == Some(1)
        assert "a" not in abc_map

    def test_remove_missing(self, abc_map):
        assert abc_map.remove("z") == NOTHING
        assert len(abc_map) == 3

    def test_remove_stored_none(self):
        m = MaybeMap({"k": None})
        assert m.remove("k") == Some(None)
        assert m.is_empty

    def test_pop(self, abc_map):
        assert abc_map.pop("b") == Some(2)
        assert abc_map.pop("b") == NOTHING
        assert abc_map.pop("b", Some(0)) == Some(0)

    def test_popitem(self):
        m = MaybeMap({"k": 1})
        assert m.popitem() == ("k", Some(1))
        with pytest.raises(KeyError):
            m.popitem()

    def test_remove_where(self, abc_map):
        abc_map.remove_where(lambda k, v: some(v, 0) % 2 == 1)
        assert dict(abc_map.items()) == {"b": Some(2)}

    def test_remove_where_sees_keys(self, abc_map):
        abc_map.remove_where(lambda k, v: k == "c")
        assert abc_map.keys() == {"a", "b"}

    def test_clear(self, abc_map):
        abc_map.clear()
        assert abc_map.is_empty


class TestUpdate:
    def test_update_at_present(self):
        m = MaybeMap({"k": 1})
        result = m.update_at("k", lambda v: Some(some(v, 0) + 1))
        assert result == Some(2)
        assert m["k"] == Some(2)

    def test_update_at_present_receives_current(self):
        m = MaybeMap({"k": None})
        seen = []

        def update(current):
            seen.append(current)
            return current

        m.update_at("k", update)
        assert seen == [Some(None)]

    def test_update_at_to_nothing_removes(self):
        m = MaybeMap({"k": 1})
        assert m.update_at("k", lambda v: NOTHING) == NOTHING
        assert "k" not in m

    def test_update_at_absent_with_if_absent(self):
        m = MaybeMap()
        calls = []

        def update(current):
            calls.append(current)
            return current

        assert m.update_at("k", update, if_absent=lambda: Some(10)) == Some(10)
        assert calls == []
        assert m["k"] == Some(10)

    def test_update_at_absent_without_if_absent(self):
        m = MaybeMap()
        with pytest.raises(MissingKeyError) as exc_info:
            m.update_at("k", lambda v: v)
        assert exc_info.value.key == "k"
        assert "requires a default" in str(exc_info.value)
        assert m.is_empty

    def test_missing_key_error_is_a_key_error(self):
        with pytest.raises(KeyError):
            MaybeMap().update_at("k", lambda v: v)
        with pytest.raises(MaybeError):
            MaybeMap().update_at("k", lambda v: v)

    def test_update_all(self, abc_map):
        abc_map.update_all(lambda k, v: v.map(lambda x: x * 10))
        assert dict(abc_map.items()) == {
            "a": Some(10),
            "b": Some(20),
            "c": Some(30),
        }

    def test_update_all_can_remove(self, abc_map):
        abc_map.update_all(lambda k, v: NOTHING if k == "b" else v)
        assert abc_map.keys() == {"a", "c"}

    def test_update_all_only_visits_snapshot(self, abc_map):
        seen = []

        def update(key, value):
            seen.append(key)
            abc_map[key + key] = Some(0)
            return value

        abc_map.update_all(update)
        assert seen == ["a", "b", "c"]
        assert "aa" in abc_map


class TestAddAll:
    def test_add_entries(self):
        m = MaybeMap()
        m.add_entries([("a", Some(1)), ("b", Some(2))])
        assert dict(m.items()) == {"a": Some(1), "b": Some(2)}

    def test_add_entries_skips_nothing(self):
        m = MaybeMap({"a": 1})
        m.add_entries([("a", NOTHING), ("b", NOTHING), ("c", None)])
        assert dict(m.items()) == {"a": Some(1)}

    def test_add_entries_rejects_raw_values(self):
        with pytest.raises(ArgTypeError):
            MaybeMap().add_entries([("a", 1)])  # type: ignore[list-item]

    def test_add_all_mapping(self):
        m = MaybeMap()
        m.add_all({"a": Some(1), "b": NOTHING})
        assert dict(m.items()) == {"a": Some(1)}

    def test_add_all_pairs_and_keywords(self):
        m = MaybeMap()
        m.add_all([("a", Some(1))], b=Some(2))
        assert m.keys() == {"a", "b"}

    def test_add_all_maybe_map(self):
        m = MaybeMap()
        m.add_all(MaybeMap({"a": 1}))
        assert m["a"] == Some(1)

    def test_update_is_add_all(self):
        m = MaybeMap({"a": 1})
        m.update({"a": NOTHING, "b": Some(2)}, c=Some(3))
        assert dict(m.items()) == {"a": Some(1), "b": Some(2), "c": Some(3)}


class TestTransform:
    def test_for_each(self, abc_map):
        seen = []
        abc_map.for_each(lambda k, v: seen.append((k, v)))
        assert seen == [("a", Some(1)), ("b", Some(2)), ("c", Some(3))]

    def test_map(self, abc_map):
        result = abc_map.map(lambda k, v: (k.upper(), some(v, 0) * 2))
        assert result == {"A": 2, "B": 4, "C": 6}

    def test_cast(self, abc_map):
        cast = abc_map.cast(str, int)
        assert isinstance(cast, MaybeMap)
        assert cast == abc_map
        assert cast._map is not abc_map._map

    def test_cast_keeps_nullable(self):
        assert MaybeMap({"a": 1}, nullable=False).cast(str, int).nullable is False

    def test_cast_bad_value(self):
        m = MaybeMap({"a": 1, "b": "two"})
        with pytest.raises(CastError) as exc_info:
            m.cast(str, int)
        assert exc_info.value.role == "value"
        assert exc_info.value.key == "b"
        assert exc_info.value.value == "two"

    def test_cast_bad_key(self):
        m = MaybeMap({1: "one"})
        with pytest.raises(TypeError):
            m.cast(str, str)

    def test_cast_stored_none(self):
        m = MaybeMap({"a": None})
        with pytest.raises(CastError):
            m.cast(str, int)
        assert m.cast(str, Optional[int])["a"] == Some(None)

    def test_copy(self, abc_map):
        copied = abc_map.copy()
        copied["a"] = NOTHING
        assert abc_map["a"] == Some(1)
        assert copied["a"] == NOTHING


class TestScenarios:
    def test_set_read_delete(self):
        m: MaybeMap[str, int] = MaybeMap()

        m["a"] = Some(1)
        m["b"] = NOTHING

        assert m.keys() == {"a"}
        assert m["a"] == Some(1)
        assert m["b"] == NOTHING

        m["a"] = NOTHING

        assert m.is_empty

    def test_update_with_fallback(self):
        m: MaybeMap[str, int] = MaybeMap()

        assert m.update_at("x", lambda v: v, if_absent=lambda: Some(10)) == (
            Some(10)
        )
        assert m.update_at("x", lambda v: Maybe.some(some(v, 0) + 1)) == Some(
            11
        )
