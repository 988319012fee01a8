from typing import Any

from . import etc
from .etc import txt

# Re-Exports
# ============================================================================
#
# `ArgTypeError` lives in `maybe.etc.err` because `maybe.maybe` raises it and
# `maybe.etc` sits underneath everything else. Re-exported here so all the
# errors can be had from one place.
#
ArgTypeError = etc.err.ArgTypeError


class MaybeError(Exception):
    pass


class MissingKeyError(MaybeError, KeyError):
    """Raised by `maybe.maybe_map.MaybeMap.update_at` when asked to update a
    key that isn't there and not given an `if_absent` to fall back on.
    """

    key: Any

    def __init__(self, key: Any):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return (
            "update on missing key requires a default; "
            f"key {txt.fmt(self.key)} not found"
        )


class CastError(MaybeError, TypeError):
    """Raised by `maybe.maybe_map.MaybeMap.cast` when a key or held value does
    not satisfy the requested type.
    """

    role: str
    key: Any
    value: Any
    expected_type: Any

    def __init__(self, role: str, key: Any, value: Any, expected_type: Any):
        self.role = role
        self.key = key
        self.value = value
        self.expected_type = expected_type

        super().__init__(
            f"can't cast {role} at key {key!r} to "
            f"{txt.fmt(expected_type)}; found {txt.fmt_type_of(value)}: "
            f"{value!r}"
        )
