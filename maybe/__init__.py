"""Explicit optional values, and a mapping that speaks them.

```python
>>> import maybe
>>> m = maybe.MaybeMap()
>>> m["a"] = maybe.Some(1)
>>> maybe.some(m["a"], 0), maybe.some(m["b"], 0)
(1, 0)

```
"""

from .maybe import (
    Maybe,
    Some,
    Nothing,
    NOTHING,
    some,
    map_some,
    is_nothing,
    is_some,
    when,
    flatten,
    filter,
    for_each,
    count,
)
from .maybe_map import MaybeMap
from .err import ArgTypeError, MaybeError, MissingKeyError, CastError
from . import cfg
