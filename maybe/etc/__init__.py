"""General-purpose helpers.

Nothing in `maybe.etc` imports anything from the rest of `maybe` except
`maybe.maybe` itself (the value type) and external dependencies.
"""

from . import txt, err
