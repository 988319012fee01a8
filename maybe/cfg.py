"""Package settings, read from environment variables when asked for.

| Variable             | Type   | Default | Used for                                |
| -------------------- | ------ | ------- | --------------------------------------- |
| `MAYBE_MAP_NULLABLE` | `bool` | `True`  | `MaybeMap(nullable=None)`               |
| `MAYBE_VERBOSITY`    | `int`  | `0`     | `setup_logging(verbosity=None)`         |

```python
>>> env_name("map_nullable")
'MAYBE_MAP_NULLABLE'

```
"""

from __future__ import annotations
import sys

import splatlog
from splatlog.types import Verbosity
from rich.console import Console

from .etc import env, txt
from .maybe import some

ENV_PREFIX = "MAYBE"

DEFAULT_MAP_NULLABLE = True
DEFAULT_VERBOSITY = Verbosity(0)

_LOG = splatlog.getLogger(__name__)


def env_name(name: str) -> str:
    return txt.as_env_name(f"{ENV_PREFIX}.{name}")


def get_map_nullable() -> bool:
    return some(
        env.get_maybe(env_name("map_nullable"), bool), DEFAULT_MAP_NULLABLE
    )


def get_verbosity() -> Verbosity:
    return Verbosity(
        some(env.get_maybe(env_name("verbosity"), int), DEFAULT_VERBOSITY)
    )


def setup_logging(verbosity: None | Verbosity = None) -> None:
    if verbosity is None:
        verbosity = get_verbosity()

    console = Console(file=sys.stderr)

    splatlog.setup(
        console=console,
        level={
            __package__: {
                Verbosity(0): splatlog.WARNING,
                Verbosity(1): splatlog.INFO,
                Verbosity(2): splatlog.DEBUG,
            },
        },
        verbosity=verbosity,
    )

    _LOG.debug("Logging set up", verbosity=verbosity)
