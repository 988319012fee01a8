from textwrap import dedent
from typing import Any

from . import txt


class ArgTypeError(TypeError):
    """Raised when an argument is not what the callee needs, including a
    required callback that was left out (`None`).
    """

    MULTILINE_TEMPLATE = dedent(
        """\
        Expected `{name}` to be `{expected_type}`.

        Given `{type}`:

        {value}
        """
    )

    INLINE_TEMPLATE = txt.squish(MULTILINE_TEMPLATE)

    name: str
    expected_type: Any
    value: Any

    def __init__(self, name: str, expected_type: Any, value: Any):
        self.name = name
        self.expected_type = expected_type
        self.value = value

        message = self.MULTILINE_TEMPLATE.format(
            name=name,
            expected_type=txt.fmt(expected_type),
            type=txt.fmt_type_of(value),
            value=txt.fmt_pretty(value),
        )

        super().__init__(message)
