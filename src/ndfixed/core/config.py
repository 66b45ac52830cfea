"""
The config module is responsible for managing the configuration of ndfixed and is based
on the Donfig python library.

Example:
    The default traversal order of ``NDArray.elements`` is read from ``array.order``.
    It can be changed programmatically:

    ```python
    from ndfixed.core.config import config

    config.set({"array.order": "F"})
    ```

    or with the environment variable ``NDFIXED_ARRAY__ORDER``. The double underscore
    ``__`` is used to indicate nested access.

    ```bash
    export NDFIXED_ARRAY__ORDER="F"
    ```

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Any, Literal, cast

from donfig import Config as DConfig


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "NDFIXED_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for ndfixed
config = Config(
    "ndfixed",
    defaults=[
        {
            "array": {
                "order": "C",
                "dtype": "float64",
            },
        }
    ],
)


def parse_indexing_order(data: Any) -> Literal["C", "F"]:
    if data in ("C", "F"):
        return cast("Literal['C', 'F']", data)
    msg = f"Expected one of ('C', 'F'), got {data} instead."
    raise ValueError(msg)
