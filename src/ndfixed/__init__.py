import logging
from typing import Literal

from ndfixed._version import version as __version__
from ndfixed.api.creation import (
    array,
    copy,
    empty,
    full,
    full_like,
    make_array,
    ones,
    zeros,
    zeros_like,
)
from ndfixed.core.array import NDArray
from ndfixed.core.array_spec import ArraySpec
from ndfixed.core.config import config
from ndfixed.core.iterators import ColumnMajorIterator, RowMajorIterator
from ndfixed.errors import (
    IndexOutOfRangeError,
    InvalidShapeError,
    IteratorExhaustedError,
    ShapeMismatchError,
)


def print_debug_info() -> None:
    """
    Print version info for use in bug reports.
    """
    import platform
    from importlib.metadata import PackageNotFoundError, version

    def print_packages(packages: list[str]) -> None:
        not_installed = []
        for package in packages:
            try:
                print(f"{package}: {version(package)}")
            except PackageNotFoundError:
                not_installed.append(package)
        if not_installed:
            print("\n**Not Installed:**")
            for package in not_installed:
                print(package)

    required = [
        "numpy",
        "donfig",
    ]
    optional = [
        "typer",
        "hypothesis",
    ]

    print(f"platform: {platform.platform()}")
    print(f"python: {platform.python_version()}")
    print(f"ndfixed: {__version__}\n")
    print("**Required dependencies:**")
    print_packages(required)
    print("\n**Optional dependencies:**")
    print_packages(optional)


def set_log_level(
    level: Literal["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
) -> None:
    """Set the logging level for ndfixed.

    Parameters
    ----------
    level : str
        The logging level to set.
    """
    logging.getLogger("ndfixed").setLevel(level)


def set_format(log_format: str) -> None:
    """Set the format of logging for ndfixed.

    Parameters
    ----------
    log_format : str
        A format string accepted by ``logging.Formatter``.
    """
    logger = logging.getLogger("ndfixed")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=log_format))
    logger.addHandler(handler)


__all__ = [
    "ArraySpec",
    "ColumnMajorIterator",
    "IndexOutOfRangeError",
    "InvalidShapeError",
    "IteratorExhaustedError",
    "NDArray",
    "RowMajorIterator",
    "ShapeMismatchError",
    "__version__",
    "array",
    "config",
    "copy",
    "empty",
    "full",
    "full_like",
    "make_array",
    "ones",
    "print_debug_info",
    "set_format",
    "set_log_level",
    "zeros",
    "zeros_like",
]
