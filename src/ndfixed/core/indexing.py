from __future__ import annotations

import itertools
import numbers
from collections.abc import Iterator
from typing import Any, TypeGuard

import numpy as np

from ndfixed.core.common import ArrayCoords, MemoryOrder
from ndfixed.errors import IndexOutOfRangeError


def is_integer(x: Any) -> TypeGuard[int]:
    """True if x is an integer (both pure Python or NumPy)."""
    return isinstance(x, numbers.Integral) and not is_bool(x)


def is_bool(x: Any) -> TypeGuard[bool | np.bool_]:
    """True if x is a boolean (both pure Python or NumPy)."""
    return type(x) in [bool, np.bool_]


def check_index(index: Any, dim_len: int, level: int) -> int:
    """
    Bounds-check a single index against one dimension.

    Valid indices lie in ``[0, dim_len)``; negative indices are out of range. Only this
    dimension is checked; deeper dimensions are checked by the next step of an index chain.

    Raises
    ------
    TypeError
        If ``index`` is not an integer.
    IndexOutOfRangeError
        If ``index`` falls outside the dimension.
    """
    if not is_integer(index):
        raise TypeError(
            f"array indices must be integers, not {type(index).__name__} (dimension {level})"
        )
    requested = int(index)
    if requested < 0 or requested >= dim_len:
        raise IndexOutOfRangeError(requested, dim_len, level)
    return requested


def ensure_tuple(v: Any) -> tuple[Any, ...]:
    if not isinstance(v, tuple):
        v = (v,)
    return v


def err_too_many_indices(selection: Any, shape: ArrayCoords) -> None:
    raise IndexError(f"too many indices for array; expected {len(shape)}, got {len(selection)}")


def c_order_iter(shape: ArrayCoords) -> Iterator[ArrayCoords]:
    """Positions of ``shape`` with the last dimension varying fastest."""
    return itertools.product(*(range(x) for x in shape))


def f_order_iter(shape: ArrayCoords) -> Iterator[ArrayCoords]:
    """Positions of ``shape`` with the first dimension varying fastest."""
    for reversed_coords in itertools.product(*(range(x) for x in reversed(shape))):
        yield reversed_coords[::-1]


def order_iter(shape: ArrayCoords, order: MemoryOrder) -> Iterator[ArrayCoords]:
    if order == "C":
        return c_order_iter(shape)
    return f_order_iter(shape)
