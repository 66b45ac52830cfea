from __future__ import annotations

import functools
import numbers
import operator
from collections.abc import Iterable
from typing import Any, Literal, cast

import numpy as np
import numpy.typing as npt

from ndfixed.core.config import config as ndfixed_config
from ndfixed.core.config import parse_indexing_order
from ndfixed.errors import InvalidShapeError

ShapeLike = Iterable[int] | int
ArrayCoords = tuple[int, ...]
MemoryOrder = Literal["C", "F"]


def product(tup: tuple[int, ...]) -> int:
    return functools.reduce(operator.mul, tup, 1)


def parse_shapelike(data: ShapeLike) -> ArrayCoords:
    """Normalize ``data`` to a shape tuple, rejecting shapes no array can have."""
    # handle 1D convenience form
    if isinstance(data, numbers.Integral) and not isinstance(data, bool):
        data = (int(data),)
    try:
        data_tuple = tuple(data)  # type: ignore[arg-type]
    except TypeError as e:
        msg = f"Expected an integer or an iterable of integers. Got {data} instead."
        raise TypeError(msg) from e

    if len(data_tuple) == 0:
        raise InvalidShapeError(data_tuple, "an array needs at least one dimension")
    if not all(isinstance(v, numbers.Integral) and not isinstance(v, bool) for v in data_tuple):
        raise InvalidShapeError(data_tuple, "dimension sizes must be integers")
    if not all(v > 0 for v in data_tuple):
        raise InvalidShapeError(data_tuple, "every dimension size must be greater than zero")
    return tuple(int(v) for v in data_tuple)


def parse_order(data: Any) -> MemoryOrder:
    if data is None:
        data = ndfixed_config.get("array.order")
    return parse_indexing_order(data)


def parse_dtype(data: npt.DTypeLike | None) -> np.dtype[Any]:
    if data is None:
        data = ndfixed_config.get("array.dtype")
    try:
        dtype = np.dtype(data)
    except TypeError as e:
        msg = f"Expected a numpy data type. Got {data!r} instead."
        raise TypeError(msg) from e
    if dtype.hasobject:
        msg = f"Arrays with object elements are not supported. Got {dtype} instead."
        raise ValueError(msg)
    return cast("np.dtype[Any]", dtype)


def c_strides(shape: ArrayCoords) -> ArrayCoords:
    """Element strides of a C-contiguous (row-major) layout of ``shape``."""
    strides = [1] * len(shape)
    for axis in range(len(shape) - 2, -1, -1):
        strides[axis] = strides[axis + 1] * shape[axis + 1]
    return tuple(strides)
