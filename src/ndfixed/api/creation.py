from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import numpy as np

from ndfixed.core.array import NDArray
from ndfixed.core.array_spec import ArraySpec

if TYPE_CHECKING:
    import numpy.typing as npt

    from ndfixed.core.common import ShapeLike

__all__ = [
    "array",
    "copy",
    "empty",
    "full",
    "full_like",
    "make_array",
    "ones",
    "zeros",
    "zeros_like",
]

logger = getLogger(__name__)


def make_array(
    shape: ShapeLike, dtype: npt.DTypeLike | None = None, fill_value: Any = None
) -> NDArray:
    """Create an array with every element initialized.

    Parameters
    ----------
    shape : int or tuple of int
        Size of each dimension. Every size must be greater than zero.
    dtype : str or numpy.dtype, optional
        Element type. Defaults to the ``array.dtype`` config value.
    fill_value : scalar, optional
        Initial value of every element. Elements are zero-initialized by default.

    Returns
    -------
    NDArray
        The new array.

    Raises
    ------
    InvalidShapeError
        If ``shape`` is empty or has a dimension smaller than 1.
    """
    return ArraySpec(shape, dtype).create(fill_value=fill_value)


def empty(shape: ShapeLike, dtype: npt.DTypeLike | None = None) -> NDArray:
    """Create an array. Elements are always default-initialized, so this is ``zeros``."""
    return make_array(shape, dtype)


def zeros(shape: ShapeLike, dtype: npt.DTypeLike | None = None) -> NDArray:
    """Create an array with a fill value of zero.

    Parameters
    ----------
    shape : int or tuple of int
        Shape of the array.
    dtype : str or numpy.dtype, optional
        Element type.

    Returns
    -------
    NDArray
        The new array.
    """
    return make_array(shape, dtype, fill_value=0)


def ones(shape: ShapeLike, dtype: npt.DTypeLike | None = None) -> NDArray:
    """Create an array with a fill value of one.

    Parameters
    ----------
    shape : int or tuple of int
        Shape of the array.
    dtype : str or numpy.dtype, optional
        Element type.

    Returns
    -------
    NDArray
        The new array.
    """
    return make_array(shape, dtype, fill_value=1)


def full(shape: ShapeLike, fill_value: Any, dtype: npt.DTypeLike | None = None) -> NDArray:
    """Create an array with every element set to ``fill_value``.

    Parameters
    ----------
    shape : int or tuple of int
        Shape of the array.
    fill_value : scalar
        Value of every element.
    dtype : str or numpy.dtype, optional
        Element type.

    Returns
    -------
    NDArray
        The new array.
    """
    return make_array(shape, dtype, fill_value=fill_value)


def zeros_like(a: NDArray | npt.ArrayLike, dtype: npt.DTypeLike | None = None) -> NDArray:
    """Create an array of zeros with the shape, and unless given the dtype, of ``a``."""
    return full_like(a, 0, dtype=dtype)


def full_like(
    a: NDArray | npt.ArrayLike, fill_value: Any, dtype: npt.DTypeLike | None = None
) -> NDArray:
    """Create a filled array with the shape, and unless given the dtype, of ``a``."""
    if not isinstance(a, NDArray):
        a = np.asarray(a)
    return make_array(a.shape, a.dtype if dtype is None else dtype, fill_value=fill_value)


def array(data: npt.ArrayLike, dtype: npt.DTypeLike | None = None) -> NDArray:
    """Create an array holding a copy of ``data``.

    Parameters
    ----------
    data : array-like
        Nested sequences or a numpy array. Its shape becomes the array's shape.
    dtype : str or numpy.dtype, optional
        Element type. Defaults to the dtype numpy infers for ``data``.

    Returns
    -------
    NDArray
        The new array.
    """
    if isinstance(data, NDArray):
        return copy(data, dtype=dtype)
    source = np.asarray(data, dtype=dtype)
    result = make_array(source.shape, source.dtype)
    result.assign(source)
    return result


def copy(src: NDArray, dtype: npt.DTypeLike | None = None) -> NDArray:
    """Deep-copy ``src``, converting its elements to ``dtype`` if given.

    The copy never shares storage with ``src``, including when ``src`` is a sub-array.
    """
    if not isinstance(src, NDArray):
        raise TypeError(f"Expected an NDArray. Got {type(src).__name__} instead.")
    logger.debug("copy shape=%s level=%s", src.shape, src.level)
    return NDArray(src, dtype)
