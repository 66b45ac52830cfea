from typing import Any

import hypothesis.extra.numpy as npst
import hypothesis.strategies as st
import numpy as np
import numpy.typing as npt

import ndfixed
from ndfixed.core.array import NDArray

array_shapes = npst.array_shapes(min_dims=1, max_dims=4, min_side=1, max_side=5)


def dtypes() -> st.SearchStrategy[np.dtype[Any]]:
    return (
        npst.boolean_dtypes()
        | npst.integer_dtypes(endianness="=")
        | npst.unsigned_integer_dtypes(endianness="=")
        | npst.floating_dtypes(endianness="=")
    )


@st.composite
def numpy_arrays(
    draw: st.DrawFn,
    *,
    shapes: st.SearchStrategy[tuple[int, ...]] = array_shapes,
    dtype: np.dtype[Any] | None = None,
) -> npt.NDArray[Any]:
    """
    Generate numpy arrays whose elements compare equal to themselves.
    """
    if dtype is None:
        dtype = draw(dtypes())
    if np.issubdtype(dtype, np.floating):
        elements = npst.from_dtype(dtype, allow_nan=False)
        return draw(npst.arrays(dtype=dtype, shape=shapes, elements=elements))
    return draw(npst.arrays(dtype=dtype, shape=shapes))


@st.composite
def arrays(
    draw: st.DrawFn,
    *,
    shapes: st.SearchStrategy[tuple[int, ...]] = array_shapes,
    dtype: np.dtype[Any] | None = None,
) -> NDArray:
    nparray = draw(numpy_arrays(shapes=shapes, dtype=dtype))
    return ndfixed.array(nparray)


@st.composite
def valid_indices(draw: st.DrawFn, *, shape: tuple[int, ...]) -> tuple[int, ...]:
    """A full index tuple inside ``shape``."""
    return tuple(draw(st.integers(min_value=0, max_value=size - 1)) for size in shape)


@st.composite
def out_of_range_indices(
    draw: st.DrawFn, *, shape: tuple[int, ...]
) -> tuple[tuple[int, ...], int]:
    """
    A full index tuple with exactly one index outside its dimension, either negative or
    past the end.

    Returns the tuple and the dimension holding the bad index.
    """
    index = list(draw(valid_indices(shape=shape)))
    level = draw(st.integers(min_value=0, max_value=len(shape) - 1))
    index[level] = draw(
        st.integers(min_value=-10, max_value=-1)
        | st.integers(min_value=shape[level], max_value=shape[level] + 10)
    )
    return tuple(index), level
