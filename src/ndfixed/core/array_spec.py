from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from ndfixed.core.common import ArrayCoords, ShapeLike, parse_dtype, parse_shapelike, product

if TYPE_CHECKING:
    import numpy.typing as npt

    from ndfixed.core.array import NDArray


@dataclass(frozen=True)
class ArraySpec:
    """
    The definition of a fixed-shape array type: its shape and its element type.

    Shapes are validated here, when the definition is made, so an invalid shape never
    reaches array construction.

    Parameters
    ----------
    shape : int or tuple of int
        Size of each dimension. Every size must be greater than zero.
    dtype : str or numpy.dtype, optional
        Element type. Defaults to the ``array.dtype`` config value.
    """

    shape: ArrayCoords
    dtype: np.dtype[Any]

    def __init__(self, shape: ShapeLike, dtype: npt.DTypeLike | None = None) -> None:
        shape_parsed = parse_shapelike(shape)
        dtype_parsed = parse_dtype(dtype)

        object.__setattr__(self, "shape", shape_parsed)
        object.__setattr__(self, "dtype", dtype_parsed)

    @property
    def value_type(self) -> type[np.generic]:
        """The numpy scalar type of the elements, e.g. ``numpy.int32``."""
        return self.dtype.type

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        return product(self.shape)

    @property
    def nbytes(self) -> int:
        return self.size * self.dtype.itemsize

    def create(self, fill_value: Any = None) -> NDArray:
        """Construct an array of this definition with every element initialized."""
        from ndfixed.core.array import NDArray

        return NDArray(self, fill_value=fill_value)
