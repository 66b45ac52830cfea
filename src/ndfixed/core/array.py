from __future__ import annotations

from functools import cached_property
from logging import getLogger
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt

from ndfixed.core._info import ArrayInfo
from ndfixed.core.array_spec import ArraySpec
from ndfixed.core.common import c_strides, parse_order
from ndfixed.core.indexing import check_index, ensure_tuple, err_too_many_indices
from ndfixed.core.iterators import ColumnMajorIterator, RowMajorIterator
from ndfixed.errors import ShapeMismatchError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ndfixed.core.common import ArrayCoords, MemoryOrder

logger = getLogger(__name__)


class NDArray:
    """
    A dense array whose shape is fixed when it is constructed.

    Indexing with a single integer checks that one dimension and returns either a sub-array
    (a view sharing this array's storage) or, on a one-dimensional array, the element itself.
    Chained indexing ``a[i][j][k]`` therefore performs one bounds check per step.

    Parameters
    ----------
    source : ArraySpec or NDArray
        The definition of the array to create, or an array to deep-copy.
    dtype : str or numpy.dtype, optional
        Element type. When copying, elements are converted to this type.
    fill_value : scalar, optional
        Initial value of every element. Elements are zero-initialized by default.
        Ignored when copying.

    Examples
    --------
    >>> from ndfixed import ArraySpec
    >>> a = ArraySpec((2, 3, 4), dtype="int32").create()
    >>> a[1][2][3] = 7
    >>> a[1][2][3]
    np.int32(7)
    >>> a[1][3][0]
    Traceback (most recent call last):
    ...
    ndfixed.errors.IndexOutOfRangeError: index 3 is out of range for dimension 1 with length 3
    """

    _spec: ArraySpec
    _buffer: npt.NDArray[Any]
    _offset: int
    _strides: ArrayCoords
    _level: int

    def __init__(
        self,
        source: ArraySpec | NDArray,
        dtype: npt.DTypeLike | None = None,
        *,
        fill_value: Any = None,
    ) -> None:
        if isinstance(source, NDArray):
            spec = ArraySpec(source.shape, source.dtype if dtype is None else dtype)
            buffer = source._data.astype(spec.dtype).reshape(-1)
            logger.debug(
                "copied array shape=%s dtype=%s to dtype=%s", source.shape, source.dtype, spec.dtype
            )
        elif isinstance(source, ArraySpec):
            spec = source if dtype is None else ArraySpec(source.shape, dtype)
            if fill_value is None:
                buffer = np.zeros(spec.size, dtype=spec.dtype)
            else:
                buffer = np.full(spec.size, fill_value, dtype=spec.dtype)
            logger.debug("created array shape=%s dtype=%s", spec.shape, spec.dtype)
        else:
            raise TypeError(
                f"Expected an ArraySpec or an NDArray. Got {type(source).__name__} instead."
            )

        self._spec = spec
        self._buffer = buffer
        self._offset = 0
        self._strides = c_strides(spec.shape)
        self._level = 0

    @classmethod
    def _view(cls, parent: NDArray, spec: ArraySpec, offset: int, depth: int) -> NDArray:
        view = cls.__new__(cls)
        view._spec = spec
        view._buffer = parent._buffer
        view._offset = offset
        view._strides = parent._strides[depth:]
        view._level = parent._level + depth
        return view

    @property
    def spec(self) -> ArraySpec:
        return self._spec

    @property
    def shape(self) -> ArrayCoords:
        """The size of each dimension."""
        return self._spec.shape

    @property
    def ndim(self) -> int:
        return self._spec.ndim

    @property
    def size(self) -> int:
        """The total number of elements."""
        return self._spec.size

    @property
    def dtype(self) -> np.dtype[Any]:
        return self._spec.dtype

    @property
    def value_type(self) -> type[np.generic]:
        """The numpy scalar type of the elements."""
        return self._spec.value_type

    @property
    def nbytes(self) -> int:
        return self._spec.nbytes

    @property
    def level(self) -> int:
        """Number of dimensions indexed away to reach this array. Zero for an owning array."""
        return self._level

    @property
    def _data(self) -> npt.NDArray[Any]:
        # the elements of a node are contiguous in the buffer, so this is a view
        return self._buffer[self._offset : self._offset + self.size].reshape(self.shape)

    @cached_property
    def _child_specs(self) -> tuple[ArraySpec, ...]:
        # _child_specs[k] describes the node reached by indexing k + 1 dimensions
        return tuple(ArraySpec(self.shape[k:], self.dtype) for k in range(1, self.ndim))

    def _locate(self, selection: tuple[Any, ...]) -> int:
        if len(selection) > self.ndim:
            err_too_many_indices(selection, self.shape)
        offset = self._offset
        for depth, index in enumerate(selection):
            index = check_index(index, self.shape[depth], self._level + depth)
            offset += index * self._strides[depth]
        return offset

    def __getitem__(self, selection: Any) -> NDArray | Any:
        """Return the sub-array or the element at ``selection``.

        ``selection`` is an integer, or a tuple of integers as a shorthand for a chain of
        single-integer indexing steps.
        """
        selection = ensure_tuple(selection)
        if len(selection) == 0:
            return self
        offset = self._locate(selection)
        if len(selection) == self.ndim:
            return self._buffer[offset]
        depth = len(selection)
        return NDArray._view(self, self._child_specs[depth - 1], offset, depth)

    def __setitem__(self, selection: Any, value: Any) -> None:
        """Write an element, or copy ``value`` into the sub-array at ``selection``."""
        selection = ensure_tuple(selection)
        offset = self._locate(selection)
        if len(selection) == self.ndim:
            self._buffer[offset] = value
            return
        depth = len(selection)
        if depth == 0:
            target = self
        else:
            target = NDArray._view(self, self._child_specs[depth - 1], offset, depth)
        target.assign(value)

    def __len__(self) -> int:
        return self.shape[0]

    def __iter__(self) -> Iterator[NDArray | Any]:
        for index in range(self.shape[0]):
            yield self[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NDArray):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<NDArray shape={self.shape} dtype={self.dtype}>"

    def __copy__(self) -> NDArray:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> NDArray:
        return self.copy()

    def __array__(
        self, dtype: npt.DTypeLike | None = None, copy: bool | None = None
    ) -> npt.NDArray[Any]:
        """
        This method is used by numpy when converting an NDArray into a numpy array.
        """
        if copy is False:
            msg = "`copy=False` is not supported. This method always creates a copy."
            raise ValueError(msg)
        return self.to_numpy(dtype=dtype)

    def is_same_node(self, other: object) -> bool:
        """True if ``other`` is this array, or a view of the same elements of the same storage."""
        if other is self:
            return True
        return (
            isinstance(other, NDArray)
            and other._buffer is self._buffer
            and other._offset == self._offset
            and other.shape == self.shape
        )

    def copy(self, dtype: npt.DTypeLike | None = None) -> NDArray:
        """Return a deep copy, converting the elements to ``dtype`` if given."""
        return NDArray(self, dtype)

    def assign(self, other: NDArray | npt.ArrayLike) -> NDArray:
        """
        Copy the elements of ``other`` into this array, converting them to this array's dtype.

        Assigning an array to itself does nothing. Nothing is written if the shapes disagree.

        Raises
        ------
        ShapeMismatchError
            If ``other`` does not have exactly this array's shape.
        """
        if self.is_same_node(other):
            return self

        source = other._data if isinstance(other, NDArray) else np.asarray(other)
        if source.shape != self.shape:
            raise ShapeMismatchError(source.shape, self.shape)
        target = self._data
        if np.shares_memory(source, target):
            source = source.copy()
        np.copyto(target, source, casting="unsafe")
        return self

    def fill(self, value: Any) -> None:
        """Set every element to ``value``."""
        self._data[...] = value

    def to_numpy(self, dtype: npt.DTypeLike | None = None) -> npt.NDArray[Any]:
        """Return a copy of the elements as a C-ordered numpy array."""
        return self._data.astype(self.dtype if dtype is None else dtype, copy=True)

    def tolist(self) -> list[Any]:
        return self._data.tolist()  # type: ignore[no-any-return]

    def row_major_begin(self) -> RowMajorIterator:
        """Iterator at the first element of a traversal with the last dimension varying fastest."""
        return RowMajorIterator.begin(self)

    def row_major_end(self) -> RowMajorIterator:
        """Iterator one past the last element of a row-major traversal."""
        return RowMajorIterator.end(self)

    def col_major_begin(self) -> ColumnMajorIterator:
        """Iterator at the first element of a traversal with the first dimension varying fastest."""
        return ColumnMajorIterator.begin(self)

    def col_major_end(self) -> ColumnMajorIterator:
        """Iterator one past the last element of a column-major traversal."""
        return ColumnMajorIterator.end(self)

    def elements(self, order: MemoryOrder | None = None) -> Iterator[Any]:
        """
        Yield every element once.

        Parameters
        ----------
        order : {"C", "F"}, optional
            ``"C"`` for row-major order (last dimension fastest), ``"F"`` for column-major
            order (first dimension fastest). Defaults to the ``array.order`` config value.
        """
        if parse_order(order) == "C":
            yield from self.row_major_begin()
        else:
            yield from self.col_major_begin()

    @property
    def info(self) -> ArrayInfo:
        """
        Return a summary of the array.

        Examples
        --------
        >>> ndfixed.zeros((2, 3, 4), dtype="int32").info
        Type               : NDArray
        Data type          : int32
        Shape              : (2, 3, 4)
        Order              : C
        Traversal order    : C
        No. elements       : 24
        No. bytes          : 96
        """
        return ArrayInfo(
            _data_type=self.dtype,
            _shape=self.shape,
            _traversal_order=parse_order(None),
            _level=self._level,
            _count_elements=self.size,
            _count_bytes=self.nbytes,
        )
