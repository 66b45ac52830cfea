"""
Full-traversal iterators over an NDArray.

Both iterator kinds keep one ``LevelState`` per dimension. They differ only in which level
moves on each step: ``RowMajorIterator`` steps the deepest level and carries outwards, so the
last dimension varies fastest; ``ColumnMajorIterator`` steps the outermost level and carries
inwards, so the first dimension varies fastest.

An iterator holds a weak reference to the storage of the array it walks. It never keeps that
array alive, and using it after the array is gone raises ``ReferenceError``. Writing elements
during a traversal does not disturb it; no other invalidation tracking is done.
"""

from __future__ import annotations

import dataclasses
import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Self

from ndfixed.errors import IteratorExhaustedError

if TYPE_CHECKING:
    import numpy.typing as npt

    from ndfixed.core.array import NDArray
    from ndfixed.core.common import ArrayCoords, MemoryOrder


@dataclass
class LevelState:
    """
    Traversal state of one dimension.

    Attributes
    ----------
    index : int
        Current index in ``[0, size)``.
    size : int
        Length of the dimension.
    exhausted : bool
        Set when this level wrapped around on the last step. Only the outermost level
        keeps it once the step is complete, and then the traversal is over.
    """

    index: int
    size: int
    exhausted: bool = False

    def reset(self) -> None:
        self.index = 0
        self.exhausted = False


class DimensionIterator(ABC):
    """
    Base class of the traversal iterators.

    Iterators are created with the ``begin`` and ``end`` class methods, or with the
    ``row_major_begin`` / ``col_major_begin`` family of ``NDArray`` methods. They support
    explicit stepping (``advance``, ``post_advance``, ``dereference``, ``==``) as well as the
    Python iterator protocol, where ``next`` returns the current element and then advances.
    """

    order: ClassVar[MemoryOrder]

    _buffer_ref: weakref.ReferenceType[npt.NDArray[Any]]
    _offset: int
    _strides: ArrayCoords
    _levels: list[LevelState]

    def __init__(self, array: NDArray, *, at_end: bool = False) -> None:
        self._buffer_ref = weakref.ref(array._buffer)
        self._offset = array._offset
        self._strides = array._strides
        self._levels = [LevelState(index=0, size=size) for size in array.shape]
        self._levels[0].exhausted = at_end

    @classmethod
    def begin(cls, array: NDArray) -> Self:
        return cls(array)

    @classmethod
    def end(cls, array: NDArray) -> Self:
        return cls(array, at_end=True)

    @property
    def exhausted(self) -> bool:
        """True once the traversal is complete, i.e. the iterator equals ``end``."""
        return self._levels[0].exhausted

    @property
    def position(self) -> ArrayCoords:
        """The index of the current element along each dimension."""
        return tuple(level.index for level in self._levels)

    @property
    def levels(self) -> tuple[LevelState, ...]:
        return tuple(dataclasses.replace(level) for level in self._levels)

    def _get_buffer(self) -> npt.NDArray[Any]:
        buffer = self._buffer_ref()
        if buffer is None:
            raise ReferenceError("the array this iterator refers to no longer exists")
        return buffer

    def _flat_index(self) -> int:
        return self._offset + sum(
            level.index * stride for level, stride in zip(self._levels, self._strides, strict=True)
        )

    def dereference(self) -> Any:
        """
        Return the element at the current position.

        Raises
        ------
        IteratorExhaustedError
            If the iterator is positioned at the end of the traversal.
        """
        if self.exhausted:
            raise IteratorExhaustedError("dereference")
        return self._get_buffer()[self._flat_index()]

    def _write(self, value: Any) -> None:
        if self.exhausted:
            raise IteratorExhaustedError("write through")
        self._get_buffer()[self._flat_index()] = value

    value = property(dereference, _write, doc="The element at the current position.")

    @abstractmethod
    def _step(self) -> None:
        """Move the level states one position along the traversal."""
        ...

    def advance(self) -> Self:
        """Move to the next position and return this iterator."""
        if self.exhausted:
            raise IteratorExhaustedError("advance")
        self._get_buffer()
        self._step()
        return self

    def post_advance(self) -> Self:
        """Move to the next position and return a copy of the iterator from before the move."""
        previous = self.copy()
        self.advance()
        return previous

    def copy(self) -> Self:
        new = type(self).__new__(type(self))
        new._buffer_ref = self._buffer_ref
        new._offset = self._offset
        new._strides = self._strides
        new._levels = [dataclasses.replace(level) for level in self._levels]
        return new

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        if (
            self._buffer_ref() is not other._buffer_ref()
            or self._offset != other._offset
            or len(self._levels) != len(other._levels)
        ):
            return False
        for mine, theirs in zip(self._levels, other._levels, strict=True):
            if (mine.index, mine.size, mine.exhausted) != (
                theirs.index,
                theirs.size,
                theirs.exhausted,
            ):
                return False
            # both finished here; deeper levels are at begin by convention
            if mine.exhausted:
                return True
        return True

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Any:
        if self.exhausted:
            raise StopIteration
        value = self.dereference()
        self.advance()
        return value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} position={self.position} exhausted={self.exhausted}>"


class RowMajorIterator(DimensionIterator):
    """Traverses an array with the last dimension varying fastest."""

    order = "C"

    def _step(self) -> None:
        levels = self._levels
        for depth in range(len(levels) - 1, -1, -1):
            level = levels[depth]
            level.index += 1
            if level.index < level.size:
                level.exhausted = False
                for inner in levels[depth + 1 :]:
                    inner.reset()
                return
            level.index = 0
            level.exhausted = True

        # the carry left the outermost level
        for inner in levels[1:]:
            inner.reset()


class ColumnMajorIterator(DimensionIterator):
    """Traverses an array with the first dimension varying fastest."""

    order = "F"

    def _step(self) -> None:
        levels = self._levels
        for depth, level in enumerate(levels):
            level.index = (level.index + 1) % level.size
            if level.index != 0:
                level.exhausted = False
                for outer in levels[:depth]:
                    outer.exhausted = False
                return
            level.exhausted = True

        # the deepest level wrapped, so every position has been visited
        for inner in levels[1:]:
            inner.reset()
        levels[0].exhausted = True
