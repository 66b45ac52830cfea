__all__ = [
    "BaseNDFixedError",
    "IndexOutOfRangeError",
    "InvalidShapeError",
    "IteratorExhaustedError",
    "ShapeMismatchError",
]


class BaseNDFixedError(ValueError):
    """
    Base error which the value errors of ndfixed are sub-classed from.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for the template string class
        variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class InvalidShapeError(BaseNDFixedError):
    """
    Raised when an array is defined with a shape that is empty or has a dimension smaller than 1.
    """

    _msg = "Invalid shape {!r}: {}"


class ShapeMismatchError(BaseNDFixedError):
    """
    Raised when assigning between arrays whose shapes disagree.
    """

    _msg = "Cannot assign an array of shape {!r} to an array of shape {!r}."


class IndexOutOfRangeError(IndexError):
    """
    Raised when an index falls outside ``[0, dimension_size)`` at one level of an index chain.

    Attributes
    ----------
    requested_index : int
        The index as given by the caller.
    dimension_size : int
        The length of the dimension that was indexed.
    level : int
        The dimension (0 is the outermost) at which the check failed.
    """

    def __init__(self, requested_index: int, dimension_size: int, level: int) -> None:
        self.requested_index = requested_index
        self.dimension_size = dimension_size
        self.level = level
        super().__init__(
            f"index {requested_index} is out of range for dimension {level} "
            f"with length {dimension_size}"
        )

    def __reduce__(self) -> tuple[type, tuple[int, int, int]]:
        return type(self), (self.requested_index, self.dimension_size, self.level)


class IteratorExhaustedError(IndexError):
    """
    Raised when an iterator positioned at the end of its traversal is dereferenced or advanced.
    """

    def __init__(self, operation: str = "dereference") -> None:
        super().__init__(f"cannot {operation} an iterator positioned at the end of the array")
