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
