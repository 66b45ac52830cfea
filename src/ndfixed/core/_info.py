import dataclasses
import textwrap
from typing import Any, Literal

import numpy as np


def human_readable_size(size: int) -> str:
    if size < 2**10:
        return f"{size}"
    elif size < 2**20:
        return f"{size / float(2**10):.1f}K"
    elif size < 2**30:
        return f"{size / float(2**20):.1f}M"
    elif size < 2**40:
        return f"{size / float(2**30):.1f}G"
    elif size < 2**50:
        return f"{size / float(2**40):.1f}T"
    else:
        return f"{size / float(2**50):.1f}P"


def byte_info(size: int) -> str:
    if size < 2**10:
        return str(size)
    else:
        return f"{size} ({human_readable_size(size)})"


@dataclasses.dataclass(kw_only=True)
class ArrayInfo:
    """
    Visual summary for an NDArray.

    Note that this class and its properties are not part of
    the public API.
    """

    _type: Literal["NDArray"] = "NDArray"
    _data_type: np.dtype[Any]
    _shape: tuple[int, ...]
    _order: Literal["C"] = "C"
    _traversal_order: Literal["C", "F"]
    _level: int = 0
    _count_elements: int
    _count_bytes: int

    def __repr__(self) -> str:
        template = textwrap.dedent("""\
        Type               : {_type}
        Data type          : {_data_type}
        Shape              : {_shape}
        Order              : {_order}
        Traversal order    : {_traversal_order}""")

        if self._level:
            template += "\nLevel              : {_level}"

        template += "\nNo. elements       : {_count_elements}"
        template += "\nNo. bytes          : {_count_bytes}"

        kwargs = {field.name: getattr(self, field.name) for field in dataclasses.fields(self)}
        kwargs["_count_bytes"] = byte_info(self._count_bytes)
        return template.format(**kwargs)
