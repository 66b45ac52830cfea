from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.testing import assert_array_equal

if TYPE_CHECKING:
    import numpy.typing as npt

    from ndfixed.core.array import NDArray

__all__ = ["assert_array_elements_equal"]


def assert_array_elements_equal(actual: NDArray, expected: npt.ArrayLike) -> None:
    """Assert that ``actual`` has the shape of ``expected`` and holds the same elements.

    Warnings
    --------
    Always copies data, only use for testing and debugging
    """
    expected_np = np.asarray(expected)
    assert actual.shape == expected_np.shape
    assert_array_equal(actual.to_numpy(), expected_np)
