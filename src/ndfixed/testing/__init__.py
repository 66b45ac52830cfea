from ndfixed.testing.utils import assert_array_elements_equal

__all__ = ["assert_array_elements_equal"]
