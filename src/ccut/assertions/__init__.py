"""Assertion checks for test bodies."""

from ccut.assertions.checks import (
    ALMOST_EQUAL_TOLERANCE,
    assert_almost_equal,
    assert_equal,
    assert_exception,
    assert_false,
    assert_no_exception,
    assert_true,
    assert_unequal,
)

__all__ = [
    "ALMOST_EQUAL_TOLERANCE",
    "assert_almost_equal",
    "assert_equal",
    "assert_exception",
    "assert_false",
    "assert_no_exception",
    "assert_true",
    "assert_unequal",
]
