"""A minimal test harness: declare tests, run them, read a colourised report.

    from ccut import assert_equal, main, test

    @test
    def addition():
        assert_equal(1 + 1, 2)

    if __name__ == "__main__":
        raise SystemExit(main())
"""

from __future__ import annotations

from typing import TextIO

from ccut.assertions import (
    ALMOST_EQUAL_TOLERANCE,
    assert_almost_equal,
    assert_equal,
    assert_exception,
    assert_false,
    assert_no_exception,
    assert_true,
    assert_unequal,
)
from ccut.catalog import TestCatalog, TestEntry, test
from ccut.config import RunConfig
from ccut.errors import (
    CatalogClosedError,
    CcutError,
    DiagnosticError,
    DuplicateTestError,
    TestTimeoutError,
)
from ccut.runner import Outcome, Runner, RunResult, TestResult, run_all
from ccut.styling import ColorMode, Palette, Style, ansi, style


def main(
    *,
    catalog: TestCatalog | None = None,
    config: RunConfig | None = None,
    stream: TextIO | None = None,
) -> int:
    """Run every registered test, print the report, return the exit status.

    The status is 0 when every test passed and 1 otherwise.
    """
    return run_all(catalog=catalog, config=config, stream=stream).exit_code


__all__ = [
    "ALMOST_EQUAL_TOLERANCE",
    "CatalogClosedError",
    "CcutError",
    "ColorMode",
    "DiagnosticError",
    "DuplicateTestError",
    "Outcome",
    "Palette",
    "RunConfig",
    "RunResult",
    "Runner",
    "Style",
    "TestCatalog",
    "TestEntry",
    "TestResult",
    "TestTimeoutError",
    "ansi",
    "assert_almost_equal",
    "assert_equal",
    "assert_exception",
    "assert_false",
    "assert_no_exception",
    "assert_true",
    "assert_unequal",
    "main",
    "run_all",
    "style",
    "test",
]
