"""Assertion checks raising DiagnosticError on failure.

Every check takes the evaluated value(s) and, optionally, the literal source
text of each expression and the location to report. Omitted texts and
location are recovered from the calling line, so a failing

    assert_equal(total, 3)

reports ``Expected EQUAL, but was NOT EQUAL: [total] and [3]``.
"""

from __future__ import annotations

from typing import Any, Callable

from ccut.assertions.source import CallSite, capture_call_site
from ccut.errors import DiagnosticError, TestTimeoutError

ALMOST_EQUAL_TOLERANCE = 0.0001


def _describe(
    site: CallSite, index: int, name: str, value: Any, explicit: str | None
) -> str:
    if explicit is not None:
        return explicit
    text = site.text(index, name)
    return text if text is not None else repr(value)


def _location(site: CallSite, explicit: int | None) -> int:
    return explicit if explicit is not None else site.lineno


def assert_true(expr: Any, text: str | None = None, location: int | None = None) -> None:
    if not expr:
        site = capture_call_site()
        raise DiagnosticError(
            f'Expected TRUE, but was FALSE: "{_describe(site, 0, "expr", expr, text)}"',
            _location(site, location),
        )


def assert_false(expr: Any, text: str | None = None, location: int | None = None) -> None:
    if expr:
        site = capture_call_site()
        raise DiagnosticError(
            f'Expected FALSE, but was TRUE: "{_describe(site, 0, "expr", expr, text)}"',
            _location(site, location),
        )


def _pair_message(
    expected: str,
    site: CallSite,
    lhs: Any,
    rhs: Any,
    lhs_text: str | None,
    rhs_text: str | None,
) -> str:
    return (
        f"Expected {expected}, but was NOT {expected}: "
        f"[{_describe(site, 0, 'lhs', lhs, lhs_text)}] and "
        f"[{_describe(site, 1, 'rhs', rhs, rhs_text)}]"
    )


def assert_equal(
    lhs: Any,
    rhs: Any,
    lhs_text: str | None = None,
    rhs_text: str | None = None,
    location: int | None = None,
) -> None:
    if not (lhs == rhs):
        site = capture_call_site()
        raise DiagnosticError(
            _pair_message("EQUAL", site, lhs, rhs, lhs_text, rhs_text),
            _location(site, location),
        )


def assert_unequal(
    lhs: Any,
    rhs: Any,
    lhs_text: str | None = None,
    rhs_text: str | None = None,
    location: int | None = None,
) -> None:
    if not (lhs != rhs):
        site = capture_call_site()
        raise DiagnosticError(
            _pair_message("UNEQUAL", site, lhs, rhs, lhs_text, rhs_text),
            _location(site, location),
        )


def assert_almost_equal(
    lhs: float,
    rhs: float,
    lhs_text: str | None = None,
    rhs_text: str | None = None,
    location: int | None = None,
) -> None:
    """Pass when ``lhs`` and ``rhs`` differ by less than ALMOST_EQUAL_TOLERANCE."""
    if not (abs(lhs - rhs) < ALMOST_EQUAL_TOLERANCE):
        site = capture_call_site()
        raise DiagnosticError(
            _pair_message("EQUAL", site, lhs, rhs, lhs_text, rhs_text),
            _location(site, location),
        )


def _raises(call: Callable[[], Any]) -> bool:
    # Only recoverable errors count; anything outside Exception propagates
    try:
        call()
    except TestTimeoutError:
        # deadline expiry always reaches the runner
        raise
    except Exception:
        return True
    return False


def assert_exception(
    call: Callable[[], Any], text: str | None = None, location: int | None = None
) -> None:
    if not _raises(call):
        site = capture_call_site()
        raise DiagnosticError(
            "Expected EXCEPTION, but got NO EXCEPTION: "
            f'"{_describe(site, 0, "call", call, text)}"',
            _location(site, location),
        )


def assert_no_exception(
    call: Callable[[], Any], text: str | None = None, location: int | None = None
) -> None:
    if _raises(call):
        site = capture_call_site()
        raise DiagnosticError(
            "Expected NO EXCEPTION, but got EXCEPTION: "
            f'"{_describe(site, 0, "call", call, text)}"',
            _location(site, location),
        )
