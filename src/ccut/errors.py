"""Error types raised by the framework."""

from __future__ import annotations

from ccut.styling import Palette, Style


class CcutError(Exception):
    """Base class for framework usage errors."""


class DuplicateTestError(CcutError):
    """A test name was registered twice."""


class CatalogClosedError(CcutError):
    """Registration was attempted after the run started."""


class TestTimeoutError(Exception):
    """Raised inside a test body when its deadline expires."""

    __test__ = False

    def __init__(self, seconds: float):
        super().__init__(f"test exceeded timeout of {seconds:g}s")
        self.seconds = seconds


class DiagnosticError(Exception):
    """Failure raised by an assertion check.

    Carries the human-readable reason and the call-site line of the failing
    check. ``render()`` produces the report text; ``str()`` is the same text
    without escape sequences.
    """

    def __init__(self, reason: str, location: int):
        super().__init__(reason, location)
        self._reason = reason
        self._location = location

    @property
    def reason(self) -> str:
        return self._reason

    @property
    def location(self) -> int:
        return self._location

    def render(self, palette: Palette | None = None) -> str:
        if palette is None:
            palette = Palette(enabled=True)
        return (
            f"Line {palette(Style.BOLD)}{self._location}{palette(Style.NONE)}: "
            f"{self._reason}"
        )

    def __str__(self) -> str:
        return self.render(Palette(enabled=False))
