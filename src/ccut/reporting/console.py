"""Line-oriented, colourised console report."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from ccut.styling import Palette, Style

if TYPE_CHECKING:
    from ccut.runner import Outcome, RunResult, TestResult


_OUTCOME_LABELS: dict[str, tuple[str, tuple[Style, ...]]] = {
    "pass": ("PASS", (Style.GREEN,)),
    "fail": ("FAIL", (Style.RED,)),
    "exception": ("EXCEPTION", (Style.YELLOW,)),
    "unknown_fault": ("UNKNOWN EXCEPTION", (Style.RED, Style.BOLD)),
}


class ConsoleReporter:
    """Writes the run report to a text stream as it happens.

    Output for a run::

        Running test "test_a" . . . PASS
        Running test "test_b" . . . FAIL
        - - - Failures - - -
         -> [test_b] Line 12: Expected EQUAL, but was NOT EQUAL: [1] and [2]

        Total passed: [1 / 2]
    """

    def __init__(self, stream: TextIO | None = None, palette: Palette | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.palette = palette if palette is not None else Palette(enabled=True)

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def test_started(self, name: str) -> None:
        self._write(f'Running test "{name}" . . . ')

    def outcome_label(self, outcome: Outcome) -> str:
        label, styles = _OUTCOME_LABELS[outcome.value]
        return f"{self.palette(*styles)}{label}\n{self.palette.reset}"

    def test_finished(self, result: TestResult) -> None:
        self._write(self.outcome_label(result.outcome))

    def test_interrupted(self, name: str) -> None:
        self._write(f"{self.palette(Style.YELLOW)}INTERRUPTED\n{self.palette.reset}")

    def run_finished(self, run: RunResult) -> None:
        if run.failures:
            self._write("- - - Failures - - -\n")
            for name, message in run.failures:
                self._write(f" -> [{name}] {message}\n")
        self._write("\n")
        self._write(f"Total passed: [{run.passed} / {run.total}]\n")
