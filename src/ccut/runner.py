from __future__ import annotations

import fnmatch
import logging
import signal
import sys
import threading
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, TextIO

from ccut import catalog as catalog_module
from ccut.catalog import TestCatalog, TestEntry
from ccut.config import RunConfig
from ccut.errors import DiagnosticError, TestTimeoutError
from ccut.reporting.console import ConsoleReporter
from ccut.styling import Palette
from ccut.verbose import close_logger, setup_logger

UNKNOWN_FAULT_MESSAGE = "Totally unknown error was thrown!"


class Outcome(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    EXCEPTION = "exception"
    UNKNOWN_FAULT = "unknown_fault"


@dataclass
class TestResult:
    __test__ = False

    name: str
    outcome: Outcome
    message: str | None = None
    duration_seconds: float = 0.0

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASS

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RunResult:
    results: list[TestResult] = field(default_factory=list)
    interrupted: bool = False

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> list[tuple[str, str]]:
        """(name, message) for every test that did not pass, in run order."""
        return [(r.name, r.message or "") for r in self.results if not r.passed]

    @property
    def passed(self) -> int:
        return self.total - len(self.failures)

    @property
    def all_passed(self) -> bool:
        return not self.interrupted and self.passed == self.total

    @property
    def exit_code(self) -> int:
        return 0 if self.all_passed else 1


def _timeouts_supported() -> bool:
    return (
        hasattr(signal, "SIGALRM")
        and threading.current_thread() is threading.main_thread()
    )


@contextmanager
def _deadline(seconds: float | None) -> Iterator[None]:
    if seconds is None:
        yield
        return

    def _expire(signum, frame):
        raise TestTimeoutError(seconds)

    previous = signal.signal(signal.SIGALRM, _expire)
    if previous is None:
        # installed outside Python; restore the default
        previous = signal.SIG_DFL
    signal.setitimer(signal.ITIMER_REAL, seconds)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, previous)


class Runner:
    """Runs every test of a catalog in name order and reports each outcome."""

    def __init__(
        self,
        catalog: TestCatalog,
        reporter: ConsoleReporter | None = None,
        name_filter: str | None = None,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ):
        self.catalog = catalog
        self.reporter = reporter if reporter is not None else ConsoleReporter()
        self.name_filter = name_filter
        self.timeout = timeout
        self.logger = logger if logger is not None else logging.getLogger("ccut.runner")

    def selected(self) -> list[TestEntry]:
        entries = self.catalog.entries()
        if self.name_filter:
            entries = [e for e in entries if fnmatch.fnmatchcase(e.name, self.name_filter)]
        return entries

    def execute(self) -> RunResult:
        """Run the selected tests and print the report. Returns the run result."""
        self.catalog.close()
        entries = self.selected()
        run = RunResult()

        timeout = self.timeout
        if timeout is not None and not _timeouts_supported():
            self.logger.warning(
                "Per-test timeout ignored: SIGALRM is unavailable or the run is "
                "not on the main thread"
            )
            timeout = None

        self.logger.debug(
            f"Starting run: {len(entries)} of {len(self.catalog)} test(s) selected"
        )

        for entry in entries:
            self.reporter.test_started(entry.name)
            try:
                result = self._run_one(entry, timeout)
            except KeyboardInterrupt:
                run.interrupted = True
                self.reporter.test_interrupted(entry.name)
                self.logger.warning(
                    f"Run interrupted by user during test '{entry.name}'; "
                    "reporting partial results"
                )
                break
            run.results.append(result)
            self.reporter.test_finished(result)

        self.reporter.run_finished(run)
        self.logger.debug(
            f"Run finished: {run.passed}/{run.total} passed"
            + (" (interrupted)" if run.interrupted else "")
        )
        return run

    def _run_one(self, entry: TestEntry, timeout: float | None) -> TestResult:
        self.logger.debug(f"Running test '{entry.name}'")
        start = time.perf_counter()

        outcome = Outcome.PASS
        message = None
        try:
            with _deadline(timeout):
                entry.body()
        except DiagnosticError as e:
            outcome = Outcome.FAIL
            message = e.render(self.reporter.palette)
            self.logger.debug(f"Test '{entry.name}' failed: {e}")
        except Exception as e:
            outcome = Outcome.EXCEPTION
            message = f"Unexpected exception: {e}"
            self.logger.debug(
                f"Test '{entry.name}' raised {type(e).__name__}: {e}", exc_info=True
            )
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            outcome = Outcome.UNKNOWN_FAULT
            message = UNKNOWN_FAULT_MESSAGE
            self.logger.debug(
                f"Test '{entry.name}' raised unrecognized {type(e).__name__}"
            )

        duration = time.perf_counter() - start
        self.logger.debug(
            f"Test '{entry.name}' finished: {outcome.name} in {duration:.3f}s"
        )
        return TestResult(
            name=entry.name,
            outcome=outcome,
            message=message,
            duration_seconds=duration,
        )


def run_all(
    catalog: TestCatalog | None = None,
    config: RunConfig | None = None,
    stream: TextIO | None = None,
) -> RunResult:
    """Run ``catalog`` (the default catalog when omitted) with ``config``."""
    if catalog is None:
        catalog = catalog_module.default_catalog
    if config is None:
        config = RunConfig()
    if stream is None:
        stream = sys.stdout

    reporter = ConsoleReporter(stream, Palette.for_stream(stream, config.color))

    logger = None
    if config.debug_log:
        logger = setup_logger(
            Path(config.debug_log), verbose=config.verbose, logger_name="ccut_run"
        )
    elif config.verbose:
        logger = logging.getLogger("ccut.runner")
        logger.setLevel(logging.DEBUG)
        if not logger.handlers:
            logger.addHandler(logging.StreamHandler(sys.stderr))

    try:
        runner = Runner(
            catalog,
            reporter=reporter,
            name_filter=config.name_filter,
            timeout=config.timeout,
            logger=logger,
        )
        return runner.execute()
    finally:
        if config.debug_log and logger is not None:
            close_logger(logger)
