"""Process-wide registry of declared tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, overload

from ccut.errors import CatalogClosedError, DuplicateTestError

TestBody = Callable[[], object]


@dataclass(frozen=True)
class TestEntry:
    __test__ = False

    name: str
    body: TestBody


class TestCatalog:
    """Tests keyed by name, handed out in ascending name order.

    Registration is a startup phase: once ``close()`` is called (the runner
    does this before executing anything) further ``add`` calls fail.
    """

    __test__ = False

    def __init__(self) -> None:
        self._entries: dict[str, TestEntry] = {}
        self._closed = False

    def add(self, name: str, body: TestBody) -> TestEntry:
        if not name:
            raise ValueError("test name must not be empty")
        if not callable(body):
            raise TypeError(f"test body for {name!r} is not callable")
        if self._closed:
            raise CatalogClosedError(
                f"cannot register test {name!r}: the run has already started"
            )
        if name in self._entries:
            raise DuplicateTestError(f"test {name!r} is already registered")
        entry = TestEntry(name=name, body=body)
        self._entries[name] = entry
        return entry

    def entries(self) -> list[TestEntry]:
        return [self._entries[name] for name in sorted(self._entries)]

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[TestEntry]:
        return iter(self.entries())


default_catalog = TestCatalog()


@overload
def test(name: TestBody) -> TestBody: ...


@overload
def test(
    name: str | None = None, *, catalog: TestCatalog | None = None
) -> Callable[[TestBody], TestBody]: ...


def test(name=None, *, catalog=None):
    """Register a zero-argument function as a test.

    Usable bare (``@test``, registered under the function name) or with an
    explicit name and/or catalog (``@test("name")``). The function is
    returned unchanged.
    """
    if callable(name):
        func = name
        default_catalog.add(func.__name__, func)
        return func

    def decorator(func: TestBody) -> TestBody:
        target = catalog if catalog is not None else default_catalog
        target.add(name or func.__name__, func)
        return func

    return decorator


test.__test__ = False
