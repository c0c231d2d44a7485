"""Recover the literal argument text of a check from its call site."""

from __future__ import annotations

import ast
import inspect
import linecache
from dataclasses import dataclass, field
from types import FrameType


@dataclass
class CallSite:
    """Where a check was called from, and the source text of its arguments.

    ``args`` and ``kwargs`` are empty when the source cannot be recovered
    (interactive sessions, ``exec`` strings, stale files).
    """

    lineno: int
    args: list[str] = field(default_factory=list)
    kwargs: dict[str, str] = field(default_factory=dict)

    def text(self, index: int, name: str) -> str | None:
        if name in self.kwargs:
            return self.kwargs[name]
        if index < len(self.args):
            return self.args[index]
        return None


def _call_source(frame: FrameType) -> str | None:
    info = inspect.getframeinfo(frame, context=0)
    pos = info.positions
    if (
        pos is None
        or pos.lineno is None
        or pos.end_lineno is None
        or pos.col_offset is None
        or pos.end_col_offset is None
    ):
        return None

    lines = linecache.getlines(info.filename, frame.f_globals)
    if len(lines) < pos.end_lineno:
        return None

    # Column offsets are UTF-8 byte offsets
    chunk = [line.encode("utf-8") for line in lines[pos.lineno - 1 : pos.end_lineno]]
    chunk[-1] = chunk[-1][: pos.end_col_offset]
    chunk[0] = chunk[0][pos.col_offset :]
    return b"".join(chunk).decode("utf-8", errors="replace")


def _called_name(node: ast.Call) -> str | None:
    if isinstance(node.func, ast.Name):
        return node.func.id
    if isinstance(node.func, ast.Attribute):
        return node.func.attr
    return None


def capture_call_site(depth: int = 1) -> CallSite:
    """Describe the call that invoked the function ``depth`` frames up.

    With ``depth=1`` this describes how the caller of ``capture_call_site``
    was itself called.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(depth):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None or frame.f_back is None:
            return CallSite(lineno=0)
        callee = frame.f_code.co_name
        frame = frame.f_back

        site = CallSite(lineno=frame.f_lineno)
        source = _call_source(frame)
        if source is None:
            return site

        try:
            node = ast.parse(source.strip(), mode="eval").body
        except SyntaxError:
            return site
        if not isinstance(node, ast.Call) or _called_name(node) != callee:
            # called indirectly, e.g. through map() or an alias
            return site

        text = source.strip()
        for arg in node.args:
            segment = ast.get_source_segment(text, arg)
            if segment is None or isinstance(arg, ast.Starred):
                # positions after a *args splat are unknown
                break
            site.args.append(segment)
        for kw in node.keywords:
            if kw.arg is None:
                continue
            segment = ast.get_source_segment(text, kw.value)
            if segment is not None:
                site.kwargs[kw.arg] = segment
        return site
    finally:
        del frame
