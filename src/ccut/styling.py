"""ANSI SGR escape sequences for the console report."""

from __future__ import annotations

import os
from enum import Enum
from typing import TextIO


class Style(int, Enum):
    NONE = 0
    BOLD = 1
    RED = 31
    GREEN = 32
    YELLOW = 33


class ColorMode(str, Enum):
    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


def ansi(*styles: Style) -> str:
    """Return the escape sequence that activates ``styles`` in order.

    Codes are joined by ``;`` inside a single ``ESC[...m`` sequence.
    Raises ValueError when called without any style.
    """
    if not styles:
        raise ValueError("ansi() requires at least one style")
    return "\033[" + ";".join(str(int(s)) for s in styles) + "m"


def style(token: Style) -> str:
    return ansi(token)


class Palette:
    """Escape sequences bound to a colour switch.

    A disabled palette renders every sequence as an empty string, so the
    same report code produces plain text.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def __call__(self, *styles: Style) -> str:
        # empty calls fail in every colour mode
        sequence = ansi(*styles)
        return sequence if self.enabled else ""

    @property
    def reset(self) -> str:
        return self(Style.NONE)

    @classmethod
    def for_stream(cls, stream: TextIO, mode: ColorMode | str = ColorMode.ALWAYS) -> Palette:
        mode = ColorMode(mode)
        if mode is ColorMode.ALWAYS:
            return cls(enabled=True)
        if mode is ColorMode.NEVER:
            return cls(enabled=False)
        if os.environ.get("NO_COLOR"):
            return cls(enabled=False)
        isatty = getattr(stream, "isatty", None)
        return cls(enabled=bool(isatty and isatty()))
