import io

import pytest

from ccut.styling import ColorMode, Palette, Style, ansi, style


def test_ansi_single_code():
    assert ansi(Style.GREEN) == "\033[32m"


def test_ansi_joins_codes_in_order():
    assert ansi(Style.RED, Style.BOLD) == "\033[31;1m"
    assert ansi(Style.BOLD, Style.RED) == "\033[1;31m"


def test_ansi_reset_code():
    assert ansi(Style.NONE) == "\033[0m"


def test_ansi_without_styles_raises():
    with pytest.raises(ValueError, match="at least one style"):
        ansi()


def test_style_wraps_single_token():
    assert style(Style.YELLOW) == ansi(Style.YELLOW)


def test_disabled_palette_renders_nothing():
    palette = Palette(enabled=False)
    assert palette(Style.RED, Style.BOLD) == ""
    assert palette.reset == ""


def test_disabled_palette_still_rejects_empty_call():
    with pytest.raises(ValueError):
        Palette(enabled=False)()


def test_enabled_palette_matches_ansi():
    palette = Palette()
    assert palette(Style.RED, Style.BOLD) == "\033[31;1m"
    assert palette.reset == "\033[0m"


def test_palette_for_stream_modes(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    buf = io.StringIO()
    assert Palette.for_stream(buf, ColorMode.ALWAYS).enabled is True
    assert Palette.for_stream(buf, "never").enabled is False
    # StringIO is not a terminal
    assert Palette.for_stream(buf, "auto").enabled is False


def test_palette_auto_respects_tty_and_no_color(monkeypatch):
    class FakeTTY(io.StringIO):
        def isatty(self):
            return True

    monkeypatch.delenv("NO_COLOR", raising=False)
    assert Palette.for_stream(FakeTTY(), ColorMode.AUTO).enabled is True

    monkeypatch.setenv("NO_COLOR", "1")
    assert Palette.for_stream(FakeTTY(), ColorMode.AUTO).enabled is False


def test_unknown_color_mode_rejected():
    with pytest.raises(ValueError):
        Palette.for_stream(io.StringIO(), "sometimes")
