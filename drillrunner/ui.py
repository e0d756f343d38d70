"""Terminal styling and the warning/success message helpers."""

from __future__ import annotations

import os
import sys

_RESET = "\x1b[0m"
_BOLD = "1"
_RED = "31"
_GREEN = "32"
_BLUE = "34"


def no_emoji() -> bool:
    """Return True when the NO_EMOJI environment variable is set."""
    return "NO_EMOJI" in os.environ


def _colors_enabled() -> bool:
    force = os.environ.get("CLICOLOR_FORCE")
    if force and force != "0":
        return True
    if os.environ.get("CLICOLOR") == "0":
        return False
    return sys.stdout.isatty() and os.environ.get("TERM") != "dumb"


def _style(text: object, *codes: str) -> str:
    text = str(text)
    if not _colors_enabled():
        return text
    prefix = "".join(f"\x1b[{code}m" for code in codes)
    return f"{prefix}{text}{_RESET}"


def bold(text: object) -> str:
    """Render text in bold when the terminal supports colours."""
    return _style(text, _BOLD)


def blue(text: object) -> str:
    """Render text in blue when the terminal supports colours."""
    return _style(text, _BLUE)


def _red(text: object) -> str:
    return _style(text, _RED)


def _green(text: object) -> str:
    return _style(text, _GREEN)


def warn(message: str) -> None:
    """Print a red warning line."""
    marker = "!" if no_emoji() else "⚠️ "
    print(f"{_red(marker)} {_red(message)}")


def success(message: str) -> None:
    """Print a green success line."""
    marker = "✓" if no_emoji() else "✅"
    print(f"{_green(marker)} {_green(message)}")