"""Rendering configuration for the tree view.

The renderer never reaches for global style state: glyphs and styling
functions travel in a :class:`TreeTheme` value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from clitree.utils import visible_width

# ── ANSI helpers ─────────────────────────────────────────────────────

_BOLD = "\033[1m"
_DIM = "\033[2m"
_RESET = "\033[0m"


def _identity(text: str) -> str:
    return text


def bold(text: str) -> str:
    return f"{_BOLD}{text}{_RESET}"


def dim(text: str) -> str:
    return f"{_DIM}{text}{_RESET}"


def fg_hex(color: str, text: str, *, strong: bool = False) -> str:
    """Wrap *text* in a 24-bit foreground color given as ``#RRGGBB``."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"expected a #RRGGBB color, got {color!r}")
    r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    prefix = _BOLD if strong else ""
    return f"{prefix}\033[38;2;{r};{g};{b}m{text}{_RESET}"


# ── Theme ────────────────────────────────────────────────────────────


@dataclass
class TreeTheme:
    """Marker glyphs and styling for a rendered frame.

    Both markers occupy the single column reserved in front of every row,
    so each must print exactly one column wide.
    """

    cursor: str = ">"
    blank: str = " "
    header: Callable[[str], str] = field(default=_identity)
    hint: Callable[[str], str] = field(default=_identity)

    def __post_init__(self) -> None:
        for name in ("cursor", "blank"):
            glyph = getattr(self, name)
            if visible_width(glyph) != 1:
                raise ValueError(f"{name} marker must be one column wide: {glyph!r}")

    def marker(self, is_cursor: bool) -> str:
        return self.cursor if is_cursor else self.blank


def plain_theme(cursor: str = ">") -> TreeTheme:
    """Theme with no escape sequences."""
    return TreeTheme(cursor=cursor)


def default_theme(cursor: str = ">") -> TreeTheme:
    return TreeTheme(cursor=cursor, header=bold, hint=dim)
