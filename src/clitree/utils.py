"""Printed-width measurement for tree labels.

Labels reach the renderer either plain (``display_name``) or styled
(``render_label``).  Column alignment depends on both having the same printed
width, so every width in the layout goes through :func:`visible_width`, which
ignores ANSI escapes and counts wide glyphs as two columns.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth

# SGR and cursor CSI, OSC 8 hyperlinks and APC payloads print nothing
_ESCAPES = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"
    r"|\x1b\]8;;[^\x07]*\x07"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

_TAB = "   "

# Labels repeat on every frame; bounded so long sessions do not grow it
_widths: dict[str, int] = {}
_WIDTHS_LIMIT = 512


def strip_ansi(text: str) -> str:
    """Remove escape sequences from *text*."""
    return _ESCAPES.sub("", text)


def _cluster_width(cluster: str) -> int:
    """Columns taken by one grapheme cluster."""
    if len(cluster) == 1:
        if unicodedata.category(cluster) == "Cc":
            return 0
        return max(wcwidth.wcwidth(cluster), 0)

    # Emoji presentation, ZWJ sequences, skin tones and flags
    for ch in cluster:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    base = cluster[0]
    if ord(base) >= 0x1F000 or 0x2600 <= ord(base) <= 0x27BF:
        return 2
    if unicodedata.category(base)[0] == "M" or unicodedata.category(base) == "Cf":
        return 0
    return max(wcwidth.wcwidth(base), 0)


def visible_width(text: str) -> int:
    """Columns *text* occupies once printed.

    Escape sequences count for nothing and a tab for three columns.  Pure
    ASCII is measured by length; anything else is measured per grapheme
    cluster and remembered.
    """
    plain = strip_ansi(text).replace("\t", _TAB)
    if plain.isascii() and plain.isprintable():
        return len(plain)

    width = _widths.get(plain)
    if width is None:
        width = sum(_cluster_width(c) for c in grapheme.graphemes(plain))
        if len(_widths) >= _WIDTHS_LIMIT:
            _widths.clear()
        _widths[plain] = width
    return width


def spaces(count: int) -> str:
    """Return a run of *count* spaces (empty for zero or negative counts)."""
    return " " * max(count, 0)
