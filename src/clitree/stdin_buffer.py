"""Reassemble key sequences from raw stdin chunks.

One read from a raw tty can hold several keys (``"\\x1b[B\\x1b[B"`` when an
arrow is held down) or stop half way through one (``"\\x1b["`` now, ``"A"``
on the next read).  :class:`StdinBuffer` cuts chunks at key boundaries and
keeps a trailing partial sequence until the rest arrives or a short timeout
passes, at which point it is emitted as typed (a lone ESC is the escape key).
"""

from __future__ import annotations

import asyncio
import re
from typing import Callable

ESC = "\x1b"

# CSI up to its final byte, SS3 plus one character, ESC-prefixed meta keys,
# or any single non-ESC character
_KEY_RE = re.compile(
    r"\x1b\[[^\x40-\x7e]*[\x40-\x7e]"
    r"|\x1bO."
    r"|\x1b[^\[O]"
    r"|[^\x1b]",
    re.DOTALL,
)


def split_keys(text: str) -> tuple[list[str], str]:
    """Split *text* into whole keys and the unfinished escape sequence after them."""
    keys: list[str] = []
    pos = 0
    while pos < len(text):
        match = _KEY_RE.match(text, pos)
        if match is None:
            # Only an escape sequence that runs to the end can fail to match
            return keys, text[pos:]
        keys.append(match.group())
        pos = match.end()
    return keys, ""


class StdinBuffer:
    """Feeds whole keys to a callback, holding partial sequences for *timeout* seconds."""

    def __init__(self, *, timeout: float = 0.01) -> None:
        self.timeout = timeout
        self._pending = ""
        self._timer: asyncio.TimerHandle | None = None
        self._callback: Callable[[str], None] | None = None

    @property
    def pending(self) -> str:
        return self._pending

    def on_data(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def feed(self, chunk: str) -> None:
        self._cancel_timer()
        keys, self._pending = split_keys(self._pending + chunk)
        for key in keys:
            self._emit(key)
        if not self._pending:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Nothing will call back later; give up on the rest of the sequence
            self._emit(self.flush())
        else:
            self._timer = loop.call_later(self.timeout, self._expire)

    def flush(self) -> str:
        """Return and forget any partial sequence."""
        self._cancel_timer()
        pending, self._pending = self._pending, ""
        return pending

    def close(self) -> None:
        self.flush()
        self._callback = None

    def _expire(self) -> None:
        self._timer = None
        self._emit(self.flush())

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _emit(self, key: str) -> None:
        if key and self._callback is not None:
            self._callback(key)
