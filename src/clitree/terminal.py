"""Raw-mode terminal used by the picker session.

The session only needs four things from a terminal: a way to receive key
input, a way to write a frame, the width to lay it out in, and a clean
hand-back when the picker exits.  :class:`Terminal` names those;
:class:`ProcessTerminal` provides them for the controlling tty.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import termios
import tty
from typing import Callable, Protocol, TextIO

from clitree.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

CURSOR_HIDE = "\x1b[?25l"
CURSOR_SHOW = "\x1b[?25h"
DEFAULT_COLUMNS = 80


class Terminal(Protocol):
    """What a picker session drives."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_end: Callable[[], object] | None = None,
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...


class ProcessTerminal:
    """The process's own tty.

    ``start`` reads stdin through the running asyncio loop, so it must be
    called from a coroutine or loop callback.  A tty is put in raw mode
    first; a pipe is read as is.  Keys are reassembled by a
    :class:`StdinBuffer` before they reach the handler, and *on_end* is
    called once stdin reaches end of file.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._on_input: Callable[[str], None] | None = None
        self._on_end: Callable[[], object] | None = None
        self._keys: StdinBuffer | None = None
        self._saved_mode: list | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns
        except (ValueError, OSError):
            return DEFAULT_COLUMNS

    def start(
        self,
        on_input: Callable[[str], None],
        on_end: Callable[[], object] | None = None,
    ) -> None:
        fd = self._stdin.fileno()
        self._on_input = on_input
        self._on_end = on_end
        if os.isatty(fd):
            self._saved_mode = termios.tcgetattr(fd)
            tty.setraw(fd)

        self._keys = StdinBuffer()
        self._keys.on_data(self._deliver)
        self._loop = asyncio.get_running_loop()
        self._loop.add_reader(fd, self._read_keys)

        self.write(CURSOR_HIDE)
        logger.debug("Reading keys, %d columns", self.columns)

    def stop(self) -> None:
        fd = self._stdin.fileno()
        if self._loop is not None:
            self._loop.remove_reader(fd)
            self._loop = None
        if self._keys is not None:
            self._keys.close()
            self._keys = None

        self.write(CURSOR_SHOW)
        if self._saved_mode is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None
        self._on_input = None
        self._on_end = None
        logger.debug("Terminal released")

    def write(self, data: str) -> None:
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except OSError as e:
            logger.debug("Dropped terminal write: %s", e)

    # -- input --------------------------------------------------------------

    def _read_keys(self) -> None:
        try:
            chunk = os.read(self._stdin.fileno(), 1024)
        except OSError as e:
            logger.debug("stdin read failed: %s", e)
            return
        if not chunk:
            self._end_of_input()
            return
        if self._keys is not None:
            self._keys.feed(chunk.decode("utf-8", errors="replace"))

    def _end_of_input(self) -> None:
        # An fd at EOF stays readable; keep it out of the selector
        if self._loop is not None:
            self._loop.remove_reader(self._stdin.fileno())
            self._loop = None
        pending = self._keys.flush() if self._keys is not None else ""
        if pending:
            self._deliver(pending)
        logger.debug("stdin closed")
        if self._on_end is not None:
            self._on_end()

    def _deliver(self, key: str) -> None:
        if self._on_input is not None:
            self._on_input(key)
