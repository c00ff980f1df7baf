"""Interactive session: wires a terminal, the cursor controller and the view.

Every state-changing key produces a full redraw of the frame in place; there
is no differential update.  The session ends when the quit action is
processed, after which the caller reads selection state back from its own
objects.
"""

from __future__ import annotations

import asyncio
import logging

from clitree.builder import ChildrenAccessor, TreeInput, build_tree
from clitree.config import TreeConfig
from clitree.controller import CursorController
from clitree.node import Tree
from clitree.render import TreeView
from clitree.terminal import ProcessTerminal, Terminal
from clitree.utils import visible_width

logger = logging.getLogger(__name__)


def screen_rows(line: str, columns: int) -> int:
    """Rows *line* occupies once the terminal wraps it at *columns*."""
    if columns <= 0:
        return 1
    return max(1, -(-visible_width(line) // columns))


class TreeApp:
    """Runs one picker session against a :class:`Terminal`."""

    def __init__(
        self,
        tree: Tree,
        terminal: Terminal,
        config: TreeConfig | None = None,
        cursor: str | None = None,
    ) -> None:
        self.config = config or TreeConfig()
        self.terminal = terminal
        self.controller = CursorController(
            tree, self.config.keybindings_manager(), cursor
        )
        self.view = TreeView(self.controller, self.config.theme())

        self._rows_drawn = 0
        self._stopped = True
        self._finished = asyncio.Event()

        self.controller.on_quit = self.stop

    @property
    def tree(self) -> Tree:
        return self.controller.tree

    @property
    def stopped(self) -> bool:
        return self._stopped

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Take over the terminal and draw the first frame."""
        self._stopped = False
        self.terminal.start(self.handle_input, self.controller.quit)
        self.render()
        logger.info("Tree session started at %r", self.controller.cursor)

    def stop(self) -> None:
        """Leave the last frame on screen and hand the terminal back."""
        if self._stopped:
            return
        self._stopped = True
        self.terminal.write("\r\n")
        self.terminal.stop()
        self._finished.set()
        logger.info("Tree session ended at %r", self.controller.cursor)

    async def run(self) -> None:
        """Start the session and wait until it is quit.

        The terminal is handed back however the wait ends, including
        cancellation and errors raised while starting.
        """
        try:
            self.start()
            await self._finished.wait()
        finally:
            self.stop()

    # -- input / output -----------------------------------------------------

    def handle_input(self, data: str) -> None:
        if self._stopped:
            return
        changed = self.controller.handle_input(data)
        if changed and not self._stopped:
            self.render()

    def render(self) -> None:
        """Redraw the whole frame over the previous one."""
        columns = self.terminal.columns
        lines = self.view.render(columns)

        out: list[str] = []
        if self._rows_drawn > 1:
            out.append(f"\x1b[{self._rows_drawn - 1}A")
        out.append("\r\x1b[0J")
        # raw mode: newlines do not return the carriage
        out.append("\r\n".join(lines))

        self.terminal.write("".join(out))
        self._rows_drawn = sum(screen_rows(line, columns) for line in lines)


def run_tree(
    data: TreeInput,
    config: TreeConfig | None = None,
    terminal: Terminal | None = None,
    get_children: ChildrenAccessor | None = None,
) -> Tree:
    """Build a tree from *data*, run an interactive session and return the tree.

    Selections are made in place on the objects in *data*.
    """
    tree = build_tree(data, get_children)
    app = TreeApp(tree, terminal or ProcessTerminal(), config)
    asyncio.run(app.run())
    return tree
