"""Cursor state machine for the tree picker.

The controller owns a single piece of state, the cursor id, and maps tree
actions to cursor moves or leaf mutations.  Transitions depend only on the
cursor, the action and the tree shape.
"""

from __future__ import annotations

import logging
from typing import Callable

from clitree.keybindings import (
    TreeAction,
    TreeKeybindingsManager,
    get_tree_keybindings,
)
from clitree.node import Node, Tree

logger = logging.getLogger(__name__)


class CursorController:
    """Navigates a :class:`Tree` and toggles its leaves."""

    def __init__(
        self,
        tree: Tree,
        keybindings: TreeKeybindingsManager | None = None,
        cursor: str | None = None,
    ) -> None:
        self.tree = tree
        self.keybindings = keybindings or get_tree_keybindings()

        if cursor is None:
            first = tree.first_child(tree.root)
            if first is None:
                raise ValueError("tree has no top-level nodes")
            cursor = first.id
        node = tree.node(cursor)
        if node.is_root:
            raise ValueError("the cursor cannot rest on the root")

        self._cursor = cursor
        self._done = False

        self.on_quit: Callable[[], None] | None = None
        self.on_change: Callable[[Node], None] | None = None
        self.on_mutate: Callable[[Node], None] | None = None

    # -- state --------------------------------------------------------------

    @property
    def cursor(self) -> str:
        return self._cursor

    @property
    def current(self) -> Node:
        return self.tree.node(self._cursor)

    @property
    def done(self) -> bool:
        """``True`` once quit has been processed."""
        return self._done

    # -- transitions --------------------------------------------------------

    def move_up(self) -> bool:
        target = self.tree.previous_sibling(self.current)
        if target is None:
            return False
        return self._move_to(target)

    def move_down(self) -> bool:
        target = self.tree.next_sibling(self.current)
        if target is None:
            return False
        return self._move_to(target)

    def descend(self) -> bool:
        """Enter the current node, or activate it when it is a leaf."""
        node = self.current
        if node.is_leaf:
            return self._mutate(node)
        return self._move_to(self.tree.first_child(node))  # type: ignore[arg-type]

    def ascend(self) -> bool:
        parent = self.tree.parent_of(self.current)
        if parent is None or parent.is_root:
            return False
        return self._move_to(parent)

    def toggle(self) -> bool:
        """Activate the current leaf; does nothing on inner nodes."""
        node = self.current
        if not node.is_leaf:
            return False
        return self._mutate(node)

    def quit(self) -> bool:
        if self._done:
            return False
        self._done = True
        logger.debug("Quit at %r", self._cursor)
        if self.on_quit:
            self.on_quit()
        return True

    # -- dispatch -----------------------------------------------------------

    def handle_action(self, action: TreeAction) -> bool:
        """Apply *action*.  Returns ``True`` if anything changed."""
        if self._done:
            return False
        if action == "cursorUp":
            return self.move_up()
        if action == "cursorDown":
            return self.move_down()
        if action == "descend":
            return self.descend()
        if action == "ascend":
            return self.ascend()
        if action == "toggle":
            return self.toggle()
        if action == "quit":
            return self.quit()
        return False

    def handle_input(self, data: str) -> bool:
        """Map raw key input to an action; unbound keys are ignored."""
        action = self.keybindings.action_for(data)
        if action is None:
            return False
        return self.handle_action(action)

    # -- internals ----------------------------------------------------------

    def _move_to(self, node: Node) -> bool:
        logger.debug("Cursor %r -> %r", self._cursor, node.id)
        self._cursor = node.id
        if self.on_change:
            self.on_change(node)
        return True

    def _mutate(self, node: Node) -> bool:
        node.value.mutate()  # type: ignore[union-attr]
        logger.debug("Mutated %r, now %r", node.id, node.name())
        if self.on_mutate:
            self.on_mutate(node)
        return True
