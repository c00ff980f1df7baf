"""Column-aligned rendering of the tree.

Only the top-level branch holding the cursor is expanded.  Inside it, a
node's first child is printed on the node's own row and later children on
rows of their own, indented so that each generation lines up under the
widest label of the generation above it.

Every row starts with a one-column marker (the cursor glyph or a blank),
which is why each indentation unit is one column wider than the label it
is measured from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from clitree.keybindings import TreeKeybindingsManager, get_tree_keybindings
from clitree.node import Node, Tree
from clitree.theme import TreeTheme, plain_theme
from clitree.utils import spaces, visible_width

if TYPE_CHECKING:
    from clitree.controller import CursorController

__all__ = [
    "TreeView",
    "indentation_chain",
    "indentation_unit",
    "inline_padding",
    "render_branch",
    "render_frame",
    "widest_ancestor",
]


def _width(node: Node) -> int:
    return visible_width(node.name())


# ---------------------------------------------------------------------------
# Indentation
# ---------------------------------------------------------------------------


def widest_ancestor(tree: Tree, node: Node) -> Node:
    """Return the widest-labelled node of the generation above *node*.

    The parent wins ties.  The generation is the parent together with its
    siblings; for a top-level node it falls back to the node's own children.
    """
    parent = tree.parent_of(node)
    if parent is None:
        raise ValueError("the root has no ancestors")
    if parent.is_root:
        generation = tree.children_of(node)
    else:
        generation = tree.children_of(tree.parent_of(parent))  # type: ignore[arg-type]

    widest = parent
    for candidate in generation:
        if _width(candidate) > _width(widest):
            widest = candidate
    return widest


def indentation_unit(tree: Tree, node: Node) -> str:
    """Blank run covering the widest label above *node* plus its marker."""
    parent = tree.parent_of(node)
    if parent is None or parent.is_root:
        return ""
    return spaces(_width(widest_ancestor(tree, node)) + 1)


def inline_padding(parent: Node, unit: str) -> str:
    """Padding between *parent*'s label and its first child on the same row."""
    if parent.is_root:
        return ""
    return spaces(len(unit) - _width(parent) - 1)


def indentation_chain(tree: Tree, node: Node) -> str:
    """Full left indentation for a row that starts with *node*.

    One unit per generation, each measured from the widest label of the
    generation above, climbing until a top-level node is reached.
    """
    width = 0
    parent = tree.parent_of(node)
    while parent is not None and not parent.is_root:
        node = widest_ancestor(tree, node)
        width += _width(node) + 1
        parent = tree.parent_of(node)
    return spaces(width)


# ---------------------------------------------------------------------------
# Branch and frame
# ---------------------------------------------------------------------------


def render_branch(tree: Tree, node: Node, cursor: str, theme: TreeTheme) -> str:
    """Render *node* and its whole subtree.

    A node prints as its marker, then either its label (leaf) or its label
    followed by each child with that child's leading padding, closed by a
    newline.  *pending* holds, in reverse, the text and nodes still to print.
    """
    out: list[str] = []
    pending: list[Node | str] = [node]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            out.append(item)
            continue
        out.append(theme.marker(item.id == cursor))
        if item.is_leaf:
            out.append(item.label() + "\n")
            continue

        parts: list[Node | str] = []
        for child in tree.children_of(item):
            if child.index == 0:
                unit = indentation_unit(tree, child)
                parts.append(item.label() + inline_padding(item, unit))
            else:
                parts.append(indentation_chain(tree, child))
            parts.append(child)
        parts.append("\n")
        pending.extend(reversed(parts))
    return "".join(out)


def _join_keys(keys: list[str]) -> str:
    if len(keys) == 1:
        return keys[0]
    return ", ".join(keys[:-1]) + " or " + keys[-1]


def render_frame(
    tree: Tree,
    cursor: str,
    theme: TreeTheme | None = None,
    keybindings: TreeKeybindingsManager | None = None,
) -> str:
    """Render a full frame: header, branches and the quit hint."""
    theme = theme or plain_theme()
    kb = keybindings or get_tree_keybindings()
    branch = tree.branch_of(tree.node(cursor))

    frame = theme.header(f"Select items: {cursor} ") + "\n\n"
    for top in tree.children_of(tree.root):
        if top.id == branch.id:
            frame += render_branch(tree, top, cursor, theme) + "\n"
        else:
            frame += theme.blank + top.label() + "\n"

    quit_keys = kb.get_keys("quit")
    if quit_keys:
        frame += "\n" + theme.hint(f"Press {_join_keys(quit_keys)} to quit.") + "\n"
    return frame


class TreeView:
    """Component wrapper around :func:`render_frame`.

    The frame is re-derived from the tree and the controller's cursor on
    every call; nothing is cached between renders.
    """

    def __init__(
        self,
        controller: CursorController,
        theme: TreeTheme | None = None,
    ) -> None:
        self._controller = controller
        self._theme = theme or plain_theme()

    def render(self, width: int) -> list[str]:
        frame = render_frame(
            self._controller.tree,
            self._controller.cursor,
            self._theme,
            self._controller.keybindings,
        )
        return frame.splitlines()

    def invalidate(self) -> None:
        pass
