"""Build a navigable :class:`~clitree.node.Tree` from nested domain objects."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable, Union

from clitree.node import EmptyTreeError, Node, Tree, TreeItem

logger = logging.getLogger(__name__)

ChildrenAccessor = Callable[[TreeItem], Sequence[TreeItem]]
TreeInput = Union[Sequence[TreeItem], TreeItem]


def default_children(item: TreeItem) -> Sequence[TreeItem]:
    return item.children()


def build_tree(
    data: TreeInput,
    get_children: ChildrenAccessor | None = None,
) -> Tree:
    """Walk *data* once and return the resulting tree.

    *data* is either a sequence of top-level items or a single item whose
    children become the top-level items.  *get_children* returns the ordered
    children of an item; by default it calls ``item.children()``.  Items with
    no children become leaves, whatever their type.

    Raises :class:`EmptyTreeError` when there is nothing at the top level,
    since the cursor needs a first node to start on.
    """
    accessor = get_children or default_children

    if isinstance(data, (str, bytes)):
        raise TypeError("tree data must be a sequence of items or a single item")
    if isinstance(data, Sequence):
        top_level: Sequence[TreeItem] = data
    else:
        top_level = accessor(data)

    if not top_level:
        raise EmptyTreeError("empty tree")

    tree = Tree()
    # (parent node, items still to attach under it)
    pending: list[tuple[Node, Sequence[TreeItem]]] = [(tree.root, top_level)]
    while pending:
        parent, items = pending.pop()
        for item in items:
            node = tree.add_child(parent, item)
            children = accessor(item)
            if children:
                pending.append((node, children))
    logger.debug("Built tree with %d nodes", len(tree))
    return tree
