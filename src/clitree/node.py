"""Tree items, nodes and the arena-backed tree.

Domain objects plug into the widget through :class:`TreeItem`.  The widget
wraps each of them in a :class:`Node` stored in a :class:`Tree`, an arena
keyed by path ids.  Nodes reference their parent and children by id only, so
the structure has no reference cycles.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol

ROOT_ID = ""

__all__ = [
    "ROOT_ID",
    "EmptyTreeError",
    "Group",
    "Leaf",
    "Node",
    "Tree",
    "TreeError",
    "TreeItem",
    "UnknownNodeError",
    "child_id",
]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TreeError(Exception):
    """Base class for tree precondition violations."""


class EmptyTreeError(TreeError, ValueError):
    """Raised when a tree is built from input with no top-level items."""


class UnknownNodeError(TreeError, KeyError):
    """Raised when an id does not resolve to a node."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"no node with id {self.node_id!r}"


# ---------------------------------------------------------------------------
# Capability contract
# ---------------------------------------------------------------------------


class TreeItem(Protocol):
    """The contract every domain object shown in the tree satisfies.

    ``render_label`` must have the same printed width as ``display_name``;
    the renderer measures the latter and prints the former.
    """

    def display_name(self) -> str:
        """Plain label, possibly encoding mutable state."""
        ...

    def render_label(self) -> str:
        """Styled label for the terminal."""
        ...

    def mutate(self) -> None:
        """Activate the item.  Leaves toggle selection; groups do nothing."""
        ...

    def children(self) -> Sequence[TreeItem]:
        """Ordered children; empty for leaves."""
        ...


@dataclass
class Group:
    """A grouping item with an ordered list of children."""

    name: str
    items: list = field(default_factory=list)

    def display_name(self) -> str:
        return self.name

    def render_label(self) -> str:
        return self.name

    def mutate(self) -> None:
        pass

    def children(self) -> Sequence[TreeItem]:
        return self.items


@dataclass
class Leaf:
    """A selectable value.  ``mutate`` flips ``selected``."""

    name: str
    selected: bool = False

    def display_name(self) -> str:
        if self.selected:
            return self.name + " (x)"
        return self.name + " ( )"

    def render_label(self) -> str:
        return self.display_name()

    def mutate(self) -> None:
        self.selected = not self.selected

    def children(self) -> Sequence[TreeItem]:
        return ()


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def child_id(parent_id: str, index: int) -> str:
    """Return the id of the *index*-th child of *parent_id*.

    Indices below ten are appended as a single digit; wider indices are
    bracketed so that no two paths produce the same id.
    """
    if index < 10:
        return f"{parent_id}{index}"
    return f"{parent_id}[{index}]"


@dataclass
class Node:
    id: str
    value: TreeItem | None
    index: int = 0
    parent: str | None = None
    children: list[str] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def name(self) -> str:
        """Display name of the wrapped value (empty for the root)."""
        if self.value is None:
            return ""
        return self.value.display_name()

    def label(self) -> str:
        """Styled label of the wrapped value (empty for the root)."""
        if self.value is None:
            return ""
        return self.value.render_label()


class Tree:
    """Arena of nodes addressed by path id.

    The shape is fixed once built: nodes are only added through
    :meth:`add_child`, which the builder calls while walking the input.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {ROOT_ID: Node(id=ROOT_ID, value=None)}

    # -- construction -------------------------------------------------------

    def add_child(self, parent: Node, value: TreeItem) -> Node:
        """Attach *value* as the next child of *parent* and return its node."""
        index = len(parent.children)
        node = Node(
            id=child_id(parent.id, index),
            value=value,
            index=index,
            parent=parent.id,
        )
        self._nodes[node.id] = node
        parent.children.append(node.id)
        return node

    # -- lookup -------------------------------------------------------------

    @property
    def root(self) -> Node:
        return self._nodes[ROOT_ID]

    def node(self, node_id: str) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        """Number of nodes, not counting the synthetic root."""
        return len(self._nodes) - 1

    def __iter__(self) -> Iterator[Node]:
        """Iterate non-root nodes depth-first in domain order."""
        return self.walk(self.root)

    def walk(self, node: Node) -> Iterator[Node]:
        """Iterate the descendants of *node* depth-first."""
        stack = list(reversed(node.children))
        while stack:
            child = self._nodes[stack.pop()]
            yield child
            stack.extend(reversed(child.children))

    # -- structure ----------------------------------------------------------

    def parent_of(self, node: Node) -> Node | None:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def children_of(self, node: Node) -> list[Node]:
        return [self._nodes[cid] for cid in node.children]

    def first_child(self, node: Node) -> Node | None:
        if not node.children:
            return None
        return self._nodes[node.children[0]]

    def previous_sibling(self, node: Node) -> Node | None:
        parent = self.parent_of(node)
        if parent is None or node.index == 0:
            return None
        return self._nodes[parent.children[node.index - 1]]

    def next_sibling(self, node: Node) -> Node | None:
        parent = self.parent_of(node)
        if parent is None or node.index >= len(parent.children) - 1:
            return None
        return self._nodes[parent.children[node.index + 1]]

    def branch_of(self, node: Node) -> Node:
        """Return the top-level node whose subtree contains *node*."""
        if node.is_root:
            raise ValueError("the root belongs to no branch")
        while node.parent != ROOT_ID:
            node = self._nodes[node.parent]  # type: ignore[index]
        return node

    def depth(self, node: Node) -> int:
        """Depth below the root (top-level nodes have depth 1)."""
        depth = 0
        while node.parent is not None:
            depth += 1
            node = self._nodes[node.parent]
        return depth

    def leaves(self) -> list[Node]:
        return [node for node in self if node.is_leaf]

    def selected_leaves(self) -> list[TreeItem]:
        """Values of leaves whose ``selected`` attribute is set."""
        return [
            node.value
            for node in self.leaves()
            if getattr(node.value, "selected", False)
        ]
