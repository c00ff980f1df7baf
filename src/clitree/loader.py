"""Load a tree of :class:`Group` / :class:`Leaf` items from JSON.

Each object has a ``name`` and optionally ``children`` (a list of objects)
or ``selected`` (for leaves).  The document is either one object, whose
children become the top level, or a list of objects.  A bare string is
shorthand for an unselected leaf.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from clitree.node import Group, Leaf


def item_from_dict(data: Any) -> Group | Leaf:
    if isinstance(data, str):
        return Leaf(data)
    if not isinstance(data, dict) or "name" not in data:
        raise ValueError(f"tree entries need a name: {data!r}")
    children = data.get("children")
    if children:
        if not isinstance(children, list):
            raise ValueError(f"children of {data['name']!r} must be a list")
        return Group(str(data["name"]), [item_from_dict(c) for c in children])
    selected = data.get("selected", False)
    if not isinstance(selected, bool):
        raise ValueError(f"selected of {data['name']!r} must be true or false")
    return Leaf(str(data["name"]), selected)


def items_from_json(data: Any) -> list[Group | Leaf]:
    if isinstance(data, list):
        return [item_from_dict(entry) for entry in data]
    root = item_from_dict(data)
    if isinstance(root, Group):
        return list(root.items)
    return [root]


def load_items(path: Path) -> list[Group | Leaf]:
    return items_from_json(json.loads(path.read_text(encoding="utf-8")))
