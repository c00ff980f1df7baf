"""Shared fixtures: the two-namespace sample used throughout the tests."""

from __future__ import annotations

import pytest

from clitree.builder import build_tree
from clitree.keybindings import TreeKeybindingsManager, set_tree_keybindings
from clitree.node import Group, Leaf


def make_namespaces() -> list[Group]:
    """namespace 1/secrets/{value1,value2} and namespace 2/secrets/{value3,value4}."""
    return [
        Group("namespace 1", [Group("secrets", [Leaf("value1"), Leaf("value2")])]),
        Group("namespace 2", [Group("secrets", [Leaf("value3"), Leaf("value4")])]),
    ]


def make_uneven() -> list[Group]:
    """Labels of different widths at each level, to exercise alignment."""
    return [
        Group("a", [Group("bb", [Leaf("x"), Leaf("y")]), Group("cccc", [Leaf("z")])]),
        Group("long branch", [Leaf("w")]),
    ]


@pytest.fixture(autouse=True)
def _reset_keybindings():
    set_tree_keybindings(TreeKeybindingsManager())
    yield
    set_tree_keybindings(TreeKeybindingsManager())


@pytest.fixture
def namespaces() -> list[Group]:
    return make_namespaces()


@pytest.fixture
def tree(namespaces):
    return build_tree(namespaces)


@pytest.fixture
def uneven_tree():
    return build_tree(make_uneven())
