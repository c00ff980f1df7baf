"""clitree: interactive terminal tree picker."""

# Session
from clitree.app import TreeApp, run_tree

# Tree construction
from clitree.builder import build_tree

# Configuration
from clitree.config import TreeConfig, load_config

# Cursor state machine
from clitree.controller import CursorController

# Keybindings
from clitree.keybindings import (
    DEFAULT_TREE_KEYBINDINGS,
    ENTER_ACTIVATES_KEYBINDINGS,
    TreeAction,
    TreeKeybindingsManager,
    get_tree_keybindings,
    set_tree_keybindings,
)

# Keyboard input handling
from clitree.keys import Key, KeyId, matches_key, parse_key

# Tree model
from clitree.node import (
    EmptyTreeError,
    Group,
    Leaf,
    Node,
    Tree,
    TreeError,
    TreeItem,
    UnknownNodeError,
)

# Rendering
from clitree.render import TreeView, render_branch, render_frame

# Terminal
from clitree.terminal import ProcessTerminal, Terminal

# Theme
from clitree.theme import TreeTheme, default_theme, plain_theme

# Utilities
from clitree.utils import visible_width

__all__ = [
    # Session
    "TreeApp",
    "run_tree",
    # Tree construction
    "build_tree",
    # Configuration
    "TreeConfig",
    "load_config",
    # Cursor state machine
    "CursorController",
    # Keybindings
    "DEFAULT_TREE_KEYBINDINGS",
    "ENTER_ACTIVATES_KEYBINDINGS",
    "TreeAction",
    "TreeKeybindingsManager",
    "get_tree_keybindings",
    "set_tree_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    # Tree model
    "EmptyTreeError",
    "Group",
    "Leaf",
    "Node",
    "Tree",
    "TreeError",
    "TreeItem",
    "UnknownNodeError",
    # Rendering
    "TreeView",
    "render_branch",
    "render_frame",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Theme
    "TreeTheme",
    "default_theme",
    "plain_theme",
    # Utilities
    "visible_width",
]
