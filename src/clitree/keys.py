"""Keyboard input parsing and matching for the tree picker.

Turns raw terminal input (legacy escape sequences, control bytes and plain
characters) into key identifiers such as ``"up"``, ``"ctrl+c"`` or ``"q"``.
:func:`matches_key` checks raw input against an identifier.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"


# ---------------------------------------------------------------------------
# Legacy escape sequences
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
}

# xterm encodes modifiers as ``CSI 1;<mod><final>`` / ``CSI <n>;<mod>~``
_MODIFIER_PREFIXES: dict[str, str] = {
    "2": "shift+",
    "3": "alt+",
    "4": "shift+alt+",
    "5": "ctrl+",
    "6": "ctrl+shift+",
    "7": "ctrl+alt+",
    "8": "ctrl+shift+alt+",
}

_CSI_FINAL_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_TILDE_KEYS: dict[str, str] = {
    "2": "insert",
    "3": "delete",
    "5": "pageUp",
    "6": "pageDown",
}


def _parse_modified_csi(data: str) -> str | None:
    """Parse ``ESC[1;5A`` style sequences."""
    if not data.startswith("\x1b[") or ";" not in data:
        return None
    body, final = data[2:-1], data[-1]
    first, _, modifier = body.partition(";")
    prefix = _MODIFIER_PREFIXES.get(modifier)
    if prefix is None:
        return None
    if final == "~":
        name = _TILDE_KEYS.get(first)
    elif first == "1":
        name = _CSI_FINAL_KEYS.get(final)
    else:
        name = None
    if name is None:
        return None
    return prefix + name


# ---------------------------------------------------------------------------
# parse_key / matches_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    The returned string uses the same format :func:`matches_key` expects,
    e.g. ``"a"``, ``"ctrl+a"``, ``"alt+left"``.
    """
    if not data:
        return None

    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    modified = _parse_modified_csi(data)
    if modified is not None:
        return modified

    if data == "\x1b[Z":
        return "shift+tab"
    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # Ctrl + letter (0x01 - 0x1a), after tab/enter/backspace above
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key arrives ESC-prefixed
    if len(data) == 2 and data[0] == "\x1b":
        inner = parse_key(data[1])
        if inner is None:
            return None
        if len(data[1]) == 1 and data[1].isupper():
            return "shift+alt+" + data[1].lower()
        return "alt+" + inner

    if len(data) == 1 and data.isprintable():
        return data

    return None


def _normalize_key_id(key_id: str) -> str:
    """Lower-case modifiers, order them canonically and fold aliases."""
    if key_id.endswith("+"):
        # "+" or "ctrl++": the key itself is "+"
        head = key_id[:-1].rstrip("+")
        parts = (head.split("+") if head else []) + ["+"]
    else:
        parts = key_id.split("+")
    key = parts[-1]
    modifiers = {p.lower() for p in parts[:-1]}
    if key.lower() in ("esc", "return"):
        key = "escape" if key.lower() == "esc" else "enter"
    if len(key) > 1:
        key = {"pageup": "pageUp", "pagedown": "pageDown"}.get(key.lower(), key.lower())
    ordered = [m for m in ("ctrl", "shift", "alt") if m in modifiers]
    return "+".join(ordered + [key])


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if raw input *data* is the key named *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    target = _normalize_key_id(key_id)
    if parsed == target:
        return True
    # Uppercase letters typed directly are shift+letter
    if len(data) == 1 and data.isalpha() and data.isupper():
        return target == "shift+" + data.lower()
    return False
