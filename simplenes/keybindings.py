"""Default key bindings and the keybindings configuration file parser."""

from __future__ import annotations

import logging
from enum import Enum
from os import PathLike
from typing import Sequence

log = logging.getLogger(__name__)

BUTTON_NAMES: tuple[str, ...] = ("A", "B", "Select", "Start", "Up", "Down", "Left", "Right")

KEY_NAMES: tuple[str, ...] = (
    "A", "B", "C", "D", "E", "F", "G", "H", "I", "J", "K", "L", "M",
    "N", "O", "P", "Q", "R", "S", "T", "U", "V", "W", "X", "Y", "Z",
    "Num0", "Num1", "Num2", "Num3", "Num4", "Num5", "Num6", "Num7", "Num8", "Num9",
    "Escape", "LControl", "LShift", "LAlt", "LSystem",
    "RControl", "RShift", "RAlt", "RSystem", "Menu",
    "LBracket", "RBracket", "SemiColon", "Comma", "Period", "Quote", "Slash",
    "BackSlash", "Tilde", "Equal", "Dash", "Space", "Return", "BackSpace", "Tab",
    "PageUp", "PageDown", "End", "Home", "Insert", "Delete",
    "Add", "Subtract", "Multiply", "Divide",
    "Left", "Right", "Up", "Down",
    "Numpad0", "Numpad1", "Numpad2", "Numpad3", "Numpad4",
    "Numpad5", "Numpad6", "Numpad7", "Numpad8", "Numpad9",
    "F1", "F2", "F3", "F4", "F5", "F6", "F7", "F8", "F9", "F10",
    "F11", "F12", "F13", "F14", "F15", "Pause",
)

_BUTTON_INDEX = {name: i for i, name in enumerate(BUTTON_NAMES)}
_KEYS = frozenset(KEY_NAMES)


class _Section(Enum):
    NONE = 0
    PLAYER1 = 1
    PLAYER2 = 2


def default_bindings() -> tuple[list[str], list[str]]:
    """Key names for both players, ordered as BUTTON_NAMES."""
    player1 = ["J", "K", "RShift", "Return", "W", "S", "A", "D"]
    player2 = ["Numpad5", "Numpad6", "Numpad8", "Numpad9", "Up", "Down", "Left", "Right"]
    return player1, player2


def parse_controller_conf(
    path: str | PathLike[str],
    player1: Sequence[str],
    player2: Sequence[str],
) -> tuple[list[str], list[str]]:
    """Return the bindings of both players with the file's assignments applied.

    A file that cannot be opened leaves the bindings unchanged.
    """
    bindings = {_Section.PLAYER1: list(player1), _Section.PLAYER2: list(player2)}
    try:
        with open(path, encoding="utf-8") as conf:
            lines = conf.read().splitlines()
    except OSError:
        return bindings[_Section.PLAYER1], bindings[_Section.PLAYER2]

    section = _Section.NONE
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line == "[Player1]":
            section = _Section.PLAYER1
        elif line == "[Player2]":
            section = _Section.PLAYER2
        elif section is not _Section.NONE:
            button, sep, key = line.partition("=")
            if not sep:
                key = line
            button, key = button.strip(), key.strip()
            if button not in _BUTTON_INDEX or key not in _KEYS:
                log.error("Invalid key in configuration file at Line %d", line_no)
                continue
            bindings[section][_BUTTON_INDEX[button]] = key
        else:
            log.error("Invalid line in key configuration at Line %d", line_no)

    return bindings[_Section.PLAYER1], bindings[_Section.PLAYER2]