"""Keypress representation.

A keypress is a Key code, a set of modifiers and, for printable input, the
characters it produced. Textual reports keys as strings such as "ctrl+left",
"question_mark" or "a"; parse_key turns those into KeyEvent values so the
rest of the application never inspects raw key names.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class Key(Enum):
    """Key codes the application distinguishes."""
    CHAR = "char"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"
    OTHER = "other"


class Modifier(Enum):
    CTRL = "ctrl"
    SHIFT = "shift"
    ALT = "alt"


_NAMED_KEYS = {
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "enter": Key.ENTER,
    "return": Key.ENTER,
    "escape": Key.ESCAPE,
    "backspace": Key.BACKSPACE,
    "delete": Key.DELETE,
    "tab": Key.TAB,
}

_MODIFIERS = {
    "ctrl": Modifier.CTRL,
    "shift": Modifier.SHIFT,
    "alt": Modifier.ALT,
    "meta": Modifier.ALT,
}


@dataclass(frozen=True)
class KeyEvent:
    """A single keypress (or a pasted run of text, delivered as Key.CHAR)."""
    key: Key
    char: Optional[str] = None
    modifiers: FrozenSet[Modifier] = field(default_factory=frozenset)

    @property
    def ctrl(self) -> bool:
        return Modifier.CTRL in self.modifiers

    @property
    def shift(self) -> bool:
        return Modifier.SHIFT in self.modifiers

    def is_char(self, char: str) -> bool:
        """True for an unmodified (shift aside) press of `char`."""
        return self.key is Key.CHAR and self.char == char and not self.ctrl

    def is_ctrl(self, letter: str) -> bool:
        """True for Ctrl+`letter`, case-insensitive."""
        return (
            self.key is Key.CHAR
            and self.ctrl
            and self.char is not None
            and self.char.lower() == letter.lower()
        )


def parse_key(key: str, character: Optional[str] = None) -> KeyEvent:
    """Build a KeyEvent from a Textual key name and its character.

    Args:
        key: Textual key string, e.g. "ctrl+shift+z", "space", "enter"
        character: Character produced by the key, if any

    Returns:
        The corresponding KeyEvent
    """
    parts = key.split("+")
    name = parts[-1]
    modifiers = frozenset(_MODIFIERS[p] for p in parts[:-1] if p in _MODIFIERS)

    # ctrl+h arrives from terminals that send BS for backspace
    if name == "h" and modifiers == {Modifier.CTRL}:
        return KeyEvent(Key.BACKSPACE)

    if name in _NAMED_KEYS:
        return KeyEvent(_NAMED_KEYS[name], modifiers=modifiers)

    if character and character.isprintable() and Modifier.CTRL not in modifiers:
        return KeyEvent(Key.CHAR, char=character, modifiers=modifiers)

    if len(name) == 1:
        return KeyEvent(Key.CHAR, char=name, modifiers=modifiers)

    return KeyEvent(Key.OTHER, modifiers=modifiers)


def text_input(text: str) -> KeyEvent:
    """Wrap pasted text as a printable keypress."""
    return KeyEvent(Key.CHAR, char=text)
