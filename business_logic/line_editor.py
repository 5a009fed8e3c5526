"""Single-line text editor used by the add and edit panels.

The editor is an immutable value: every operation returns a new LineEditor,
which lets the application state hold it directly and keeps snapshots cheap.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from business_logic.keys import Key, KeyEvent

_TRAILING_WORD = re.compile(r"\S+$")


class EditorAction(Enum):
    """Outcome of feeding a keypress to the editor."""
    EDITED = "edited"
    SUBMIT = "submit"
    CANCEL = "cancel"
    IGNORED = "ignored"


def delete_last_word(text: str) -> str:
    """Remove the last word of `text` along with the whitespace around it.

    Trailing whitespace is trimmed, then the trailing non-whitespace run, then
    any whitespace left in front of it.

    Example:
        >>> delete_last_word("hello world ")
        'hello'
    """
    if not text:
        return text
    text = text.rstrip()
    text = _TRAILING_WORD.sub("", text)
    return text.rstrip()


@dataclass(frozen=True)
class LineEditor:
    """Editable string buffer with a cursor offset in [0, len(text)]."""
    text: str = ""
    cursor: Optional[int] = None

    def __post_init__(self):
        cursor = len(self.text) if self.cursor is None else self.cursor
        object.__setattr__(self, "cursor", max(0, min(len(self.text), cursor)))

    def _with(self, text: str, cursor: int) -> 'LineEditor':
        return LineEditor(text=text, cursor=cursor)

    @property
    def before_cursor(self) -> str:
        return self.text[:self.cursor]

    @property
    def after_cursor(self) -> str:
        return self.text[self.cursor:]

    def insert(self, chars: str) -> 'LineEditor':
        """Insert printable characters at the cursor."""
        printable = "".join(c for c in chars if c.isprintable())
        if not printable:
            return self
        return self._with(
            self.before_cursor + printable + self.after_cursor,
            self.cursor + len(printable),
        )

    def move_left(self) -> 'LineEditor':
        return self._with(self.text, self.cursor - 1)

    def move_right(self) -> 'LineEditor':
        return self._with(self.text, self.cursor + 1)

    def word_left(self) -> 'LineEditor':
        """Jump back to the start of the previous word."""
        s = self.text
        i = max(0, self.cursor - 1)
        while i > 0 and s[i].isspace():
            i -= 1
        while i > 0 and not s[i - 1].isspace():
            i -= 1
        return self._with(s, i)

    def word_right(self) -> 'LineEditor':
        """Jump forward to the end of the next word."""
        s = self.text
        i = min(len(s), self.cursor + 1)
        while i < len(s) and s[i].isspace():
            i += 1
        while i < len(s) and not s[i].isspace():
            i += 1
        return self._with(s, i)

    def backspace(self) -> 'LineEditor':
        if self.cursor == 0:
            return self
        return self._with(self.text[:self.cursor - 1] + self.after_cursor, self.cursor - 1)

    def delete_forward(self) -> 'LineEditor':
        if self.cursor >= len(self.text):
            return self
        return self._with(self.before_cursor + self.text[self.cursor + 1:], self.cursor)

    def delete_word_backward(self) -> 'LineEditor':
        trimmed = delete_last_word(self.before_cursor)
        return self._with(trimmed + self.after_cursor, len(trimmed))

    def submit(self) -> str:
        """Return the buffer without surrounding whitespace."""
        return self.text.strip()

    def handle(self, event: KeyEvent) -> Tuple['LineEditor', EditorAction]:
        """Apply a keypress.

        Escape always cancels. Ctrl+C is ignored so the exit protocol above
        the editor can claim it. Only printable, non-Ctrl input is inserted.

        Args:
            event: The keypress to interpret

        Returns:
            Tuple of (editor after the key, what the key meant)
        """
        if event.key is Key.ESCAPE:
            return self, EditorAction.CANCEL

        if event.ctrl and event.key is Key.LEFT:
            return self.word_left(), EditorAction.EDITED
        if event.ctrl and event.key is Key.RIGHT:
            return self.word_right(), EditorAction.EDITED
        if event.key is Key.LEFT:
            return self.move_left(), EditorAction.EDITED
        if event.key is Key.RIGHT:
            return self.move_right(), EditorAction.EDITED

        if event.is_ctrl("w"):
            return self.delete_word_backward(), EditorAction.EDITED
        if event.key is Key.ENTER:
            return self, EditorAction.SUBMIT
        if event.key is Key.BACKSPACE:
            return self.backspace(), EditorAction.EDITED
        if event.key is Key.DELETE:
            return self.delete_forward(), EditorAction.EDITED
        if event.is_ctrl("c"):
            return self, EditorAction.IGNORED

        if event.key is Key.CHAR and event.char and not event.ctrl:
            return self.insert(event.char), EditorAction.EDITED

        return self, EditorAction.IGNORED
