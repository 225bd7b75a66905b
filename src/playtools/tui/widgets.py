"""
Widget state for the interactive menu.

Each widget keeps its own state and reacts to key names (``"up"``,
``"enter"``, ``"a"`` ...). Drawing happens in ``playtools.tui.render``; nothing
here knows about the terminal library.
"""

from dataclasses import dataclass
from typing import Optional


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


@dataclass(frozen=True)
class ListItem:
    title: str
    description: str
    value: str

    def matches(self, text: str) -> bool:
        return text.lower() in self.title.lower()


class ListWidget:
    """Scrollable, filterable single-selection list."""

    # title, description and a blank separator line per item
    ITEM_HEIGHT = 3
    # title, filter line, pagination dots, help line and margins
    CHROME_HEIGHT = 8

    def __init__(self, title: str, items: list[ListItem]):
        self.title = title
        self.items = list(items)
        self.cursor = 0
        self.filter_text = ""
        self.filtering = False
        self.width = 0
        self.per_page = len(self.items) or 1

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.per_page = max(1, (height - self.CHROME_HEIGHT) // self.ITEM_HEIGHT)

    @property
    def visible_items(self) -> list[ListItem]:
        if not self.filter_text:
            return self.items
        return [item for item in self.items if item.matches(self.filter_text)]

    @property
    def selected_item(self) -> Optional[ListItem]:
        items = self.visible_items
        if not items:
            return None
        return items[min(self.cursor, len(items) - 1)]

    @property
    def page(self) -> int:
        return self.cursor // self.per_page

    @property
    def page_count(self) -> int:
        count = len(self.visible_items)
        return max(1, -(-count // self.per_page))

    def page_items(self) -> list[tuple[int, ListItem]]:
        """Return (index, item) pairs on the page holding the cursor."""
        start = self.page * self.per_page
        items = self.visible_items[start:start + self.per_page]
        return [(start + offset, item) for offset, item in enumerate(items)]

    def move(self, delta: int) -> None:
        count = len(self.visible_items)
        if count == 0:
            self.cursor = 0
            return
        self.cursor = max(0, min(count - 1, self.cursor + delta))

    def _set_filter(self, text: str) -> None:
        self.filter_text = text
        self.cursor = 0

    def handle_key(self, key: str) -> bool:
        """Apply ``key`` and return True if the list consumed it."""
        if self.filtering:
            if key == "enter":
                self.filtering = False
            elif key == "esc":
                self.filtering = False
                self._set_filter("")
            elif key == "backspace":
                self._set_filter(self.filter_text[:-1])
            elif is_printable(key):
                self._set_filter(self.filter_text + key)
            else:
                return False
            return True

        if key in ("up", "k"):
            self.move(-1)
        elif key in ("down", "j"):
            self.move(1)
        elif key in ("pgup", "left", "h"):
            self.move(-self.per_page)
        elif key in ("pgdown", "right", "l"):
            self.move(self.per_page)
        elif key in ("home", "g"):
            self.move(-len(self.items))
        elif key in ("end", "G"):
            self.move(len(self.items))
        elif key == "/":
            self.filtering = True
        elif key == "esc" and self.filter_text:
            self._set_filter("")
        else:
            return False
        return True


class TextInput:
    """Single-line text field with a character limit."""

    def __init__(self, placeholder: str = "", char_limit: int = 10):
        self.placeholder = placeholder
        self.char_limit = char_limit
        self.value = ""

    def reset(self) -> None:
        self.value = ""

    def handle_key(self, key: str) -> bool:
        if key == "backspace":
            self.value = self.value[:-1]
        elif key == "ctrl+u":
            self.value = ""
        elif is_printable(key):
            if len(self.value) < self.char_limit:
                self.value += key
        else:
            return False
        return True


class Spinner:
    """Frame-cycling activity indicator."""

    DOT = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")

    def __init__(self, frames: tuple[str, ...] = DOT, interval: float = 0.1):
        self.frames = frames
        self.interval = interval
        self.frame = 0

    def tick(self) -> None:
        self.frame = (self.frame + 1) % len(self.frames)

    def view(self) -> str:
        return self.frames[self.frame]
