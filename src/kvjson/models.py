"""Data models and constants for kvjson."""

from dataclasses import dataclass
from typing import Literal, Union

OUTPUT_PATH = "output.json"
APP_TITLE = "JSON editor"

EditField = Literal["key", "value"]
DeleteField = Literal["index"]
KeyKind = Literal["press", "release"]


@dataclass(frozen=True)
class Main:
    """Browsing/idle screen."""


@dataclass(frozen=True)
class Editing:
    """Composing a new pair; field is the buffer receiving characters."""

    field: EditField = "key"


@dataclass(frozen=True)
class Deleting:
    """Typing the index of the pair to remove."""

    field: DeleteField = "index"


@dataclass(frozen=True)
class Exiting:
    """Asking whether to write the pairs before quitting."""


@dataclass(frozen=True)
class FileTree:
    """Placeholder tree view."""


Screen = Union[Main, Editing, Deleting, Exiting, FileTree]


@dataclass(frozen=True)
class KeyEvent:
    """A single decoded key event.

    code is either one character or a named key: enter, backspace, tab, esc.
    """

    code: str
    ctrl: bool = False
    kind: KeyKind = "press"

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1 and self.code.isprintable() and not self.ctrl

    def is_plain(self, ch: str) -> bool:
        """True for an unmodified press of ch."""
        return self.code == ch and not self.ctrl

    def is_ctrl(self, ch: str) -> bool:
        return self.code == ch and self.ctrl


@dataclass(frozen=True)
class Exit:
    """Termination decision returned by the dispatcher."""

    persist: bool
