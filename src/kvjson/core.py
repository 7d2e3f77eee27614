"""Session state machine for the key/value editor (no I/O)."""

import logging
import re
from typing import Dict, List, Optional, Tuple

from .models import (
    DeleteField,
    Deleting,
    EditField,
    Editing,
    Exiting,
    FileTree,
    Main,
    Screen,
)

logger = logging.getLogger(__name__)

INDEX_RE = re.compile(r"\+?([0-9]+)")


def parse_index(text: str) -> Optional[int]:
    """Parse a non-negative decimal index, or None if text is not one."""
    m = INDEX_RE.fullmatch(text)
    if not m:
        return None
    return int(m.group(1))


class Session:
    """Single source of truth for one editing session.

    pairs is an insertion-ordered dict, so the index shown next to a pair is
    the index commit_delete() removes.
    """

    def __init__(self):
        self.key_buffer = ""
        self.value_buffer = ""
        self.delete_buffer = ""
        self.pairs: Dict[str, str] = {}
        self.screen: Screen = Main()

    def __repr__(self):
        return (
            f"<Session screen={self.screen!r} pairs={len(self.pairs)} "
            f"key={self.key_buffer!r} value={self.value_buffer!r} "
            f"delete={self.delete_buffer!r}>"
        )

    @property
    def edit_field(self) -> Optional[EditField]:
        if isinstance(self.screen, Editing):
            return self.screen.field
        return None

    @property
    def delete_field(self) -> Optional[DeleteField]:
        if isinstance(self.screen, Deleting):
            return self.screen.field
        return None

    def _switch(self, screen: Screen) -> None:
        logger.debug("screen %r -> %r", self.screen, screen)
        self.screen = screen

    # Screen switches

    def show_main(self) -> None:
        self._switch(Main())

    def show_file_tree(self) -> None:
        self._switch(FileTree())

    def show_exit_prompt(self) -> None:
        self._switch(Exiting())

    def begin_edit(self) -> None:
        self._switch(Editing("key"))

    def begin_delete(self) -> None:
        self._switch(Deleting("index"))

    # Editing

    def toggle_edit_field(self) -> None:
        """Swap key <-> value.

        From Main this starts editing on key; on any other screen it does nothing.
        """
        field = self.edit_field
        if field is None:
            if isinstance(self.screen, Main):
                self._switch(Editing("key"))
        elif field == "key":
            self._switch(Editing("value"))
        else:
            self._switch(Editing("key"))

    def append_to_active_edit_field(self, ch: str) -> None:
        field = self.edit_field
        if field == "key":
            self.key_buffer += ch
        elif field == "value":
            self.value_buffer += ch

    def pop_active_edit_field(self) -> None:
        field = self.edit_field
        if field == "key":
            self.key_buffer = self.key_buffer[:-1]
        elif field == "value":
            self.value_buffer = self.value_buffer[:-1]

    def commit_pair(self) -> None:
        """Store the buffered pair (overwriting an existing key) and go back to Main."""
        key, value = self.key_buffer, self.value_buffer
        if key in self.pairs:
            logger.debug("overwrite %r: %r -> %r", key, self.pairs[key], value)
        else:
            logger.debug("insert %r = %r", key, value)
        self.pairs[key] = value
        self.key_buffer = ""
        self.value_buffer = ""
        self.show_main()

    # Deleting

    def append_to_delete_buffer(self, ch: str) -> None:
        if self.delete_field is not None:
            self.delete_buffer += ch

    def pop_delete_buffer(self) -> None:
        if self.delete_field is not None:
            self.delete_buffer = self.delete_buffer[:-1]

    def commit_delete(self) -> Optional[str]:
        """Remove the pair at the buffered index.

        A buffer that is not a number, or a number past the end, removes
        nothing. Either way the buffer is cleared and the session returns to
        Main. Returns the removed key, if any.
        """
        removed = None
        index = parse_index(self.delete_buffer)
        if index is None:
            logger.debug("ignoring delete: %r is not an index", self.delete_buffer)
        elif index >= len(self.pairs):
            logger.debug("ignoring delete: index %d out of range (%d pairs)", index, len(self.pairs))
        else:
            removed = list(self.pairs)[index]
            del self.pairs[removed]
            logger.debug("deleted %d: %r", index, removed)
        self.delete_buffer = ""
        self.show_main()
        return removed

    def cancel(self) -> None:
        """Leave Editing or Deleting, discarding what was typed."""
        if isinstance(self.screen, Editing):
            self.key_buffer = ""
            self.value_buffer = ""
        elif isinstance(self.screen, Deleting):
            self.delete_buffer = ""
        else:
            return
        self.show_main()

    def rows(self) -> List[Tuple[int, str, str]]:
        """(index, key, value) for every pair, in delete-index order."""
        return [(i, k, v) for i, (k, v) in enumerate(self.pairs.items())]
