"""kvjson curses-based terminal user interface."""

import curses
import curses.ascii as ascii
import logging
import os
import textwrap
from typing import Optional, Tuple, Union

from .core import Session
from .dispatch import dispatch
from .models import (
    APP_TITLE,
    OUTPUT_PATH,
    Deleting,
    Editing,
    Exit,
    Exiting,
    FileTree,
    KeyEvent,
    Main,
)

logger = logging.getLogger(__name__)

MIN_HEIGHT = 10
MIN_WIDTH = 40
TREE_WIDTH = 30

MODE_LABELS = {
    Main: "Normal Mode",
    Editing: "Editing Mode",
    Deleting: "Deleting",
    Exiting: "Exiting",
    FileTree: "File Tree",
}

KEY_HINTS = {
    Main: "(q) or (CTRL+c) to quit / (e) to make new pair / (d) to delete a pair / (1) tree",
    Editing: "(ESC) to cancel / (Tab) to switch boxes / enter to complete",
    Deleting: "(ESC) to cancel / enter to delete",
    Exiting: f"(y) write {OUTPUT_PATH} / (n) or (q) quit without writing",
    FileTree: "(2) back to pairs / (CTRL+c) to quit",
}

EDIT_TARGETS = {
    "key": "Editing Json Key",
    "value": "Editing Json Value",
    None: "Not Editing Anything",
}

EXIT_QUESTION = "Would you like to output the buffer as json? (y/n)"


def translate_key(ch: Union[str, int]) -> Optional[KeyEvent]:
    """Turn a get_wch() result into a KeyEvent, or None for keys we ignore.

    curses only reports key presses, so every event is a press.
    """
    if isinstance(ch, int):
        if ch == curses.KEY_ENTER:
            return KeyEvent("enter")
        if ch == curses.KEY_BACKSPACE:
            return KeyEvent("backspace")
        return None
    if len(ch) != 1:
        return None
    code = ord(ch)
    if code in (ascii.NL, ascii.CR):
        return KeyEvent("enter")
    if code in (ascii.DEL, ascii.BS):
        return KeyEvent("backspace")
    if code == ascii.TAB:
        return KeyEvent("tab")
    if code == ascii.ESC:
        return KeyEvent("esc")
    if ascii.iscntrl(ch):
        # Ctrl-a .. Ctrl-z arrive as "^A" .. "^Z"
        name = ascii.unctrl(ch)
        if name[1:].isalpha():
            return KeyEvent(name[1:].lower(), ctrl=True)
        return None
    if ch.isprintable():
        return KeyEvent(ch)
    return None


def centered_rect(
    percent_x: int, percent_y: int, height: int, width: int, min_h: int = 3
) -> Tuple[int, int, int, int]:
    """Return (y, x, h, w) of a box using the given share of the screen, centered."""
    h = min(max(min_h, height * percent_y // 100), height)
    w = min(max(10, width * percent_x // 100), width)
    return (height - h) // 2, (width - w) // 2, h, w


def format_row(index: object, key: str, value: str) -> str:
    return f"{str(index):<6} | {key:<25} : {value}"


def clip(s: str, limit: int) -> str:
    """Shorten s to limit characters, marking the cut with '...'."""
    if len(s) <= limit:
        return s
    if limit <= 3:
        return s[: max(limit, 0)]
    return s[: limit - 3] + "..."


class Renderer:
    """Draws a Session. Reads the session, never changes it."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        curses.curs_set(0)
        self.stdscr.keypad(True)

        self.has_colors = curses.has_colors()
        if self.has_colors:
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                pass
            curses.init_pair(1, curses.COLOR_GREEN, -1)
            curses.init_pair(2, curses.COLOR_YELLOW, -1)
            curses.init_pair(3, curses.COLOR_RED, -1)
            curses.init_pair(4, curses.COLOR_MAGENTA, -1)
            curses.init_pair(5, curses.COLOR_CYAN, -1)
            curses.init_pair(6, curses.COLOR_BLACK, curses.COLOR_YELLOW)
            self.COL_OK = curses.color_pair(1)
            self.COL_ROW = curses.color_pair(2)
            self.COL_ALERT = curses.color_pair(3)
            self.COL_TITLE = curses.color_pair(4) | curses.A_BOLD
            self.COL_TREE = curses.color_pair(5)
            self.COL_ACTIVE = curses.color_pair(6)
        else:
            self.COL_OK = curses.A_NORMAL
            self.COL_ROW = curses.A_NORMAL
            self.COL_ALERT = curses.A_BOLD
            self.COL_TITLE = curses.A_BOLD
            self.COL_TREE = curses.A_UNDERLINE
            self.COL_ACTIVE = curses.A_REVERSE

    def mode_attr(self, screen) -> int:
        if isinstance(screen, Main):
            return self.COL_OK
        if isinstance(screen, Editing):
            return self.COL_ROW | curses.A_BOLD
        if isinstance(screen, FileTree):
            return self.COL_TREE
        return self.COL_ALERT | curses.A_BOLD

    def box(self, y: int, x: int, h: int, w: int, title: str = "", attrs: int = curses.A_BOLD):
        """Bordered sub-window of stdscr with an optional title."""
        win = self.stdscr.derwin(h, w, y, x)
        win.border()
        if title:
            win.addnstr(0, 2, f" {title} ", max(w - 4, 0), attrs)
        return win

    def draw(self, session: Session):
        """Render title, tree panel, pairs, footer and the popup for the current screen."""
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()

        if height < MIN_HEIGHT or width < MIN_WIDTH:
            self.stdscr.addnstr(0, 0, "Terminal too small", width - 1, curses.A_BOLD)
            self.stdscr.refresh()
            return

        self.draw_title(width)
        self.draw_body(session, height, width)
        self.draw_footer(session, height, width)
        self.stdscr.refresh()

        screen = session.screen
        if isinstance(screen, Editing):
            self.draw_editing_popup(session, height, width)
        elif isinstance(screen, Deleting):
            self.draw_deleting_popup(session, height, width)
        elif isinstance(screen, Exiting):
            self.draw_exit_popup(height, width)

    def draw_title(self, width: int):
        win = self.box(0, 0, 3, width)
        win.addnstr(1, 1, APP_TITLE.center(width - 2), width - 2, self.COL_TITLE)

    def draw_body(self, session: Session, height: int, width: int):
        top = 3
        body_h = height - top - 3
        tree_w = min(TREE_WIDTH, width // 3)

        tree_attrs = curses.A_BOLD
        if isinstance(session.screen, FileTree):
            tree_attrs |= self.COL_TREE | curses.A_REVERSE
        self.box(top, 0, body_h, tree_w, "[1] Tree", tree_attrs)

        list_w = width - tree_w
        win = self.box(top, tree_w, body_h, list_w, "[2] JSON", self.COL_ROW | curses.A_BOLD)
        inner_w = list_w - 2
        inner_h = body_h - 2
        if inner_h < 1:
            return
        win.addnstr(1, 1, clip(format_row("Index", "Key", "Value"), inner_w), inner_w, self.COL_OK | curses.A_BOLD)

        rows = session.rows()
        visible = inner_h - 1
        if len(rows) > visible:
            shown = rows[: max(visible - 1, 0)]
            more = len(rows) - len(shown)
        else:
            shown = rows
            more = 0
        for i, (idx, key, value) in enumerate(shown, start=2):
            win.addnstr(i, 1, clip(format_row(idx, key, value), inner_w), inner_w, self.COL_ROW)
        if more:
            win.addnstr(inner_h, 1, clip(f"... {more} more", inner_w), inner_w, curses.A_DIM)

    def draw_footer(self, session: Session, height: int, width: int):
        screen = session.screen
        half = width // 2
        y = height - 3

        left = self.box(y, 0, 3, half)
        mode = MODE_LABELS[type(screen)]
        left.addnstr(1, 1, mode, half - 2, self.mode_attr(screen))
        rest = half - 2 - len(mode)
        if rest > 0:
            target = f" | {EDIT_TARGETS[session.edit_field]}"
            attrs = self.COL_OK if session.edit_field else curses.A_DIM
            left.addnstr(1, 1 + len(mode), target, rest, attrs)

        right = self.box(y, half, 3, width - half)
        right.addnstr(1, 1, clip(KEY_HINTS[type(screen)], width - half - 2), width - half - 2, self.COL_ALERT)

    def popup(self, percent_x: int, percent_y: int, height: int, width: int, title: str, min_h: int = 3):
        y, x, h, w = centered_rect(percent_x, percent_y, height, width, min_h)
        win = curses.newwin(h, w, y, x)
        win.erase()
        win.border()
        win.addnstr(0, 2, f" {title} ", max(w - 4, 0), curses.A_BOLD)
        return win, h, w

    def draw_editing_popup(self, session: Session, height: int, width: int):
        win, h, w = self.popup(60, 25, height, width, "Enter a new key-value pair", min_h=5)
        half = (w - 2) // 2
        boxes = (
            ("Key", session.key_buffer, "key", 1, half),
            ("Value", session.value_buffer, "value", 1 + half, w - 2 - half),
        )
        for label, text, name, x, box_w in boxes:
            sub = win.derwin(h - 2, box_w, 1, x)
            sub.bkgd(" ", self.COL_ACTIVE if session.edit_field == name else curses.A_NORMAL)
            sub.border()
            sub.addnstr(0, 2, f" {label} ", max(box_w - 4, 0), curses.A_BOLD)
            # tail of the buffer, so the newest characters stay visible
            if box_w > 2:
                sub.addnstr(1, 1, text[-(box_w - 2):], box_w - 2)
        win.refresh()

    def draw_deleting_popup(self, session: Session, height: int, width: int):
        win, h, w = self.popup(30, 25, height, width, "Enter an index to delete")
        if h > 2:
            win.addnstr(1, 2, session.delete_buffer[-(w - 4):], max(w - 4, 0), curses.A_BOLD)
        win.refresh()

    def draw_exit_popup(self, height: int, width: int):
        win, h, w = self.popup(60, 25, height, width, "Y/N")
        lines = textwrap.wrap(EXIT_QUESTION, max(w - 4, 1))
        for i, line in enumerate(lines[: max(h - 2, 0)], start=1):
            win.addnstr(i, 2, line.center(w - 4), w - 4, self.COL_ALERT | curses.A_BOLD)
        win.refresh()


def run(stdscr, session: Session) -> Exit:
    """Main event loop: draw, read one key, dispatch, until an Exit comes back."""
    renderer = Renderer(stdscr)
    while True:
        renderer.draw(session)
        ch = stdscr.get_wch()
        event = translate_key(ch)
        if event is None:
            continue
        result = dispatch(event, session)
        if result is not None:
            return result


def start_curses(session: Session) -> Exit:
    """Initialize curses and run the TUI. The terminal is restored on every exit path."""

    def _main(stdscr):
        # raw mode delivers Ctrl-c as a key instead of SIGINT
        curses.raw()
        return run(stdscr, session)

    os.environ.setdefault("ESCDELAY", "25")
    return curses.wrapper(_main)


def main(session: Optional[Session] = None) -> Tuple[Session, Exit]:
    """TUI entry point. Returns the final session and the exit decision."""
    if session is None:
        session = Session()
    logger.debug("starting session")
    result = start_curses(session)
    logger.debug("session ended: %d pairs, persist=%s", len(session.pairs), result.persist)
    return session, result


if __name__ == "__main__":
    main()
