"""Input dispatch: route one key event to a Session operation."""

import logging
from typing import Callable, Dict, Optional, Type

from .core import Session
from .models import Deleting, Editing, Exit, Exiting, FileTree, KeyEvent, Main

logger = logging.getLogger(__name__)


def on_main(event: KeyEvent, session: Session) -> Optional[Exit]:
    if event.is_plain("e"):
        session.begin_edit()
    elif event.is_plain("d"):
        session.begin_delete()
    elif event.is_plain("1"):
        session.show_file_tree()
    elif event.is_plain("q") or event.is_ctrl("c"):
        session.show_exit_prompt()
    return None


def on_exiting(event: KeyEvent, session: Session) -> Optional[Exit]:
    if event.is_plain("y"):
        return Exit(persist=True)
    if event.is_plain("n") or event.is_plain("q") or event.is_ctrl("c"):
        return Exit(persist=False)
    return None


def on_editing(event: KeyEvent, session: Session) -> Optional[Exit]:
    """Ctrl-modified keys are not typed text, so Ctrl-c here does nothing."""
    if event.code == "enter":
        if session.edit_field == "key":
            session.toggle_edit_field()
        else:
            session.commit_pair()
    elif event.code == "backspace":
        session.pop_active_edit_field()
    elif event.code == "tab":
        session.toggle_edit_field()
    elif event.code == "esc":
        session.cancel()
    elif event.is_char:
        session.append_to_active_edit_field(event.code)
    return None


def on_deleting(event: KeyEvent, session: Session) -> Optional[Exit]:
    """Same key handling as on_editing, without Tab."""
    if event.code == "enter":
        session.commit_delete()
    elif event.code == "backspace":
        session.pop_delete_buffer()
    elif event.code == "esc":
        session.cancel()
    elif event.is_char:
        session.append_to_delete_buffer(event.code)
    return None


def on_file_tree(event: KeyEvent, session: Session) -> Optional[Exit]:
    if event.is_plain("2"):
        session.show_main()
    elif event.is_ctrl("c"):
        session.show_exit_prompt()
    return None


HANDLERS: Dict[Type, Callable[[KeyEvent, Session], Optional[Exit]]] = {
    Main: on_main,
    Exiting: on_exiting,
    Editing: on_editing,
    Deleting: on_deleting,
    FileTree: on_file_tree,
}


def dispatch(event: KeyEvent, session: Session) -> Optional[Exit]:
    """Apply event to session.

    Returns an Exit when the session should end, None to keep going.
    Key releases are dropped so platforms that report both press and
    release do not act twice.
    """
    if event.kind != "press":
        return None
    handler = HANDLERS[type(session.screen)]
    result = handler(event, session)
    if result is not None:
        logger.debug("exit requested (persist=%s)", result.persist)
    return result
