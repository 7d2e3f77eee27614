"""kvjson - build a flat key/value map in the terminal and save it as JSON."""

__version__ = "0.1.0"

from .models import (
    OUTPUT_PATH,
    Deleting,
    Editing,
    Exit,
    Exiting,
    FileTree,
    KeyEvent,
    Main,
    Screen,
)
from .core import Session
from .dispatch import dispatch
from .storage import dumps, write_json

__all__ = [
    "OUTPUT_PATH",
    "Main",
    "Editing",
    "Deleting",
    "Exiting",
    "FileTree",
    "Screen",
    "KeyEvent",
    "Exit",
    "Session",
    "dispatch",
    "dumps",
    "write_json",
]
