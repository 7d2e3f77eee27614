"""kvjson command-line interface."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .models import OUTPUT_PATH
from .storage import write_json

logger = logging.getLogger("kvjson")


def configure_logging(log_file: Optional[str]) -> None:
    """Send DEBUG logs to log_file, or only warnings to stderr.

    Nothing should reach the terminal while curses owns it, so stderr only
    gets WARNING and above (which are logged after the screen is restored).
    """
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        level = logging.DEBUG
    else:
        handler = logging.StreamHandler(sys.stderr)
        level = logging.WARNING
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="kvjson",
        description=f"Build key/value pairs interactively and optionally save them to {OUTPUT_PATH}.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "--log-file",
        default=None,
        help="Write debug logs to this file (default: warnings only, to stderr)",
    )
    return p


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Runs the editor, then writes the pairs if asked to."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file)

    from .tui import main as tui_main

    try:
        session, result = tui_main()
    except KeyboardInterrupt:
        sys.exit(130)

    if not result.persist:
        logger.debug("quit without writing")
        return

    try:
        write_json(OUTPUT_PATH, session.pairs)
    except OSError as e:
        logger.debug("could not write %s: %s", OUTPUT_PATH, e)
        sys.exit(f"Failed to write {OUTPUT_PATH}: {e}")
    print(f"Wrote {len(session.pairs)} pairs to {os.path.abspath(OUTPUT_PATH)}")


if __name__ == "__main__":
    main()
