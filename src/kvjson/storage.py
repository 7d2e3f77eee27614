"""JSON output for kvjson."""

import json
import logging
from typing import Dict

logger = logging.getLogger(__name__)


def dumps(pairs: Dict[str, str]) -> str:
    """Pretty-printed JSON object of pairs, in insertion order."""
    return json.dumps(pairs, indent=2, ensure_ascii=False) + "\n"


def write_json(path: str, pairs: Dict[str, str]) -> None:
    """Write pairs to path as a JSON object. OSError propagates."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(pairs))
    logger.info("wrote %d pairs to %s", len(pairs), path)
