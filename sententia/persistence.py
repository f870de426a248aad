"""
Saving and restoring analysis state.

The saved form is a JSON document::

    {"version": 1, "timestamp": "...Z", "input": "...", "words": [...]}

Rejection ledgers and dependency sets are written as sorted arrays and
turned back into sets on load.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import PersistenceError
from .model import Word

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def to_document(words: List[Word], text: Optional[str] = None) -> Dict[str, Any]:
    return {
        "version": FORMAT_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "input": text if text is not None else " ".join(w.original for w in words),
        "words": [w.to_dict() for w in words],
    }


def from_document(data: Dict[str, Any]) -> List[Word]:
    version = data.get("version")
    if version != FORMAT_VERSION:
        raise PersistenceError(f"Unsupported state version: {version!r}")
    try:
        words = [Word.from_dict(w) for w in data["words"]]
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"Malformed saved state: {e}") from e
    for position, word in enumerate(words):
        if word.index != position:
            raise PersistenceError(f"Word {word.original!r} stored at {position} claims index {word.index}")
    return words


def save(words: List[Word], path, text: Optional[str] = None) -> None:
    document = to_document(words, text)
    with open(Path(path), 'w', encoding='utf-8') as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
    logger.info("Saved %d words to %s", len(words), path)


def read_document(path) -> Dict[str, Any]:
    try:
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PersistenceError(f"Cannot read saved state {path}: {e}") from e
    if not isinstance(data, dict):
        raise PersistenceError(f"Saved state {path} is not a JSON object")
    return data


def load(path) -> List[Word]:
    words = from_document(read_document(path))
    logger.info("Loaded %d words from %s", len(words), path)
    return words
