"""Word lists used to populate trainings."""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from wordscramble.config import settings
from wordscramble.exceptions import WordListError
from wordscramble.services.scrambler import can_be_scrambled


logger = logging.getLogger(__name__)

DEFAULT_WORDS: List[str] = [
    "apple",
    "function",
    "timeout",
    "task",
    "application",
    "data",
    "tragedy",
    "sun",
    "symbol",
    "button",
    "software",
]


def validate_words(words: Iterable[str]) -> List[str]:
    """Normalize a word list and reject words that cannot be scrambled.

    Entries are stripped and lowercased; blanks and duplicates are dropped.
    """
    result: List[str] = []
    seen = set()
    for raw in words:
        word = raw.strip().lower()
        if not word or word in seen:
            continue
        if not (word.isascii() and word.isalpha()):
            raise WordListError(f"Word '{raw}' must contain only latin letters")
        if len(word) < 2:
            raise WordListError(f"Word '{raw}' is too short to be scrambled")
        if not can_be_scrambled(word):
            raise WordListError(f"Word '{raw}' has no scrambled form different from itself")
        seen.add(word)
        result.append(word)
    return result


def load_words(path: Optional[Union[str, Path]] = None) -> List[str]:
    """Load words from a file with one word per line.

    Lines starting with '#' are comments. Without a path the configured
    ``WORDS_FILE`` is used, and without that the built-in list.
    """
    if path is None:
        path = settings.training.words_file
    if path is None:
        return validate_words(DEFAULT_WORDS)

    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        lines = [line for line in f if not line.lstrip().startswith("#")]
    words = validate_words(lines)
    if not words:
        raise WordListError(f"Word list {path} is empty")
    logger.info(f"Loaded {len(words)} words from {path}")
    return words
