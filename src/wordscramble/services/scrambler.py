"""Random letter permutations and index sampling."""
import logging
import random
from typing import List


logger = logging.getLogger(__name__)


def randomize_entity(max_random_index: int, iterations_count: int) -> List[int]:
    """Draw ``iterations_count`` distinct indexes from ``[0, max_random_index)``.

    Indexes are drawn one by one; an index that was already chosen is
    thrown away and drawn again, so the result is a uniformly random
    ordered sample without repetition.
    """
    if max_random_index < 0 or iterations_count < 0:
        raise ValueError("Index range and sample size cannot be negative")
    if iterations_count > max_random_index:
        raise ValueError(f"Cannot draw {iterations_count} distinct indexes out of {max_random_index}")

    randomized: List[int] = []
    while len(randomized) < iterations_count:
        index = random.randrange(max_random_index)
        if index not in randomized:
            randomized.append(index)
    return randomized


def can_be_scrambled(word: str) -> bool:
    """A word has a differing permutation only if it has two distinct letters."""
    return len(set(word)) > 1


def scramble_word(word: str) -> str:
    """Return a permutation of ``word`` that differs from ``word``.

    Words without a differing permutation ("", "a", "aa") come back unchanged.
    """
    if not can_be_scrambled(word):
        logger.warning(f"Word '{word}' cannot be scrambled, keeping original order")
        return word

    while True:
        indexes = randomize_entity(len(word), len(word))
        scrambled = "".join(word[i] for i in indexes)
        if scrambled != word:
            return scrambled
