"""Hot-word counting over chat message word slices."""

from __future__ import annotations

import bisect
import re
from collections import Counter
from typing import Iterable, Mapping

MAX_MESSAGES = 10000
DEFAULT_MESSAGES = 1000
TOP_N = 20

_CHINESE = re.compile("[一-龥]+")


def load_stopwords(text: str) -> list[str]:
    """Split a stopword file into a sorted list, ignoring carriage returns."""
    return sorted(text.replace("\r", "").split("\n"))


def is_chinese_word(text: str) -> bool:
    """Whether text consists only of common CJK ideographs."""
    return _CHINESE.fullmatch(text) is not None


def _is_stopword(word: str, stopwords: list[str]) -> bool:
    i = bisect.bisect_left(stopwords, word)
    return i < len(stopwords) and stopwords[i] == word


def count_words(
    slices: Iterable[str], stopwords: list[str], counter: Counter | None = None
) -> Counter:
    """Add the Chinese non-stopword slices to counter and return it."""
    if counter is None:
        counter = Counter()
    for piece in slices:
        word = piece.strip()
        if is_chinese_word(word) and not _is_stopword(word, stopwords):
            counter[word] += 1
    return counter


def rank_by_word_count(freq: Mapping[str, int]) -> list[tuple[str, int]]:
    """Return (word, count) pairs, most frequent first."""
    return sorted(freq.items(), key=lambda kv: (-kv[1], kv[0]))


def clamp_message_count(count: int) -> int:
    """Cap the requested message count and apply the default for zero."""
    if count > MAX_MESSAGES:
        return MAX_MESSAGES
    if count == 0:
        return DEFAULT_MESSAGES
    return count