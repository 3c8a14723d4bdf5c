"""
Word counting and top-K selection.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List

from wordcrawler.config import MIN_WORD_LENGTH


@dataclass(frozen=True, slots=True)
class WordFrequency:
    word: str
    frequency: int


def accumulate(frequencies: Counter, text: str, min_word_length: int = MIN_WORD_LENGTH) -> Counter:
    """
    Count the words of text into frequencies and return the same Counter.

    Text is split on single spaces and each token is stripped. Tokens shorter
    than min_word_length are ignored. Matching is case-sensitive.
    """
    words = (token.strip() for token in text.split(" "))
    frequencies.update(word for word in words if word and len(word) >= min_word_length)
    return frequencies


def top_k(frequencies: Counter, k: int) -> List[WordFrequency]:
    """
    Return the k most frequent words, least frequent first.

    The stable ascending sort keeps insertion order among equal counts, so of
    two words with the same count the one first seen later ranks higher.
    """
    if k <= 0:
        return []
    # a bounded heap would avoid the full sort for large vocabularies
    ranked = sorted(frequencies.items(), key=lambda item: item[1])
    return [WordFrequency(word, count) for word, count in ranked[-k:]]
