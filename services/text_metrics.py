"""
Keyword frequency and readability statistics over raw resume text.
"""
import math
import re
from collections import Counter
from typing import List

STOP_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "up", "about", "into", "through", "during", "before",
    "after", "above", "below", "between", "among", "is", "are", "was", "were",
    "be", "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "would", "could", "should", "may", "might", "must", "can", "this", "that",
    "these", "those", "i", "you", "he", "she", "it", "we", "they", "me", "him",
    "her", "us", "them", "my", "your", "his", "its", "our", "their",
])

KEYWORD_LIMIT = 20

_WORD_PATTERN = re.compile(r'\b[a-z]{3,}\b')
_SENTENCE_SPLIT = re.compile(r'[.!?]+')
_SILENT_SUFFIX = re.compile(r'(?:[^laeiouy]es|ed|[^laeiouy]e)$')
_LEADING_Y = re.compile(r'^y')
_VOWEL_RUN = re.compile(r'[aeiouy]+')

READABILITY_LEVELS = [
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def count_words(text: str) -> int:
    return len(text.split())


def extract_keywords(text: str, limit: int = KEYWORD_LIMIT) -> List[str]:
    """Most frequent non-stop-words; ties keep first-seen order."""
    counts = Counter(
        word for word in _WORD_PATTERN.findall(text.lower())
        if word not in STOP_WORDS
    )
    return [word for word, _ in counts.most_common(limit)]


def count_syllables(word: str) -> int:
    word = word.lower()
    if len(word) <= 3:
        return 1

    word = _SILENT_SUFFIX.sub("", word)
    word = _LEADING_Y.sub("", word)

    return len(_VOWEL_RUN.findall(word)) or 1


def calculate_readability_score(text: str) -> int:
    """
    Flesch Reading Ease clamped to 0-100.

    Text with no sentences or no words scores 0.
    """
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    words = text.split()
    if not sentences or not words:
        return 0

    syllables = sum(count_syllables(word) for word in words)
    words_per_sentence = len(words) / len(sentences)
    syllables_per_word = syllables / len(words)

    score = 206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word
    return round_half_up(max(0.0, min(100.0, score)))


def get_readability_level(score: int) -> str:
    for threshold, level in READABILITY_LEVELS:
        if score >= threshold:
            return level
    return "Very Difficult"
