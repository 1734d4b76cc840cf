"""Term extraction: tokenize, filter stopwords, stem, add bigrams."""

from __future__ import annotations

import re
from collections import Counter

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")

MIN_TOKEN_LENGTH = 3
MIN_STEMMABLE_LENGTH = 4
BIGRAM_JOINER = "_"

STOPWORDS: frozenset[str] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has", "he",
        "in", "is", "it", "its", "of", "on", "that", "the", "to", "was", "will", "with",
        "can", "could", "should", "would", "what", "when", "where", "who", "why", "how",
        "i", "you", "we", "they", "my", "your", "his", "her", "our", "their", "this",
        "these", "those", "am", "been", "being", "have", "had", "do", "does", "did",
        "or", "but", "if", "then", "so", "than", "such", "no", "not", "only", "same",
        "just", "about", "into", "through", "during", "before", "after", "above", "below",
        "between", "under", "again", "further", "once", "here", "there", "all", "any",
        "both", "each", "few", "more", "most", "other", "some", "own", "get", "make",
        "go", "know", "take", "see", "come", "think", "look", "want", "give", "use",
        "find", "tell", "ask", "work", "seem", "feel", "try", "leave", "call",
        "need", "also", "back", "because", "become", "well", "even", "new", "now",
        "way", "may", "say", "still", "very", "much", "many", "must", "like", "using",
        "please", "help", "thanks", "question", "problem", "error", "issue",
        "understand", "understanding", "explain", "looking", "learn", "learning",
        # generic course vocabulary that matches almost every question
        "java", "code", "coding", "program", "programming", "project", "example", "examples",
        "class", "classes", "method", "methods", "function", "functions", "object", "objects",
        "real", "world", "basic", "basics", "tutorial", "guide", "sample",
    }
)

# Checked top to bottom; the first matching suffix wins.
SUFFIX_RULES: tuple[tuple[str, str], ...] = (
    ("ational", "ate"),
    ("tional", "tion"),
    ("ization", "ize"),
    ("ation", ""),
    ("ition", ""),
    ("ness", ""),
    ("ment", ""),
    ("able", ""),
    ("ible", ""),
    ("ful", ""),
    ("less", ""),
    ("ous", ""),
    ("ive", ""),
    ("ing", ""),
    ("ed", ""),
    ("er", ""),
    ("est", ""),
    ("ly", ""),
    ("ies", "y"),
    ("es", ""),
    ("s", ""),
)


def tokenize(text: str | None) -> list[str]:
    """Lowercase, blank out punctuation and split on whitespace."""
    if not text:
        return []
    return _NON_ALNUM_RE.sub(" ", text.lower()).split()


def stem(word: str) -> str:
    """Strip the first matching suffix if at least three characters remain."""
    if len(word) < MIN_STEMMABLE_LENGTH:
        return word
    for suffix, replacement in SUFFIX_RULES:
        if word.endswith(suffix) and len(word) - len(suffix) + len(replacement) >= MIN_TOKEN_LENGTH:
            return word[: len(word) - len(suffix)] + replacement
    return word


def extract_terms(text: str | None) -> list[str]:
    """Return the ordered stems of every token surviving the stopword filter."""
    return [
        stem(token)
        for token in tokenize(text)
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOPWORDS
    ]


def normalize(text: str | None) -> dict[str, int]:
    """Build the unigram + bigram term frequency map for ``text``.

    Unigrams and bigrams share one count space. Empty or all-stopword text
    yields an empty mapping.
    """
    stems = extract_terms(text)
    counts: Counter[str] = Counter(term for term in stems if len(term) >= MIN_TOKEN_LENGTH)
    counts.update(
        f"{left}{BIGRAM_JOINER}{right}" for left, right in zip(stems, stems[1:])
    )
    return dict(counts)


__all__ = ["STOPWORDS", "SUFFIX_RULES", "tokenize", "stem", "extract_terms", "normalize"]
