"""Locate approximate occurrences of a query inside a longer text.

The search runs in up to three phases:

1. Exact occurrence: if the query occurs verbatim (after case folding) it is
   returned with distance 0, even inside a longer word.
2. Word fast path: the text is tokenized into alphanumeric runs and each
   word is compared with the query.
3. Sliding window: only when no word is within ``max_distance`` (the query
   spans a word boundary, or the text has no separators), every window of
   length ``len(query) - 1``, ``len(query)`` and ``len(query) + 1`` is
   compared.

Offsets always refer to the original text, so results can be used for
highlighting:

    >>> text = "Hello World"
    >>> match = find_best_substring_match(text, "wrld", max_distance=1)
    >>> text[:match.start], text[match.start:match.end], text[match.end:]
    ('Hello ', 'World', '')
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from fuzzyfilter._utils import WORD_PATTERN, fold_case, validate_max_distance
from fuzzyfilter.distance import DistanceMetric, get_metric
from fuzzyfilter.enums import Algorithm
from fuzzyfilter.matching import DEFAULT_MAX_DISTANCE

__all__ = [
    "SubstringMatch",
    "find_all_substring_matches",
    "find_best_substring_match",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubstringMatch:
    """A fuzzy match with its position in the searched text.

    Attributes:
        start: Start offset of the match in the text.
        end: End offset (exclusive).
        distance: Edit distance from the query.
        matched_text: ``text[start:end]`` of the original text.
    """

    start: int
    end: int
    distance: int
    matched_text: str

    @property
    def is_exact(self) -> bool:
        """Whether the matched text equals the query (distance 0)."""
        return self.distance == 0

    @property
    def similarity(self) -> float:
        """Similarity ratio (0.0 to 1.0) relative to the matched text length."""
        max_len = max(len(self.matched_text), self.end - self.start)
        if max_len == 0:
            return 1.0
        return max(0.0, 1.0 - self.distance / max_len)


def _occurrences(text: str, query: str) -> Iterator[int]:
    """Yield the start of every exact occurrence, overlapping ones included."""
    index = text.find(query)
    while index != -1:
        yield index
        index = text.find(query, index + 1)


def _words(text: str) -> Iterator[tuple[int, int]]:
    for word in WORD_PATTERN.finditer(text):
        yield word.start(), word.end()


def _windows(text: str, query_len: int) -> Iterator[tuple[int, int]]:
    """Yield (start, end) for every sliding window, shortest first per start."""
    text_len = len(text)
    for start in range(text_len):
        previous_end = None
        for length in (query_len - 1, query_len, query_len + 1):
            if length <= 0:
                continue
            end = min(start + length, text_len)
            if end == previous_end:
                continue
            previous_end = end
            yield start, end


def _best_span(
    text: str,
    query: str,
    spans: Iterator[tuple[int, int]],
    metric: DistanceMetric,
) -> Optional[tuple[int, int, int]]:
    """Return (distance, start, end) of the first span with the lowest distance."""
    best = None
    for start, end in spans:
        distance = metric(query, text[start:end])
        if best is None or distance < best[0]:
            best = (distance, start, end)
            if distance == 0:
                break
    return best


def _prepare(text: str, query: str, case_sensitive: bool) -> tuple[str, str]:
    if case_sensitive:
        return text, query
    return fold_case(text), fold_case(query)


def find_best_substring_match(
    text: str,
    query: str,
    max_distance: int = DEFAULT_MAX_DISTANCE,
    case_sensitive: bool = False,
    algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
) -> Optional[SubstringMatch]:
    """Find the best fuzzy occurrence of ``query`` within ``text``.

    Args:
        text: The text to search within.
        query: The search query.
        max_distance: Maximum edit distance allowed (default: 2).
        case_sensitive: Whether matching is case-sensitive (default: False).
        algorithm: Edit distance to use (default: Levenshtein).

    Returns:
        The match with the lowest distance (leftmost on ties), or None if
        the query or text is empty or nothing is within ``max_distance``.
        An exact occurrence always wins, even inside a longer word.

    Raises:
        ValidationError: If max_distance is negative.

    Example:
        >>> find_best_substring_match("hello world", "world")
        SubstringMatch(start=6, end=11, distance=0, matched_text='world')
        >>> find_best_substring_match("worlds", "world", max_distance=1)
        SubstringMatch(start=0, end=5, distance=0, matched_text='world')
        >>> find_best_substring_match("hello world", "xyz", max_distance=1) is None
        True
    """
    validate_max_distance(max_distance)
    if not query or not text:
        return None

    text_norm, query_norm = _prepare(text, query, case_sensitive)
    metric = get_metric(algorithm)

    start = text_norm.find(query_norm)
    if start != -1:
        end = start + len(query_norm)
        return SubstringMatch(start=start, end=end, distance=0, matched_text=text[start:end])

    best = _best_span(text_norm, query_norm, _words(text_norm), metric)
    if best is None or best[0] > max_distance:
        logger.debug("No word within %d edits of %r, scanning sliding windows", max_distance, query)
        best = _best_span(text_norm, query_norm, _windows(text_norm, len(query_norm)), metric)

    if best is None or best[0] > max_distance:
        return None

    distance, start, end = best
    return SubstringMatch(start=start, end=end, distance=distance, matched_text=text[start:end])


def find_all_substring_matches(
    text: str,
    query: str,
    max_distance: int = DEFAULT_MAX_DISTANCE,
    case_sensitive: bool = False,
    algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
) -> list[SubstringMatch]:
    """Find every fuzzy occurrence of ``query`` within ``text``.

    Every exact occurrence (overlapping ones included) and every word
    within ``max_distance`` is reported. When neither finds anything,
    qualifying sliding windows are reported instead, keeping the best
    window for each start offset.

    Returns:
        Matches sorted by distance, then by start offset. At most one match
        per start offset.

    Raises:
        ValidationError: If max_distance is negative.

    Example:
        >>> [m.matched_text for m in find_all_substring_matches("John met Jon and Jonathan", "john", 1)]
        ['John', 'Jon']
    """
    validate_max_distance(max_distance)
    if not query or not text:
        return []

    text_norm, query_norm = _prepare(text, query, case_sensitive)
    metric = get_metric(algorithm)

    def collect(
        spans: Iterator[tuple[int, int]],
        by_start: dict[int, tuple[int, int]],
    ) -> None:
        for start, end in spans:
            distance = metric(query_norm, text_norm[start:end])
            if distance > max_distance:
                continue
            seen = by_start.get(start)
            if seen is None or distance < seen[0]:
                by_start[start] = (distance, end)

    found = {start: (0, start + len(query_norm)) for start in _occurrences(text_norm, query_norm)}
    collect(_words(text_norm), found)
    if not found:
        collect(_windows(text_norm, len(query_norm)), found)

    matches = [
        SubstringMatch(start=start, end=end, distance=distance, matched_text=text[start:end])
        for start, (distance, end) in found.items()
    ]
    matches.sort(key=lambda match: (match.distance, match.start))
    return matches
