"""Best and all fuzzy matches of a query against candidate strings.

Example usage:
    >>> from fuzzyfilter.matching import find_best_match, find_all_matches
    >>> find_best_match("jonh", ["John", "Jane", "Bob"])
    FuzzyMatch(candidate='John', distance=2, query='jonh')
    >>> [(m.candidate, m.distance) for m in find_all_matches("hello", ["helo", "hello", "hallo"])]
    [('hello', 0), ('helo', 1), ('hallo', 1)]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from fuzzyfilter._utils import fold_case, validate_max_distance
from fuzzyfilter.distance import get_metric, ratio
from fuzzyfilter.enums import Algorithm

__all__ = ["FuzzyMatch", "find_best_match", "find_all_matches"]

DEFAULT_MAX_DISTANCE = 2


@dataclass(frozen=True)
class FuzzyMatch:
    """Result of a candidate match.

    Attributes:
        candidate: The matched candidate, as it was given (not case-folded).
        distance: Edit distance from the query.
        query: The query the candidate was matched against.

    Supports equality comparison and hashing for use in sets and as dict keys.
    """

    candidate: str
    distance: int
    query: str = ""

    @property
    def similarity(self) -> float:
        """Similarity ratio (0.0 to 1.0) relative to the longer of candidate and query."""
        return ratio(self.distance, self.candidate, self.query)


def _scored(
    query: str,
    candidates: Iterable[str],
    case_sensitive: bool,
    algorithm: Union[str, Algorithm],
):
    metric = get_metric(algorithm)
    query_norm = query if case_sensitive else fold_case(query)
    for candidate in candidates:
        candidate_norm = candidate if case_sensitive else fold_case(candidate)
        yield candidate, metric(query_norm, candidate_norm)


def find_best_match(
    query: str,
    candidates: Iterable[str],
    max_distance: int = DEFAULT_MAX_DISTANCE,
    case_sensitive: bool = False,
    algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
) -> Optional[FuzzyMatch]:
    """Find the candidate closest to the query.

    Candidates are scanned in order; the first one reaching the lowest
    distance wins, and the scan stops at the first exact match.

    Args:
        query: The search query.
        candidates: Strings to match against.
        max_distance: Maximum edit distance for a match (default: 2).
        case_sensitive: Whether matching is case-sensitive (default: False).
        algorithm: Edit distance to use (default: Levenshtein).

    Returns:
        The best FuzzyMatch, or None if there are no candidates or all of
        them exceed ``max_distance``.

    Raises:
        ValidationError: If max_distance is negative.
    """
    validate_max_distance(max_distance)

    best: Optional[FuzzyMatch] = None
    for candidate, distance in _scored(query, candidates, case_sensitive, algorithm):
        if distance > max_distance:
            continue
        if best is None or distance < best.distance:
            best = FuzzyMatch(candidate=candidate, distance=distance, query=query)
        if distance == 0:
            break

    return best


def find_all_matches(
    query: str,
    candidates: Iterable[str],
    max_distance: int = DEFAULT_MAX_DISTANCE,
    case_sensitive: bool = False,
    algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
) -> list[FuzzyMatch]:
    """Find every candidate within ``max_distance`` of the query.

    Returns:
        Matches sorted by distance (best first). Candidates at the same
        distance keep their input order.

    Raises:
        ValidationError: If max_distance is negative.

    Example:
        >>> [m.candidate for m in find_all_matches("jon", ["John", "Jane", "Jonathan"])]
        ['John', 'Jane']
    """
    validate_max_distance(max_distance)

    matches = [
        FuzzyMatch(candidate=candidate, distance=distance, query=query)
        for candidate, distance in _scored(query, candidates, case_sensitive, algorithm)
        if distance <= max_distance
    ]
    # list.sort is stable
    matches.sort(key=lambda match: match.distance)
    return matches
