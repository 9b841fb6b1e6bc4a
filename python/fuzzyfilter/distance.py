"""Edit distance metrics and the similarity ratio built on them.

Both metrics work on code points as given; callers fold case beforehand
when they want case-insensitive results.

Example usage:
    >>> from fuzzyfilter.distance import levenshtein, damerau_levenshtein, similarity
    >>> levenshtein("kitten", "sitting")
    3
    >>> damerau_levenshtein("teh", "the")
    1
    >>> similarity("hello", "helo")
    0.8
"""

from typing import Callable, Union

from fuzzyfilter._utils import normalize_algorithm
from fuzzyfilter.enums import Algorithm

DistanceMetric = Callable[[str, str], int]

__all__ = [
    "DistanceMetric",
    "damerau_levenshtein",
    "damerau_levenshtein_similarity",
    "get_metric",
    "levenshtein",
    "levenshtein_similarity",
    "similarity",
]


def levenshtein(a: str, b: str) -> int:
    """Compute the Levenshtein distance between two strings.

    The minimum number of single-character insertions, deletions and
    substitutions needed to turn ``a`` into ``b``.

    Args:
        a: First string.
        b: Second string.

    Returns:
        Edit distance, 0 if and only if the strings are identical.

    Example:
        >>> levenshtein("hello", "helo")
        1
        >>> levenshtein("", "abc")
        3
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Keep the row over the shorter string: O(min(m, n)) space
    if len(a) > len(b):
        a, b = b, a

    previous = list(range(len(a) + 1))
    for j, char_b in enumerate(b, start=1):
        current = [j]
        for i, char_a in enumerate(a, start=1):
            if char_a == char_b:
                current.append(previous[i - 1])
            else:
                current.append(1 + min(
                    previous[i],  # deletion
                    current[i - 1],  # insertion
                    previous[i - 1],  # substitution
                ))
        previous = current

    return previous[-1]


def damerau_levenshtein(a: str, b: str) -> int:
    """Compute the restricted Damerau-Levenshtein distance.

    Like :func:`levenshtein`, but swapping two adjacent characters also
    counts as a single edit. This is the optimal string alignment variant:
    a transposed pair cannot be edited further, so the result is always
    ``<= levenshtein(a, b)`` but the triangle inequality does not hold in
    general.

    Example:
        >>> damerau_levenshtein("teh", "the")
        1
        >>> levenshtein("teh", "the")
        2
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    m, n = len(a), len(b)
    # Full table: transpositions look two rows back
    table = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        table[i][0] = i
    for j in range(n + 1):
        table[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                best = table[i - 1][j - 1]
            else:
                best = 1 + min(
                    table[i - 1][j],  # deletion
                    table[i][j - 1],  # insertion
                    table[i - 1][j - 1],  # substitution
                )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                best = min(best, table[i - 2][j - 2] + 1)
            table[i][j] = best

    return table[m][n]


_METRICS: dict[str, DistanceMetric] = {
    "levenshtein": levenshtein,
    "damerau_levenshtein": damerau_levenshtein,
}


def get_metric(algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN) -> DistanceMetric:
    """Return the distance function for an algorithm name or enum member.

    Raises:
        AlgorithmError: If the algorithm is not an edit distance.
    """
    return _METRICS[normalize_algorithm(algorithm)]


def ratio(distance: int, a: str, b: str) -> float:
    """Turn a distance between ``a`` and ``b`` into a [0, 1] similarity."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - distance / max_len


def similarity(
    a: str,
    b: str,
    algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
) -> float:
    """Compute the similarity ratio between two strings.

    ``1 - distance / max(len(a), len(b))``; two empty strings are fully
    similar.

    Args:
        a: First string.
        b: Second string.
        algorithm: Edit distance used for the ratio (default: Levenshtein).

    Returns:
        Score between 0.0 (completely different) and 1.0 (identical).

    Example:
        >>> similarity("abc", "xyz")
        0.0
        >>> similarity("", "")
        1.0
    """
    if a == b:
        return 1.0
    return ratio(get_metric(algorithm)(a, b), a, b)


def levenshtein_similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity (see :func:`similarity`)."""
    return similarity(a, b, Algorithm.LEVENSHTEIN)


def damerau_levenshtein_similarity(a: str, b: str) -> float:
    """Normalized restricted Damerau-Levenshtein similarity."""
    return similarity(a, b, Algorithm.DAMERAU_LEVENSHTEIN)
