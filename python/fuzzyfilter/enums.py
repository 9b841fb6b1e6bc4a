"""Enums for fuzzyfilter API."""

from enum import Enum


class Algorithm(str, Enum):
    """Available edit distance algorithms.

    String values are accepted anywhere an Algorithm is expected.

    Example:
        >>> from fuzzyfilter import Algorithm, find_best_match
        >>> find_best_match("teh", ["the", "tea"], algorithm=Algorithm.DAMERAU_LEVENSHTEIN)
        FuzzyMatch(candidate='the', distance=1, query='teh')
    """

    LEVENSHTEIN = "levenshtein"
    """Classic edit distance (insertions, deletions, substitutions)"""

    DAMERAU_LEVENSHTEIN = "damerau_levenshtein"
    """Edit distance including adjacent transpositions (e.g., 'teh' -> 'the' is 1 edit)"""

    DAMERAU = "damerau"
    """Alias for DAMERAU_LEVENSHTEIN"""


class FuzzyMatchStrategy(str, Enum):
    """How a query is aligned against a searchable value.

    Example:
        >>> from fuzzyfilter import FuzzySearchFilter, FuzzyMatchStrategy
        >>> names = FuzzySearchFilter(
        ...     lambda contact: [contact["name"]],
        ...     strategy=FuzzyMatchStrategy.WHOLE_WORD,
        ...     query="Jon Smth",
        ... )
        >>> names.apply({"name": "John Smith"})
        True
    """

    CONTAINS = "contains"
    """Query may occur anywhere in the value, with typo tolerance (default)"""

    STARTS_WITH = "starts_with"
    """Query must fuzzy-match the beginning of the value (autocomplete style)"""

    WHOLE_WORD = "whole_word"
    """Every query word must fuzzy-match some word of the value"""

    ANYWHERE = "anywhere"
    """Any query word fuzzy-matching any value word is enough (most permissive)"""


class TransformSource(str, Enum):
    """Where a filter is evaluated."""

    LOCAL = "local"
    """Filtered client-side through ``apply``"""

    REMOTE = "remote"
    """Filtered server-side; ``apply`` lets every item through"""

    COMBINED = "combined"
    """Filtered both locally and by the remote data source"""


__all__ = ["Algorithm", "FuzzyMatchStrategy", "TransformSource"]
