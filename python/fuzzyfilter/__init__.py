"""
fuzzyfilter - Typo-tolerant string matching and search filters

Edit distance metrics, best/all candidate matching, fuzzy substring location
and a multi-strategy search predicate for filtering collections of items.

Example usage:
    >>> import fuzzyfilter as ff

    # Edit distances
    >>> ff.levenshtein("kitten", "sitting")
    3
    >>> ff.damerau_levenshtein("teh", "the")
    1

    # Closest candidate
    >>> ff.find_best_match("helo", ["hello", "world", "help"])
    FuzzyMatch(candidate='hello', distance=1, query='helo')

    # Where does the query occur?
    >>> ff.find_best_substring_match("hello world", "world")
    SubstringMatch(start=6, end=11, distance=0, matched_text='world')

    # Filter items
    >>> search = ff.FuzzySearchFilter(lambda c: [c["name"]], strategy="whole_word")
    >>> search.query = "jon smth"
    >>> search.apply({"name": "John Smith"})
    True
"""

from importlib.metadata import version as _get_version

from fuzzyfilter.distance import (
    DistanceMetric,
    damerau_levenshtein,
    damerau_levenshtein_similarity,
    get_metric,
    levenshtein,
    levenshtein_similarity,
    similarity,
)
from fuzzyfilter.enums import Algorithm, FuzzyMatchStrategy, TransformSource
from fuzzyfilter.exceptions import AlgorithmError, FuzzyFilterError, ValidationError
from fuzzyfilter.filter import DEFAULT_FILTER_ID, FuzzySearchFilter, ValuesRetriever
from fuzzyfilter.matching import (
    DEFAULT_MAX_DISTANCE,
    FuzzyMatch,
    find_all_matches,
    find_best_match,
)
from fuzzyfilter.substring import (
    SubstringMatch,
    find_all_substring_matches,
    find_best_substring_match,
)

# Register the .fuzzy expression namespace
import fuzzyfilter.expr  # noqa: F401

# Import polars subpackage for `from fuzzyfilter import polars` style
from fuzzyfilter import polars
from fuzzyfilter.polars_ext import (
    filter_dataframe,
    match_series,
    substring_matches,
)

__version__ = _get_version("fuzzyfilter")

__all__ = [
    # Version
    "__version__",
    # Custom exceptions
    "FuzzyFilterError",
    "ValidationError",
    "AlgorithmError",
    # Result types
    "FuzzyMatch",
    "SubstringMatch",
    # Enums
    "Algorithm",
    "FuzzyMatchStrategy",
    "TransformSource",
    # Defaults
    "DEFAULT_MAX_DISTANCE",
    "DEFAULT_FILTER_ID",
    # Distance/similarity functions
    "DistanceMetric",
    "levenshtein",
    "damerau_levenshtein",
    "similarity",
    "levenshtein_similarity",
    "damerau_levenshtein_similarity",
    "get_metric",
    # Candidate matching
    "find_best_match",
    "find_all_matches",
    # Substring matching
    "find_best_substring_match",
    "find_all_substring_matches",
    # Search filter
    "FuzzySearchFilter",
    "ValuesRetriever",
    # Polars Integration
    "filter_dataframe",
    "match_series",
    "substring_matches",
    # Polars subpackage
    "polars",
]


# Convenience aliases
edit_distance = levenshtein
