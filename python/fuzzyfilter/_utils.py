"""Internal utilities for fuzzyfilter."""

import math
import re
from typing import Optional, Union

from fuzzyfilter.enums import Algorithm, FuzzyMatchStrategy, TransformSource
from fuzzyfilter.exceptions import AlgorithmError, ValidationError

# Maximal runs of alphanumeric characters (underscore is a separator)
WORD_PATTERN = re.compile(r"[^\W_]+")

# Valid algorithm names (lowercase)
VALID_ALGORITHMS = frozenset({
    "levenshtein",
    "damerau_levenshtein",
    "damerau",
})


def normalize_algorithm(algorithm: Union[str, Algorithm]) -> str:
    """Convert Algorithm enum to string, or validate string algorithm name.

    Args:
        algorithm: Either an Algorithm enum value or a string algorithm name.

    Returns:
        Lowercase canonical algorithm name. ``"damerau"`` resolves to
        ``"damerau_levenshtein"``.

    Raises:
        AlgorithmError: If the algorithm name is not recognized.
        TypeError: If algorithm is not a string or Algorithm enum.

    Example:
        >>> normalize_algorithm(Algorithm.DAMERAU)
        'damerau_levenshtein'
        >>> normalize_algorithm("Levenshtein")
        'levenshtein'
    """
    if isinstance(algorithm, Algorithm):
        name = algorithm.value
    elif isinstance(algorithm, str):
        name = algorithm.lower()
        if name not in VALID_ALGORITHMS:
            raise AlgorithmError(
                f"Unknown algorithm: '{algorithm}'. "
                f"Valid options: {sorted(VALID_ALGORITHMS)}"
            )
    else:
        raise TypeError(
            f"algorithm must be str or Algorithm enum, got {type(algorithm).__name__}"
        )

    if name == Algorithm.DAMERAU.value:
        return Algorithm.DAMERAU_LEVENSHTEIN.value
    return name


def normalize_strategy(strategy: Union[str, FuzzyMatchStrategy]) -> FuzzyMatchStrategy:
    """Resolve a strategy given as enum member or name.

    Both ``"starts_with"`` and ``"startsWith"`` style spellings are accepted.

    Raises:
        ValidationError: If the strategy name is not recognized.
        TypeError: If strategy is not a string or FuzzyMatchStrategy enum.
    """
    if isinstance(strategy, FuzzyMatchStrategy):
        return strategy
    if not isinstance(strategy, str):
        raise TypeError(
            f"strategy must be str or FuzzyMatchStrategy enum, got {type(strategy).__name__}"
        )
    key = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", strategy).lower()
    try:
        return FuzzyMatchStrategy(key)
    except ValueError:
        raise ValidationError(
            f"Unknown strategy: '{strategy}'. "
            f"Valid options: {[s.value for s in FuzzyMatchStrategy]}"
        ) from None


def normalize_source(source: Union[str, TransformSource]) -> TransformSource:
    """Resolve a transform source given as enum member or name.

    Raises:
        ValidationError: If the source name is not recognized.
        TypeError: If source is not a string or TransformSource enum.
    """
    if isinstance(source, TransformSource):
        return source
    if not isinstance(source, str):
        raise TypeError(
            f"source must be str or TransformSource enum, got {type(source).__name__}"
        )
    try:
        return TransformSource(source.lower())
    except ValueError:
        raise ValidationError(
            f"Unknown source: '{source}'. "
            f"Valid options: {[s.value for s in TransformSource]}"
        ) from None


def validate_max_distance(max_distance: int) -> int:
    """Reject negative or non-integral edit distance bounds."""
    if isinstance(max_distance, bool) or not isinstance(max_distance, int):
        raise ValidationError(
            f"max_distance must be an int, got {type(max_distance).__name__}"
        )
    if max_distance < 0:
        raise ValidationError(f"max_distance must be >= 0, got {max_distance}")
    return max_distance


def validate_min_similarity(min_similarity: Optional[float]) -> Optional[float]:
    """Reject similarity thresholds outside [0.0, 1.0] (including NaN)."""
    if min_similarity is None:
        return None
    if isinstance(min_similarity, bool) or not isinstance(min_similarity, (int, float)):
        raise ValidationError(
            f"min_similarity must be a float, got {type(min_similarity).__name__}"
        )
    value = float(min_similarity)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise ValidationError(f"min_similarity must be between 0.0 and 1.0, got {min_similarity}")
    return value


def fold_case(text: str) -> str:
    """Lowercase text without changing its length.

    Characters whose lowercase form is longer than one code point (such as
    'İ') are kept as-is, so offsets computed on the folded string are valid
    on the original.
    """
    folded = text.lower()
    if len(folded) == len(text):
        return folded
    parts = []
    for char in text:
        lower = char.lower()
        parts.append(lower if len(lower) == 1 else char)
    return "".join(parts)


def split_words(text: str) -> list[str]:
    """Split text into maximal alphanumeric runs."""
    return WORD_PATTERN.findall(text)


__all__ = [
    "VALID_ALGORITHMS",
    "WORD_PATTERN",
    "fold_case",
    "normalize_algorithm",
    "normalize_source",
    "normalize_strategy",
    "split_words",
    "validate_max_distance",
    "validate_min_similarity",
]
