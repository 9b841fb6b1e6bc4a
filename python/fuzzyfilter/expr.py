"""Polars expression namespace for fuzzy string matching.

This module registers a `.fuzzy` namespace on Polars expressions,
enabling fuzzy matching operations directly in Polars expression contexts.
Each operation runs the pure-Python matchers row by row through
``map_elements``.

Warning:
    Per-row evaluation is linear in the number of rows and quadratic in
    string length. Bound input sizes on large frames.

Example:
    >>> import polars as pl
    >>> import fuzzyfilter  # Registers the namespace
    >>>
    >>> df = pl.DataFrame({"name": ["John Smith", "Jon Smyth", "Jane Doe"]})
    >>> df.filter(pl.col("name").fuzzy.is_match("jon smith", strategy="whole_word"))
"""

from typing import Optional, Union

import polars as pl

from fuzzyfilter._utils import fold_case
from fuzzyfilter.distance import get_metric, similarity
from fuzzyfilter.enums import Algorithm, FuzzyMatchStrategy
from fuzzyfilter.filter import FuzzySearchFilter
from fuzzyfilter.matching import DEFAULT_MAX_DISTANCE, find_best_match
from fuzzyfilter.substring import find_best_substring_match

SUBSTRING_MATCH_DTYPE = pl.Struct({
    "start": pl.Int64,
    "end": pl.Int64,
    "distance": pl.Int64,
    "matched_text": pl.Utf8,
})


@pl.api.register_expr_namespace("fuzzy")
class FuzzyExprNamespace:
    """
    Fuzzy string matching namespace for Polars expressions.

    Access via `.fuzzy` on any string expression. Null cells produce null
    results, except :meth:`is_match` which treats them as non-matching.
    """

    def __init__(self, expr: pl.Expr):
        self._expr = expr

    def distance(
        self,
        other: Union[str, pl.Expr],
        algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
    ) -> pl.Expr:
        """
        Calculate edit distance between this column and another value/column.

        Args:
            other: String literal or column expression to compare against
            algorithm: Distance algorithm to use (string or Algorithm enum)

        Returns:
            Expression producing integer distances

        Example:
            >>> df.with_columns(dist=pl.col("name").fuzzy.distance("John"))
        """
        metric = get_metric(algorithm)

        if isinstance(other, str):
            return self._expr.map_elements(
                lambda s: metric(s, other),
                return_dtype=pl.Int64,
            )
        return pl.struct([self._expr.alias("_left"), other.alias("_right")]).map_elements(
            lambda row: (
                None
                if row["_left"] is None or row["_right"] is None
                else metric(row["_left"], row["_right"])
            ),
            return_dtype=pl.Int64,
        )

    def similarity(
        self,
        other: Union[str, pl.Expr],
        algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
    ) -> pl.Expr:
        """
        Calculate similarity ratio between this column and another value/column.

        Returns:
            Expression producing similarity scores (0.0 to 1.0)

        Example:
            >>> df.with_columns(score=pl.col("name1").fuzzy.similarity(pl.col("name2")))
        """
        if isinstance(other, str):
            return self._expr.map_elements(
                lambda s: similarity(s, other, algorithm),
                return_dtype=pl.Float64,
            )
        return pl.struct([self._expr.alias("_left"), other.alias("_right")]).map_elements(
            lambda row: (
                None
                if row["_left"] is None or row["_right"] is None
                else similarity(row["_left"], row["_right"], algorithm)
            ),
            return_dtype=pl.Float64,
        )

    def is_match(
        self,
        query: str,
        strategy: Union[str, FuzzyMatchStrategy] = FuzzyMatchStrategy.CONTAINS,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        min_similarity: Optional[float] = None,
        case_sensitive: bool = False,
        algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
    ) -> pl.Expr:
        """
        Check whether each value matches a query under a fuzzy strategy.

        Uses the same rules as :class:`~fuzzyfilter.FuzzySearchFilter`.

        Returns:
            Boolean expression (null cells are False)

        Example:
            >>> df.filter(pl.col("title").fuzzy.is_match("laptpo", max_distance=1))
        """
        search = FuzzySearchFilter(
            lambda value: [value],
            query=query,
            strategy=strategy,
            max_distance=max_distance,
            min_similarity=min_similarity,
            case_sensitive=case_sensitive,
            algorithm=algorithm,
        )
        return self._expr.map_elements(search.apply, return_dtype=pl.Boolean).fill_null(False)

    def best_match(
        self,
        choices: list[str],
        max_distance: int = DEFAULT_MAX_DISTANCE,
        case_sensitive: bool = False,
        algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
    ) -> pl.Expr:
        """
        Find the closest string from a list of choices.

        Returns:
            Expression with the best matching choice (or null)

        Example:
            >>> categories = ["Electronics", "Clothing", "Food"]
            >>> df.with_columns(category=pl.col("raw_category").fuzzy.best_match(categories))
        """

        def find_best(value):
            match = find_best_match(
                value,
                choices,
                max_distance=max_distance,
                case_sensitive=case_sensitive,
                algorithm=algorithm,
            )
            return match.candidate if match is not None else None

        return self._expr.map_elements(find_best, return_dtype=pl.Utf8)

    def substring_match(
        self,
        query: str,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        case_sensitive: bool = False,
        algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
    ) -> pl.Expr:
        """
        Locate the best fuzzy occurrence of a query in each value.

        Returns:
            Struct expression with fields 'start', 'end', 'distance' and
            'matched_text' (null where nothing matches)

        Example:
            >>> df.with_columns(
            ...     hit=pl.col("text").fuzzy.substring_match("wrld", max_distance=1)
            ... ).select(pl.col("hit").struct.field("matched_text"))
        """

        def locate(value):
            match = find_best_substring_match(
                value,
                query,
                max_distance=max_distance,
                case_sensitive=case_sensitive,
                algorithm=algorithm,
            )
            if match is None:
                return None
            return {
                "start": match.start,
                "end": match.end,
                "distance": match.distance,
                "matched_text": match.matched_text,
            }

        return self._expr.map_elements(locate, return_dtype=SUBSTRING_MATCH_DTYPE)

    def fold_case(self) -> pl.Expr:
        """
        Lowercase values the way case-insensitive matching does.

        Unlike ``str.to_lowercase``, never changes string length.
        """
        return self._expr.map_elements(fold_case, return_dtype=pl.Utf8)
