"""High-level Polars DataFrame operations for fuzzyfilter.

Functions in This Module
------------------------
- ``filter_dataframe()``: Keep the rows that pass a FuzzySearchFilter
- ``match_series()``: Fuzzy-match a query against every value of a Series
- ``substring_matches()``: Locate fuzzy occurrences of a query in each value

Example Usage
-------------
>>> import polars as pl
>>> from fuzzyfilter import FuzzySearchFilter
>>> from fuzzyfilter.polars_ext import filter_dataframe
>>>
>>> df = pl.DataFrame({
...     "name": ["John Smith", "Jane Doe", "Alice"],
...     "email": ["john@test.com", None, "alice@test.com"],
... })
>>> search = FuzzySearchFilter(lambda row: [row["name"], row["email"]], query="jonh")
>>> filter_dataframe(df, search)

See Also
--------
- ``fuzzyfilter.expr``: Polars expression namespace for column operations
"""

from typing import Union

import polars as pl

from fuzzyfilter.enums import Algorithm
from fuzzyfilter.filter import FuzzySearchFilter
from fuzzyfilter.matching import DEFAULT_MAX_DISTANCE, find_all_matches
from fuzzyfilter.substring import find_all_substring_matches

__all__ = ["filter_dataframe", "match_series", "substring_matches"]


def filter_dataframe(df: "pl.DataFrame", search_filter: FuzzySearchFilter) -> "pl.DataFrame":
    """
    Keep the rows of a DataFrame that pass a fuzzy search filter.

    Each row is handed to ``search_filter.apply`` as a ``{column: value}``
    dict, so the filter's values_retriever should read columns by name.

    Args:
        df: DataFrame to filter
        search_filter: Filter whose current query is applied

    Returns:
        DataFrame with the matching rows, in their original order
    """
    if not search_filter.query or len(df) == 0:
        return df
    mask = [search_filter.apply(row) for row in df.iter_rows(named=True)]
    return df.filter(pl.Series(mask, dtype=pl.Boolean))


def match_series(
    query: str,
    series: "pl.Series",
    max_distance: int = DEFAULT_MAX_DISTANCE,
    case_sensitive: bool = False,
    algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
) -> "pl.DataFrame":
    """
    Match a query against every value of a Series.

    Null values are skipped.

    Args:
        query: Search query
        series: Series of candidate strings
        max_distance: Maximum edit distance for a match (default: 2)
        case_sensitive: Whether matching is case-sensitive (default: False)
        algorithm: Edit distance to use (string or Algorithm enum)

    Returns:
        DataFrame with columns: index, value, distance, similarity, sorted by
        distance (ties keep Series order)

    Example:
        >>> match_series("helo", pl.Series(["hello", "world", "help"]))
    """
    indexed = [(idx, value) for idx, value in enumerate(series.to_list()) if value is not None]
    matches = find_all_matches(
        query,
        [value for _, value in indexed],
        max_distance=max_distance,
        case_sensitive=case_sensitive,
        algorithm=algorithm,
    )

    # Match candidates back to their row, consuming duplicates in order
    positions: dict[str, list[int]] = {}
    for idx, value in indexed:
        positions.setdefault(value, []).append(idx)

    rows = []
    for match in matches:
        rows.append({
            "index": positions[match.candidate].pop(0),
            "value": match.candidate,
            "distance": match.distance,
            "similarity": match.similarity,
        })

    return pl.DataFrame(
        rows,
        schema={"index": pl.Int64, "value": pl.Utf8, "distance": pl.Int64, "similarity": pl.Float64},
    )


def substring_matches(
    series: "pl.Series",
    query: str,
    max_distance: int = DEFAULT_MAX_DISTANCE,
    case_sensitive: bool = False,
    algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
) -> "pl.DataFrame":
    """
    Locate every fuzzy occurrence of a query in each value of a Series.

    Useful for highlighting search hits in tabular output.

    Returns:
        DataFrame with columns: index, start, end, distance, matched_text.
        Rows are grouped by Series index; within a value they follow
        ``find_all_substring_matches`` order.

    Example:
        >>> substring_matches(pl.Series(["John met Jon", "nobody"]), "john", max_distance=1)
    """
    rows = []
    for idx, value in enumerate(series.to_list()):
        if value is None:
            continue
        for match in find_all_substring_matches(
            value,
            query,
            max_distance=max_distance,
            case_sensitive=case_sensitive,
            algorithm=algorithm,
        ):
            rows.append({
                "index": idx,
                "start": match.start,
                "end": match.end,
                "distance": match.distance,
                "matched_text": match.matched_text,
            })

    return pl.DataFrame(
        rows,
        schema={
            "index": pl.Int64,
            "start": pl.Int64,
            "end": pl.Int64,
            "distance": pl.Int64,
            "matched_text": pl.Utf8,
        },
    )
