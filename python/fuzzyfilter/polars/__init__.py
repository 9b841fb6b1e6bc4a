"""
Polars integration for fuzzyfilter.

Levels:
    1. **Expression Namespace** (`.fuzzy`) - Per-row operations
       Example: `df.filter(pl.col("name").fuzzy.is_match("jonh"))`

    2. **DataFrame Functions** - Filtering rows, listing matches
       Example: `filter_dataframe(df, search_filter)`

Examples:
    >>> import polars as pl
    >>> import fuzzyfilter.polars as ffp  # or: from fuzzyfilter import polars as ffp

    >>> df = pl.DataFrame({"name": ["John", "Jon", "Jane"]})
    >>> df.with_columns(dist=pl.col("name").fuzzy.distance("John"))
    >>> ffp.match_series("jon", df["name"], max_distance=1)
"""

# Expression namespace is registered on import
import fuzzyfilter.expr as _expr  # noqa: F401

from fuzzyfilter.polars_ext import (
    filter_dataframe,
    match_series,
    substring_matches,
)

__all__ = [
    "filter_dataframe",
    "match_series",
    "substring_matches",
]
