"""FuzzySearchFilter: a typo-tolerant search predicate over arbitrary items.

The filter pulls one or more strings out of each item with a user-supplied
``values_retriever`` and tests them against the current query using one of
the :class:`~fuzzyfilter.enums.FuzzyMatchStrategy` rules.

Example:
    >>> users = [{"name": "John", "email": "john@example.com"},
    ...          {"name": "Alice", "email": "alice@example.com"}]
    >>> search = FuzzySearchFilter(lambda u: [u["name"], u["email"]], max_distance=1)
    >>> search.query = "jonh"
    >>> [u["name"] for u in search.filter(users)]
    ['John']
    >>> search.query = "bob"
    >>> [u["name"] for u in search.filter(users)]
    []

Warning:
    ``apply`` may be called from several threads at once, but ``query``
    must not be reassigned while calls are in flight.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, TypeVar, Union

from fuzzyfilter._utils import (
    fold_case,
    normalize_algorithm,
    normalize_source,
    normalize_strategy,
    split_words,
    validate_max_distance,
    validate_min_similarity,
)
from fuzzyfilter.distance import DistanceMetric, get_metric, ratio
from fuzzyfilter.enums import Algorithm, FuzzyMatchStrategy, TransformSource
from fuzzyfilter.matching import DEFAULT_MAX_DISTANCE
from fuzzyfilter.substring import find_best_substring_match

__all__ = ["DEFAULT_FILTER_ID", "FuzzySearchFilter", "ValuesRetriever"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

ValuesRetriever = Callable[[T], Iterable[Optional[str]]]

DEFAULT_FILTER_ID = "fuzzy_search"


@dataclass(frozen=True)
class _Tolerance:
    """Edit budget shared by every strategy."""

    max_distance: int
    min_similarity: Optional[float]
    algorithm: str
    metric: DistanceMetric

    @classmethod
    def build(
        cls,
        max_distance: int,
        min_similarity: Optional[float],
        algorithm: Union[str, Algorithm],
    ) -> "_Tolerance":
        """Validate the budget and resolve the metric once."""
        name = normalize_algorithm(algorithm)
        return cls(
            max_distance=validate_max_distance(max_distance),
            min_similarity=validate_min_similarity(min_similarity),
            algorithm=name,
            metric=get_metric(name),
        )

    def accepts(self, a: str, b: str) -> bool:
        """Whether ``a`` and ``b`` are close enough under distance or similarity."""
        # The length gap is a lower bound on the distance, but similarity
        # can still pass when it is configured.
        if self.min_similarity is None and abs(len(a) - len(b)) > self.max_distance:
            return False

        distance = self.metric(a, b)
        if distance <= self.max_distance:
            return True
        if self.min_similarity is not None:
            return ratio(distance, a, b) >= self.min_similarity
        return False


def _contains(value: str, query: str, tolerance: _Tolerance) -> bool:
    match = find_best_substring_match(
        value,
        query,
        max_distance=tolerance.max_distance,
        case_sensitive=True,
        algorithm=tolerance.algorithm,
    )
    if match is not None:
        return True
    if tolerance.min_similarity is None:
        return False
    return ratio(tolerance.metric(value, query), value, query) >= tolerance.min_similarity


def _starts_with(value: str, query: str, tolerance: _Tolerance) -> bool:
    if value.startswith(query):
        return True
    if len(value) < len(query):
        # Missing suffix counts towards the edit budget
        return tolerance.accepts(value, query)

    # One character of slack either way for an insert/delete at the boundary
    for length in (len(query) - 1, len(query), len(query) + 1):
        if 0 < length <= len(value) and tolerance.accepts(value[:length], query):
            return True
    return False


def _word_lists(value: str, query: str) -> tuple[list[str], list[str]]:
    return split_words(value), split_words(query)


def _whole_word(value: str, query: str, tolerance: _Tolerance) -> bool:
    value_words, query_words = _word_lists(value, query)
    if not query_words or not value_words:
        return not query_words and not value_words

    return all(
        any(tolerance.accepts(value_word, query_word) for value_word in value_words)
        for query_word in query_words
    )


def _anywhere(value: str, query: str, tolerance: _Tolerance) -> bool:
    if query in value:
        return True

    value_words, query_words = _word_lists(value, query)
    # A query of separators only has no word to reject
    if not query_words:
        return True
    if not value_words:
        return False

    return any(
        tolerance.accepts(value_word, query_word)
        for query_word in query_words
        for value_word in value_words
    )


_STRATEGIES: dict[FuzzyMatchStrategy, Callable[[str, str, _Tolerance], bool]] = {
    FuzzyMatchStrategy.CONTAINS: _contains,
    FuzzyMatchStrategy.STARTS_WITH: _starts_with,
    FuzzyMatchStrategy.WHOLE_WORD: _whole_word,
    FuzzyMatchStrategy.ANYWHERE: _anywhere,
}


def _no_values(item: object) -> list[Optional[str]]:
    return []


class FuzzySearchFilter(Generic[T]):
    """
    A search filter with typo tolerance based on edit distance.

    Unlike an exact substring filter, items pass when any of their
    searchable strings is "close enough" to the query.

    Configuration is fixed at construction; only :attr:`query` can change,
    and every assignment to it calls ``on_changed`` with the filter.

    Example:
        >>> products = FuzzySearchFilter(lambda p: [p], query="laptpo")
        >>> products.apply("laptop")
        True
        >>> strict = FuzzySearchFilter(lambda p: [p], max_distance=0, query="laptpo")
        >>> strict.apply("laptop")
        False
    """

    def __init__(
        self,
        values_retriever: ValuesRetriever,
        *,
        id: str = DEFAULT_FILTER_ID,
        label: Optional[str] = None,
        query: Optional[str] = None,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        min_similarity: Optional[float] = None,
        case_sensitive: bool = False,
        strategy: Union[str, FuzzyMatchStrategy] = FuzzyMatchStrategy.CONTAINS,
        source: Union[str, TransformSource] = TransformSource.LOCAL,
        algorithm: Union[str, Algorithm] = Algorithm.LEVENSHTEIN,
        on_changed: Optional[Callable[["FuzzySearchFilter[T]"], None]] = None,
    ):
        """
        Create a fuzzy search filter.

        Args:
            values_retriever: Extracts the searchable strings from an item.
                ``None`` entries are ignored.
            id: Identifier used by the host filter manager.
            label: Optional display name.
            query: Initial query (does not trigger ``on_changed``).
            max_distance: Maximum edit distance for a match (default: 2).
                0 means exact matches only.
            min_similarity: Optional similarity ratio (0.0 to 1.0) that
                accepts a match even when ``max_distance`` is exceeded.
            case_sensitive: Whether matching is case-sensitive (default: False).
            strategy: How the query is aligned against values (default: contains).
            source: Where filtering happens (default: local).
            algorithm: Edit distance to use (default: Levenshtein).
            on_changed: Called with this filter after every query assignment.

        Raises:
            ValidationError: If max_distance is negative, min_similarity is
                outside [0.0, 1.0], or strategy/source names are unknown.
            AlgorithmError: If the algorithm name is unknown.
        """
        self._id = id
        self._label = label
        self._values_retriever = values_retriever
        self._strategy = normalize_strategy(strategy)
        self._source = normalize_source(source)
        self._case_sensitive = case_sensitive
        self._tolerance = _Tolerance.build(max_distance, min_similarity, algorithm)
        self._on_changed = on_changed
        self._query = query or ""

        logger.debug("Created %r (strategy=%s, source=%s)", self, self._strategy.value, self._source.value)

    @classmethod
    def remote(
        cls,
        *,
        id: str = DEFAULT_FILTER_ID,
        query: Optional[str] = None,
        label: Optional[str] = None,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        on_changed: Optional[Callable[["FuzzySearchFilter[T]"], None]] = None,
    ) -> "FuzzySearchFilter[T]":
        """
        Create a remote-only fuzzy search filter.

        :meth:`apply` always returns True since matching happens
        server-side; read :attr:`query` to build the API call.

        Example:
            >>> search = FuzzySearchFilter.remote(query="search term")
            >>> search.apply("anything"), search.query
            (True, 'search term')
        """
        return cls(
            _no_values,
            id=id,
            query=query,
            label=label,
            max_distance=max_distance,
            source=TransformSource.REMOTE,
            on_changed=on_changed,
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def label(self) -> Optional[str]:
        return self._label

    @property
    def values_retriever(self) -> ValuesRetriever:
        return self._values_retriever

    @property
    def max_distance(self) -> int:
        return self._tolerance.max_distance

    @property
    def min_similarity(self) -> Optional[float]:
        return self._tolerance.min_similarity

    @property
    def algorithm(self) -> str:
        return self._tolerance.algorithm

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    @property
    def strategy(self) -> FuzzyMatchStrategy:
        return self._strategy

    @property
    def source(self) -> TransformSource:
        return self._source

    @property
    def is_remote(self) -> bool:
        """True for remote and combined sources."""
        return self._source in (TransformSource.REMOTE, TransformSource.COMBINED)

    @property
    def is_local(self) -> bool:
        """True for local and combined sources."""
        return self._source in (TransformSource.LOCAL, TransformSource.COMBINED)

    @property
    def query(self) -> str:
        """The current search query ("" when cleared)."""
        return self._query

    @query.setter
    def query(self, value: Optional[str]) -> None:
        self._query = value or ""
        logger.debug("Filter %r query set to %r", self._id, self._query)
        if self._on_changed is not None:
            self._on_changed(self)

    def clear(self) -> None:
        """Reset the query to empty (notifies like any assignment)."""
        self.query = ""

    def test(self, item: T, query: str) -> bool:
        """
        Evaluate the matching strategy for an explicit query.

        Ignores :attr:`source`; used by :meth:`apply` and by hosts that
        manage query values themselves.

        Args:
            item: The item to test.
            query: Query to match against the item's values.

        Returns:
            True if the query is empty or any retrieved value matches.
        """
        if not query:
            return True

        query_norm = query if self._case_sensitive else fold_case(query)
        strategy_test = _STRATEGIES[self._strategy]

        values = [value for value in self._values_retriever(item) if value is not None]
        for value in values:
            if not value:
                continue
            value_norm = value if self._case_sensitive else fold_case(value)
            if strategy_test(value_norm, query_norm, self._tolerance):
                return True
        return False

    def apply(self, item: T) -> bool:
        """
        Return True if ``item`` passes this filter.

        Remote-only filters and empty queries let every item through.
        """
        if not self._query:
            return True
        if self._source == TransformSource.REMOTE:
            return True
        return self.test(item, self._query)

    __call__ = apply

    def filter(self, items: Iterable[T]) -> list[T]:
        """Return the items that pass :meth:`apply`, in input order."""
        return [item for item in items if self.apply(item)]

    def __repr__(self) -> str:
        return (
            f"FuzzySearchFilter(id={self._id!r}, query={self._query!r}, "
            f"max_distance={self.max_distance})"
        )
