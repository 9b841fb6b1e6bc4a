"""Tests for FuzzySearchFilter.

Tests cover:
- Basic matching, case sensitivity and the empty query
- The query property and change notifications
- Each FuzzyMatchStrategy
- min_similarity as an alternative acceptance rule
- Items with several (or missing) searchable values
- Remote and combined sources
"""

from dataclasses import dataclass
from typing import Optional

import pytest

import fuzzyfilter as ff
import fuzzyfilter.filter as filter_module
from fuzzyfilter import FuzzyMatchStrategy, FuzzySearchFilter, TransformSource


@dataclass
class Person:
    name: str
    email: str
    nickname: Optional[str] = None


def string_filter(**kwargs) -> FuzzySearchFilter:
    return FuzzySearchFilter(lambda s: [s], **kwargs)


class TestBasicFunctionality:
    """Exact, typo and case handling with the default contains strategy."""

    def test_matches_exact_strings(self):
        search = string_filter()
        search.query = "hello"
        assert search.apply("hello") is True
        assert search.apply("world") is False

    def test_matches_with_typos_within_max_distance(self):
        search = string_filter()
        search.query = "hello"
        assert search.apply("helo"), "1 typo"
        assert search.apply("hllo"), "1 typo"
        assert search.apply("heo"), "2 typos"
        assert not search.apply("xyz"), "too different"

    def test_empty_query_matches_everything(self):
        search = string_filter()
        search.query = ""
        assert search.apply("anything")
        assert search.apply("")

    def test_case_insensitive_by_default(self):
        search = string_filter()
        search.query = "hello"
        assert search.apply("HELLO")
        assert search.apply("HeLLo")

    def test_case_sensitive(self):
        search = string_filter(case_sensitive=True)
        search.query = "hello"
        assert search.apply("hello")
        assert not search.apply("HELLO")

    def test_max_distance_zero_requires_exact_occurrence(self):
        search = string_filter(max_distance=0, query="laptpo")
        assert not search.apply("laptop")
        assert search.apply("my laptpo bag")

    def test_callable(self):
        search = string_filter(query="hello")
        assert search("hello world")
        assert not search("goodbye")

    def test_filter_keeps_order(self):
        search = string_filter(query="jon", max_distance=1)
        names = ["Jonathan", "Alice", "John", "Jon", "Bob"]
        assert search.filter(names) == ["Jonathan", "John", "Jon"]

    def test_filter_with_empty_query_returns_everything(self):
        search = string_filter()
        assert search.filter(["a", "b", "c"]) == ["a", "b", "c"]


class TestQueryProperty:
    """Tests for reading and assigning the query."""

    def test_initial_query(self):
        assert string_filter(query="test").query == "test"

    def test_default_query_is_empty(self):
        assert string_filter().query == ""

    def test_set_updates_query(self):
        search = string_filter()
        search.query = "hello"
        assert search.query == "hello"
        search.query = "world"
        assert search.query == "world"

    def test_set_empty_clears_query(self):
        search = string_filter(query="hello")
        search.query = ""
        assert search.query == ""

    def test_set_none_clears_query(self):
        search = string_filter(query="hello")
        search.query = None
        assert search.query == ""

    def test_clear(self):
        search = string_filter(query="hello")
        search.clear()
        assert search.query == ""
        assert search.apply("anything")


class TestNotifications:
    """Tests for on_changed callbacks."""

    def test_notifies_on_every_assignment(self):
        calls = []
        search = string_filter(on_changed=calls.append)

        search.query = "test"
        assert calls == [search]

        search.query = "another"
        assert len(calls) == 2

    def test_same_value_still_notifies(self):
        calls = []
        search = string_filter(on_changed=calls.append)
        search.query = "same"
        search.query = "same"
        assert len(calls) == 2

    def test_initial_query_does_not_notify(self):
        calls = []
        string_filter(query="initial", on_changed=calls.append)
        assert calls == []

    def test_clear_notifies(self):
        calls = []
        search = string_filter(query="x", on_changed=calls.append)
        search.clear()
        assert len(calls) == 1

    def test_callback_sees_new_query(self):
        seen = []
        search = string_filter(on_changed=lambda f: seen.append(f.query))
        search.query = "first"
        search.query = "second"
        assert seen == ["first", "second"]


class TestContainsStrategy:
    """Tests for FuzzyMatchStrategy.CONTAINS."""

    def test_is_default(self):
        assert string_filter().strategy is FuzzyMatchStrategy.CONTAINS

    def test_matches_substring_exactly(self):
        search = string_filter(query="test")
        assert search.apply("this is a test")
        assert search.apply("testing")

    def test_fuzzy_matches_words(self):
        search = string_filter(query="tset")
        assert search.apply("test")

    def test_fuzzy_matches_prefix(self):
        search = string_filter(query="helo")
        assert search.apply("hello world")

    def test_exact_substring_across_words(self):
        search = string_filter(query="lo wo")
        assert search.apply("hello world")

    def test_special_characters(self):
        search = string_filter(query="hello-world")
        assert search.apply("hello-world")
        assert search.apply("hello world")

    def test_unicode(self):
        search = string_filter(query="café")
        assert search.apply("café")
        assert search.apply("Café au lait")


class TestStartsWithStrategy:
    """Tests for FuzzyMatchStrategy.STARTS_WITH."""

    @pytest.fixture
    def search(self):
        return string_filter(strategy=FuzzyMatchStrategy.STARTS_WITH, max_distance=1)

    def test_matches_exact_prefix(self, search):
        search.query = "hello"
        assert search.apply("hello world")
        assert not search.apply("world hello")

    def test_fuzzy_matches_prefix(self, search):
        search.query = "helo"
        assert search.apply("hello world")

    def test_does_not_match_suffix(self, search):
        search.query = "world"
        assert not search.apply("hello world")

    def test_value_shorter_than_query_within_tolerance(self):
        search = string_filter(strategy="starts_with", query="hello")
        # "hel" is 2 edits short of "hello"
        assert search.apply("hel")

    def test_value_shorter_than_query_too_many_edits(self):
        search = string_filter(strategy="starts_with", max_distance=1, query="hello")
        assert not search.apply("he")

    def test_accepts_camel_case_name(self):
        search = string_filter(strategy="startsWith")
        assert search.strategy is FuzzyMatchStrategy.STARTS_WITH


class TestWholeWordStrategy:
    """Tests for FuzzyMatchStrategy.WHOLE_WORD."""

    @pytest.fixture
    def search(self):
        return string_filter(strategy=FuzzyMatchStrategy.WHOLE_WORD)

    def test_requires_all_query_words(self, search):
        search.query = "john smith"
        assert search.apply("john smith")
        assert not search.apply("john"), "missing smith"
        assert not search.apply("smith"), "missing john"

    def test_fuzzy_matches_individual_words(self, search):
        search.query = "jonh smth"
        assert search.apply("john smith")

    def test_order_does_not_matter(self, search):
        search.query = "smith john"
        assert search.apply("john smith")

    def test_strict_rejects_large_differences(self):
        search = string_filter(strategy="whole_word", max_distance=1, query="xyz")
        assert not search.apply("john")

    def test_value_without_words(self, search):
        search.query = "test"
        assert not search.apply("---")

    def test_query_and_value_without_words(self, search):
        search.query = "!!"
        assert search.apply("--")
        assert not search.apply("word")

    def test_underscore_separates_words(self, search):
        search.query = "first name"
        assert search.apply("first_name")


class TestAnywhereStrategy:
    """Tests for FuzzyMatchStrategy.ANYWHERE."""

    @pytest.fixture
    def search(self):
        return string_filter(strategy=FuzzyMatchStrategy.ANYWHERE)

    def test_any_query_word_matches_any_value_word(self, search):
        search.query = "john xyz"
        assert search.apply("john smith")
        assert not search.apply("abc def")

    def test_fuzzy_matches_words(self, search):
        search.query = "jonh"
        assert search.apply("john smith")

    def test_strict_rejects_too_many_typos(self):
        search = string_filter(strategy="anywhere", max_distance=1, query="xyz")
        assert not search.apply("john smith")

    def test_value_without_words(self, search):
        search.query = "test"
        assert not search.apply("   ")

    def test_exact_substring_inside_word(self):
        search = string_filter(strategy="anywhere", max_distance=0, query="ohn")
        assert search.apply("john")
        assert search.apply("Johnny Cash")

    def test_exact_substring_across_words(self):
        search = string_filter(strategy="anywhere", max_distance=0, query="n s")
        assert search.apply("john smith")

    def test_query_without_words_matches(self, search):
        search.query = "!!"
        assert search.apply("word")
        assert search.apply("--")

    def test_short_query_word_within_budget(self, search):
        # "llo" is 2 deletions away from "hello"
        search.query = "llo"
        assert search.apply("hello")


class TestMinSimilarity:
    """Tests for the similarity acceptance rule."""

    def test_rescues_distance_failure(self):
        search = string_filter(max_distance=0, min_similarity=0.7)
        search.query = "hello"
        assert search.apply("hello")
        # 1 edit / 5 chars = 0.8
        assert search.apply("helo")
        assert not search.apply("xyz")

    def test_longer_strings(self):
        search = string_filter(max_distance=1, min_similarity=0.8, query="programming")
        assert search.apply("programing")

    def test_threshold_not_reached(self):
        search = string_filter(max_distance=0, min_similarity=0.9, query="hello")
        assert not search.apply("helo")

    def test_ignores_length_gap_shortcut(self):
        # Length gap 2 exceeds max_distance, similarity 2/4 = 0.5 passes
        search = string_filter(
            strategy="whole_word", max_distance=1, min_similarity=0.5, query="ab"
        )
        assert search.apply("abcd")

    def test_length_gap_rejects_without_similarity(self):
        search = string_filter(strategy="whole_word", max_distance=1, query="ab")
        assert not search.apply("abcd")

    def test_empty_query_still_matches_everything(self):
        search = string_filter(max_distance=0, min_similarity=0.5)
        search.query = ""
        assert search.apply("test")

    def test_exposed(self):
        assert string_filter(min_similarity=0.75).min_similarity == 0.75
        assert string_filter().min_similarity is None


class TestMultipleValues:
    """Items with several searchable values."""

    def test_matches_if_any_value_matches(self):
        search = FuzzySearchFilter(lambda p: [p.name, p.email], max_distance=1)
        search.query = "john"
        assert search.apply(Person("john", "test@test.com"))
        assert search.apply(Person("jane", "john@test.com"))
        assert not search.apply(Person("alice", "alice@test.com"))

    def test_fuzzy_matches_across_values(self):
        search = FuzzySearchFilter(lambda p: [p.name, p.email])
        search.query = "jonh"
        assert search.apply(Person("john", "test@test.com"))

    def test_none_values_are_skipped(self):
        search = FuzzySearchFilter(lambda p: [p.name, p.nickname], query="john")
        assert search.apply(Person("john", "test@test.com"))

    def test_all_none_values_never_match(self):
        search = FuzzySearchFilter(lambda p: [None, None], query="test")
        assert not search.apply(Person("test", "test@test.com"))

    def test_empty_value_does_not_match(self):
        search = string_filter(query="hello")
        assert not search.apply("")

    def test_generator_retriever(self):
        search = FuzzySearchFilter(lambda d: (v for v in d.values()), query="paris")
        assert search.apply({"city": "Paris", "country": "France"})
        assert not search.apply({"city": "Berlin", "country": "Germany"})


class TestTestMethod:
    """Tests for evaluating an explicit query."""

    def test_ignores_current_query(self):
        search = string_filter(query="zzz")
        assert search.test("hello", "helo")
        assert not search.test("hello", "xyz")

    def test_empty_query(self):
        assert string_filter().test("anything", "")

    def test_ignores_source(self):
        search = string_filter(source="remote")
        assert not search.test("hello", "xyz")


class TestRemoteFilter:
    """Tests for remote-only filters."""

    def test_always_applies(self):
        search = FuzzySearchFilter.remote(query="test")
        assert search.apply("anything")
        assert search.apply("not matching")

    def test_stores_query_for_api_use(self):
        search = FuzzySearchFilter.remote(query="search term")
        assert search.query == "search term"
        assert search.source is TransformSource.REMOTE
        assert search.is_remote
        assert not search.is_local

    def test_accepts_all_factory_parameters(self):
        calls = []
        search = FuzzySearchFilter.remote(
            id="remote_search",
            query="test query",
            label="Remote Search",
            max_distance=3,
            on_changed=calls.append,
        )
        assert search.id == "remote_search"
        assert search.query == "test query"
        assert search.label == "Remote Search"
        assert search.max_distance == 3

        search.query = "new query"
        assert calls == [search]

    def test_no_query(self):
        search = FuzzySearchFilter.remote()
        assert search.query == ""
        assert search.apply("anything")

    def test_test_uses_empty_values(self):
        search = FuzzySearchFilter.remote(query="test")
        assert search.test("any item", "test") is False

    def test_combined_source_filters_locally(self):
        search = string_filter(source=TransformSource.COMBINED, query="hello")
        assert search.is_local and search.is_remote
        assert search.apply("hello")
        assert not search.apply("xyz")


class TestConfiguration:
    """Tests for constructor defaults and exposed attributes."""

    def test_defaults(self):
        search = string_filter()
        assert search.id == ff.DEFAULT_FILTER_ID == "fuzzy_search"
        assert search.label is None
        assert search.max_distance == ff.DEFAULT_MAX_DISTANCE == 2
        assert search.case_sensitive is False
        assert search.source is TransformSource.LOCAL
        assert search.algorithm == "levenshtein"
        assert search.is_local and not search.is_remote

    def test_values_retriever_exposed(self):
        def retriever(item):
            return [item]

        assert FuzzySearchFilter(retriever).values_retriever is retriever

    def test_damerau_algorithm(self):
        search = string_filter(
            strategy="whole_word", max_distance=1, algorithm="damerau", query="teh"
        )
        assert search.algorithm == "damerau_levenshtein"
        assert search.apply("the")

        levenshtein_search = string_filter(strategy="whole_word", max_distance=1, query="teh")
        assert not levenshtein_search.apply("the")

    def test_metric_resolved_once(self, monkeypatch):
        calls = []
        original = filter_module.get_metric

        def counting_get_metric(algorithm):
            calls.append(algorithm)
            return original(algorithm)

        monkeypatch.setattr(filter_module, "get_metric", counting_get_metric)
        search = string_filter(strategy="whole_word", query="jon smith")
        for value in ["John Smith", "Jane Doe", "Jon Smyth", "Alice"]:
            search.apply(value)

        assert calls == ["levenshtein"]

    def test_configuration_is_read_only(self):
        search = string_filter()
        with pytest.raises(AttributeError):
            search.max_distance = 5


class TestRepr:
    """Tests for the string representation."""

    def test_repr(self):
        search = FuzzySearchFilter(lambda s: [s], id="search", query="test")
        assert repr(search) == "FuzzySearchFilter(id='search', query='test', max_distance=2)"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
