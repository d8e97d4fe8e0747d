"""Unit tests for facet term counting."""

from __future__ import annotations

import pytest

from term_facets.search.match_spy import ArrayCountMatchSpy, ValueCountMatchSpy
from term_facets.search.models import MatchValue, Term
from term_facets.search.payloads import encode_terms


class ListSource:
    """Value source replaying a fixed ranking order."""

    def __init__(self, items: list[MatchValue]) -> None:
        self.items = items
        self.requested_top: list[int] = []

    def values(self):
        return iter(self.items)

    def top_values(self, max_values: int):
        self.requested_top.append(max_values)
        return iter(self.items[:max_values])


@pytest.fixture
def ranked_source() -> ListSource:
    return ListSource(
        [
            MatchValue(encode_terms(["cat", "dog"]), 3),
            MatchValue(encode_terms(["dog"]), 5),
            MatchValue(encode_terms(["cat", "bird"]), 2),
        ]
    )


class TestArrayCountMatchSpy:
    """First appearance seeds from the value's count, later ones add one."""

    def test_values_seed_then_increment(self, ranked_source):
        terms = ArrayCountMatchSpy(ranked_source).values()

        assert terms == [Term("cat", 4), Term("dog", 4), Term("bird", 2)]

    def test_values_keep_discovery_order_not_frequency(self):
        source = ListSource(
            [
                MatchValue(encode_terms(["rare"]), 1),
                MatchValue(encode_terms(["common"]), 50),
            ]
        )

        terms = ArrayCountMatchSpy(source).values()

        assert [term.term for term in terms] == ["rare", "common"]
        assert [term.termfreq for term in terms] == [1, 50]

    def test_repeated_term_within_one_payload_increments(self):
        source = ListSource([MatchValue(encode_terms(["cat", "cat"]), 7)])

        assert ArrayCountMatchSpy(source).values() == [Term("cat", 8)]

    def test_no_documents(self):
        assert ArrayCountMatchSpy(ListSource([])).values() == []

    def test_empty_payloads_yield_nothing(self):
        source = ListSource(
            [
                MatchValue("", 4),
                MatchValue(encode_terms([]), 2),
                MatchValue("~", 1),
                MatchValue("key: value", 3),
                MatchValue("[unclosed", 9),
            ]
        )

        assert ArrayCountMatchSpy(source).values() == []

    def test_malformed_payload_does_not_hide_later_terms(self):
        source = ListSource([MatchValue("[unclosed", 9), MatchValue(encode_terms(["fox"]), 2)])

        assert ArrayCountMatchSpy(source).values() == [Term("fox", 2)]

    def test_nested_items_are_not_counted(self):
        source = ListSource([MatchValue("- a\n- [b, c]\n- d\n", 3), MatchValue("[a, yes]", 1)])

        assert ArrayCountMatchSpy(source).values() == [Term("a", 4), Term("d", 3), Term("true", 1)]

    def test_top_values_only_scans_requested_prefix(self, ranked_source):
        terms = ArrayCountMatchSpy(ranked_source).top_values(2)

        assert ranked_source.requested_top == [2]
        assert terms == [Term("cat", 3), Term("dog", 4)]

    def test_terms_have_zero_wdf(self, ranked_source):
        assert all(term.wdf == 0 for term in ArrayCountMatchSpy(ranked_source).values())


class TestValueCountMatchSpy:
    """In-memory spy counts documents per distinct payload."""

    def test_counts_documents_per_payload(self):
        spy = ValueCountMatchSpy()
        for payload in ["b", "a", "b", "c", "b", "a"]:
            spy(payload)

        assert spy.document_count == 6
        assert list(spy.values()) == [MatchValue("a", 2), MatchValue("b", 3), MatchValue("c", 1)]

    def test_top_values_ranked_by_frequency_then_payload(self):
        spy = ValueCountMatchSpy(["z", "y", "y", "x", "x", "w"])

        assert list(spy.top_values(3)) == [MatchValue("x", 2), MatchValue("y", 2), MatchValue("w", 1)]

    @pytest.mark.parametrize("max_values", [0, -1])
    def test_top_values_non_positive_bound(self, max_values):
        spy = ValueCountMatchSpy(["a"])

        assert list(spy.top_values(max_values)) == []

    def test_feeds_array_count_spy(self):
        documents = [["red", "blue"], ["red", "blue"], ["green"], ["red"]]
        spy = ValueCountMatchSpy(encode_terms(doc) for doc in documents)

        terms = {term.term: term.termfreq for term in ArrayCountMatchSpy(spy).values()}

        # "- green" sorts first, then "- red" then "- red\n- blue"
        assert terms == {"green": 1, "red": 2, "blue": 2}

    def test_top_values_feed_array_count_spy(self):
        spy = ValueCountMatchSpy(
            [encode_terms(["a"]), encode_terms(["a"]), encode_terms(["a", "b"]), encode_terms(["c"])]
        )

        terms = ArrayCountMatchSpy(spy).top_values(1)

        assert terms == [Term("a", 2)]
