"""Tests for the filter -> sort -> paginate pipeline."""

import math

import pytest

from backend.search.models import InvalidArgument, SearchRequest, SortDirection, SortKey
from backend.search.pipeline import filter_trials, paginate, run_search, sort_trials
from backend.search.matcher import TrialMatcher


@pytest.fixture
def catalogue(make_trial):
    sponsors = ["Pfizer", "merck", "AstraZeneca", "Novartis"]
    conditions = ["Lung Cancer", "Diabetes", "Asthma"]
    return [
        make_trial(
            id=f"NCT{i:08d}",
            title=f"Study {i:02d}",
            sponsor=sponsors[i % len(sponsors)],
            conditions=[conditions[i % len(conditions)]],
            start_date=f"20{10 + i % 10}-01-01",
        )
        for i in range(23)
    ]


def _ids(trials):
    return [t.id for t in trials]


def test_exact_substring_scenario(trials, synonym_index):
    response = run_search(trials, SearchRequest(filters=["immunotherapy"]), synonym_index)
    assert response.total == 1
    assert _ids(response.results) == ["NCT00000001"]


def test_synonym_expansion_scenario(trials, synonym_index):
    request = SearchRequest(filters=["non small cell lung cancer"], synonym_expansion=True)
    response = run_search(trials, request, synonym_index)
    assert _ids(response.results) == ["NCT00000001"]


def test_invalid_sort_key_rejected(trials, synonym_index):
    with pytest.raises(InvalidArgument, match="bogus"):
        run_search(trials, SearchRequest(sort_by="bogus"), synonym_index)


@pytest.mark.parametrize(
    "sort_dir, expected",
    [
        ("asc", ["NCT00000002", "NCT00000001"]),
        ("ASC", ["NCT00000002", "NCT00000001"]),
        (None, ["NCT00000002", "NCT00000001"]),
        ("DESC", ["NCT00000001", "NCT00000002"]),
        ("sideways", ["NCT00000001", "NCT00000002"]),
    ],
)
def test_sort_direction_is_permissive(trials, synonym_index, sort_dir, expected):
    response = run_search(trials, SearchRequest(sort_by="title", sort_dir=sort_dir), synonym_index)
    assert _ids(response.results) == expected


def test_unparseable_filter_date_returns_empty_result(trials, synonym_index):
    response = run_search(trials, SearchRequest(start_date_filter="2021/13/45"), synonym_index)
    assert response.total == 0
    assert response.results == []


def test_page_below_one_rejected(trials, synonym_index):
    with pytest.raises(InvalidArgument):
        run_search(trials, SearchRequest(page=0), synonym_index)


def test_out_of_range_page_is_empty(make_trial, synonym_index):
    five = [make_trial(id=f"T{i}") for i in range(5)]
    response = run_search(five, SearchRequest(page=3), synonym_index, page_size=10)
    assert response.total == 5
    assert response.results == []
    assert response.page == 3
    assert response.size == 10


def test_pagination_reproduces_full_sequence(catalogue, synonym_index):
    request = SearchRequest(sort_by="sponsor")
    page_size = 10
    full = run_search(catalogue, request, synonym_index, page_size=len(catalogue))
    pages = []
    for page in range(1, math.ceil(full.total / page_size) + 1):
        request = SearchRequest(sort_by="sponsor", page=page)
        pages.extend(run_search(catalogue, request, synonym_index, page_size=page_size).results)

    assert _ids(pages) == _ids(full.results)
    assert len(set(_ids(pages))) == full.total == len(catalogue)


def test_sort_is_case_insensitive(catalogue):
    ordered = sort_trials(catalogue, SortKey.SPONSOR)
    sponsors = [t.sponsor for t in ordered]
    assert sponsors == sorted(sponsors, key=str.lower)
    assert sponsors[0] == "AstraZeneca"


@pytest.mark.parametrize("direction", [SortDirection.ASC, SortDirection.DESC])
def test_sort_keeps_tie_order(catalogue, direction):
    ordered = sort_trials(catalogue, SortKey.SPONSOR, direction)
    for sponsor in {t.sponsor for t in catalogue}:
        before = [t.id for t in catalogue if t.sponsor == sponsor]
        after = [t.id for t in ordered if t.sponsor == sponsor]
        assert after == before


def test_descending_reverses_distinct_keys(catalogue):
    asc = [t.title for t in sort_trials(catalogue, SortKey.TITLE, SortDirection.ASC)]
    desc = [t.title for t in sort_trials(catalogue, SortKey.TITLE, SortDirection.DESC)]
    assert desc == list(reversed(asc))


def test_missing_sort_values_sort_first_ascending(make_trial):
    trials = [make_trial(id="A", end_date="2020-01-01"), make_trial(id="B", end_date=None)]
    assert _ids(sort_trials(trials, SortKey.END_DATE)) == ["B", "A"]


def test_start_date_sort(catalogue, synonym_index):
    response = run_search(catalogue, SearchRequest(sort_by="startDate"), synonym_index, page_size=50)
    dates = [t.start_date for t in response.results]
    assert dates == sorted(dates)


@pytest.mark.parametrize("extra", ["lung", "pfizer", "nothing-matches-this"])
def test_match_all_never_grows_with_more_phrases(catalogue, synonym_index, extra):
    base = SearchRequest(filters=["study"], match_all=True)
    more = SearchRequest(filters=["study", extra], match_all=True)
    assert run_search(catalogue, more, synonym_index).total <= run_search(catalogue, base, synonym_index).total


@pytest.mark.parametrize("extra", ["lung", "pfizer", "nothing-matches-this"])
def test_match_any_never_shrinks_with_more_phrases(catalogue, synonym_index, extra):
    base = SearchRequest(filters=["diabetes"], match_all=False)
    more = SearchRequest(filters=["diabetes", extra], match_all=False)
    assert run_search(catalogue, more, synonym_index).total >= run_search(catalogue, base, synonym_index).total


def test_failing_trial_does_not_abort_scan(make_trial, synonym_index):
    class BrokenTrial:
        id = "BROKEN"

        @property
        def title(self):
            raise RuntimeError("corrupt record")

    trials = [make_trial(id="A", title="Trial one"), BrokenTrial(), make_trial(id="B", title="Trial two")]
    matcher = TrialMatcher(SearchRequest(filters=["trial"]), synonym_index)
    assert _ids(filter_trials(trials, matcher)) == ["A", "B"]


def test_paginate_slices():
    items = list(range(25))
    assert paginate(items, 1, 10) == list(range(10))
    assert paginate(items, 3, 10) == [20, 21, 22, 23, 24]
    assert paginate(items, 4, 10) == []


def test_uses_shared_index_when_none_given(trials):
    response = run_search(trials, SearchRequest(filters=["nsclc"], synonym_expansion=True))
    assert response.total == 1
