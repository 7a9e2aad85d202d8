# backend/search/matcher.py

import logging
import operator
from datetime import date, datetime
from typing import Callable, List, Optional, Set

from backend.nlp.query_expander import phrase_variants
from backend.nlp.synonym_index import SynonymIndex
from backend.search.models import (
    ClinicalTrial,
    Comparison,
    InvalidArgument,
    SearchRequest,
)

logger = logging.getLogger(__name__)

Predicate = Callable[[ClinicalTrial], bool]

# ClinicalTrials.gov dates are full ISO dates or month/year precision;
# slashed dates come from hand-typed filters
_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y", "%Y/%m/%d")

_COMPARATORS = {
    Comparison.GTE: operator.ge,
    Comparison.LTE: operator.le,
}


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse '2021-05-01', '2021-05', '2021', '2021/05/01' or an ISO datetime into a date.
    Partial dates resolve to the first day of the period; anything else is None.
    """
    if not value:
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def build_haystack(trial: ClinicalTrial) -> str:
    return " ".join(
        [
            trial.title or "",
            " ".join(trial.conditions),
            " ".join(trial.interventions),
            trial.sponsor or "",
        ]
    ).lower()


class TrialMatcher:
    """
    Evaluates trials against one SearchRequest.

    Phrase candidates, filter dates and comparison operators are resolved
    once per request; every active filter becomes a Predicate and a trial
    matches when all of them pass.
    """

    def __init__(self, request: SearchRequest, synonym_index: SynonymIndex) -> None:
        self.request = request
        self.synonym_index = synonym_index
        self._phrase_candidates: List[Set[str]] = [
            self._candidates(phrase) for phrase in request.filters
        ]
        self.predicates: List[Predicate] = self._build_predicates()

    def _candidates(self, phrase: str) -> Set[str]:
        if self.request.synonym_expansion:
            return phrase_variants(phrase, self.synonym_index)
        return {phrase.lower()}

    def _build_predicates(self) -> List[Predicate]:
        req = self.request
        predicates: List[Predicate] = []

        if self._phrase_candidates:
            predicates.append(self._matches_full_text)

        if req.title_filter:
            needle = req.title_filter.lower()
            predicates.append(lambda t: needle in (t.title or "").lower())

        if req.sponsor_filter:
            sponsor_needle = req.sponsor_filter.lower()
            predicates.append(lambda t: sponsor_needle in (t.sponsor or "").lower())

        if req.status_filter:
            status = req.status_filter
            predicates.append(lambda t: t.status == status)

        if req.start_date_filter:
            predicates.append(
                _date_predicate(
                    lambda t: t.start_date,
                    req.start_date_filter,
                    req.start_comparison or Comparison.GTE.value,
                    "startDateFilter",
                )
            )

        if req.end_date_filter:
            predicates.append(
                _date_predicate(
                    lambda t: t.end_date,
                    req.end_date_filter,
                    req.end_comparison or Comparison.LTE.value,
                    "endDateFilter",
                )
            )

        return predicates

    def _matches_full_text(self, trial: ClinicalTrial) -> bool:
        haystack = build_haystack(trial)
        phrase_hits = (
            any(term in haystack for term in candidates)
            for candidates in self._phrase_candidates
        )
        if self.request.match_all:
            return all(phrase_hits)
        return any(phrase_hits)

    def matches(self, trial: ClinicalTrial) -> bool:
        return all(predicate(trial) for predicate in self.predicates)

    __call__ = matches


def _date_predicate(
    accessor: Callable[[ClinicalTrial], Optional[str]],
    filter_value: str,
    comparison: str,
    field_name: str,
) -> Predicate:
    try:
        compare = _COMPARATORS[Comparison(comparison)]
    except ValueError:
        raise InvalidArgument(f"Invalid comparison operator: {comparison}")

    bound = parse_date(filter_value)
    if bound is None:
        logger.warning("Unparseable %s %r; no trial can satisfy it", field_name, filter_value)
        return lambda trial: False

    def predicate(trial: ClinicalTrial) -> bool:
        actual = parse_date(accessor(trial))
        # Trials without the date never satisfy a date filter
        if actual is None:
            return False
        return compare(actual, bound)

    return predicate


def matches(
    trial: ClinicalTrial, request: SearchRequest, synonym_index: SynonymIndex
) -> bool:
    """One-off evaluation; build a TrialMatcher when scanning many trials."""
    return TrialMatcher(request, synonym_index).matches(trial)
