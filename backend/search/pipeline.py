# backend/search/pipeline.py
"""
Linear-scan search over the in-memory trial snapshot:
filter -> stable sort -> paginate.
"""

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from backend.config import SEARCH_PAGE_SIZE
from backend.nlp.synonym_index import SynonymIndex, get_synonym_index
from backend.search.matcher import TrialMatcher
from backend.search.models import (
    ClinicalTrial,
    InvalidArgument,
    SearchRequest,
    SearchResponse,
    SortDirection,
    SortKey,
)

logger = logging.getLogger(__name__)


SORT_ACCESSORS: Dict[SortKey, Callable[[ClinicalTrial], Optional[str]]] = {
    SortKey.START_DATE: lambda t: t.start_date,
    SortKey.END_DATE: lambda t: t.end_date,
    SortKey.TITLE: lambda t: t.title,
    SortKey.SPONSOR: lambda t: t.sponsor,
    SortKey.STATUS: lambda t: t.status,
}


def resolve_sort_key(value: str) -> SortKey:
    try:
        return SortKey(value)
    except ValueError:
        raise InvalidArgument(f"Invalid sortBy key: {value}")


def resolve_sort_direction(value: Optional[str]) -> SortDirection:
    """Missing means ascending; anything other than 'asc' sorts descending."""
    if value is None or value.lower() == SortDirection.ASC.value:
        return SortDirection.ASC
    return SortDirection.DESC


def filter_trials(trials: Sequence[ClinicalTrial], matcher: TrialMatcher) -> List[ClinicalTrial]:
    """
    Keep matching trials in their original order.

    A trial that blows up during evaluation is logged and dropped; it must
    not hide the rest of the snapshot.
    """
    kept: List[ClinicalTrial] = []
    for trial in trials:
        try:
            if matcher.matches(trial):
                kept.append(trial)
        except Exception:
            logger.exception("Matching failed for trial id=%s", getattr(trial, "id", None))
    return kept


def sort_trials(
    trials: Sequence[ClinicalTrial],
    sort_key: SortKey,
    sort_dir: SortDirection = SortDirection.ASC,
) -> List[ClinicalTrial]:
    # sorted() is stable for reverse=True too, so ties keep scan order either way
    accessor = SORT_ACCESSORS[sort_key]
    return sorted(
        trials,
        key=lambda t: (accessor(t) or "").lower(),
        reverse=sort_dir is SortDirection.DESC,
    )


def paginate(items: Sequence[ClinicalTrial], page: int, page_size: int) -> List[ClinicalTrial]:
    start_idx = (page - 1) * page_size
    return list(items[start_idx:start_idx + page_size])


def run_search(
    trials: Sequence[ClinicalTrial],
    request: SearchRequest,
    synonym_index: Optional[SynonymIndex] = None,
    page_size: int = SEARCH_PAGE_SIZE,
) -> SearchResponse:
    """
    Filter, sort and page the trial snapshot for one request.

    Raises InvalidArgument for an unknown sort key, an unknown date
    comparison or a page below 1. An unparseable filter date matches nothing.
    Pages past the end come back empty with the full total.
    """
    sort_key = resolve_sort_key(request.sort_by)
    sort_dir = resolve_sort_direction(request.sort_dir)
    if request.page < 1:
        raise InvalidArgument("page must be >= 1")

    if synonym_index is None:
        synonym_index = get_synonym_index()

    t_start = time.time()
    matcher = TrialMatcher(request, synonym_index)
    filtered = filter_trials(trials, matcher)
    ordered = sort_trials(filtered, sort_key, sort_dir)
    results = paginate(ordered, request.page, page_size)
    logger.info(
        f"Search took: {time.time() - t_start:.4f}s "
        f"({len(filtered)}/{len(trials)} trials matched)"
    )

    return SearchResponse(
        total=len(filtered),
        results=results,
        page=request.page,
        size=page_size,
    )
