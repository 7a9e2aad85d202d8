# backend/nlp/synonym_index.py

import json
import logging
import os
import re
from functools import lru_cache
from typing import Dict, FrozenSet, Iterator, List, Mapping, Set

from backend.config import SYNONYMS_FILE

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_term(term: str) -> str:
    """Lowercase and strip everything outside [a-z0-9]."""
    return _NON_ALNUM.sub("", term.lower())


class SynonymIndex:
    """
    Bidirectional, one-hop synonym lookup over normalized terms.

    Every declared (canonical, synonym) pair is stored in both directions.
    Synonyms declared under the same canonical term are *not* linked to
    each other; they only reach the canonical term.

      "nsclc" -> {"nonsmallcelllungcancer", "nonsmallcelllungcarcinoma", ...}
      "nonsmallcelllungcancer" -> {"nsclc"}
    """

    def __init__(self, related: Mapping[str, FrozenSet[str]]) -> None:
        self._related: Dict[str, FrozenSet[str]] = dict(related)

    @classmethod
    def build(cls, table: Mapping[str, List[str]]) -> "SynonymIndex":
        related: Dict[str, Set[str]] = {}

        for key, values in table.items():
            normalized_key = normalize_term(key)
            related.setdefault(normalized_key, set())

            for value in values:
                normalized_value = normalize_term(value)
                related[normalized_key].add(normalized_value)
                related.setdefault(normalized_value, set()).add(normalized_key)

        return cls({term: frozenset(terms) for term, terms in related.items()})

    def related(self, term: str) -> FrozenSet[str]:
        """Terms directly related to an already-normalized term."""
        return self._related.get(term, frozenset())

    def __contains__(self, term: object) -> bool:
        return term in self._related

    def __iter__(self) -> Iterator[str]:
        return iter(self._related)

    def __len__(self) -> int:
        return len(self._related)

    def as_dict(self) -> Dict[str, List[str]]:
        return {term: sorted(terms) for term, terms in self._related.items()}


def load_synonym_table(synonym_file: str = SYNONYMS_FILE) -> Dict[str, List[str]]:
    current_dir = os.path.dirname(os.path.abspath(__file__))
    file_path = os.path.join(current_dir, synonym_file)

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.error("Could not find synonym table at %s", file_path)
        return {}


@lru_cache(maxsize=1)
def get_synonym_index() -> SynonymIndex:
    """Process-wide SynonymIndex built from the static synonym table."""
    index = SynonymIndex.build(load_synonym_table())
    logger.info("Synonym index built with %d terms", len(index))
    return index
