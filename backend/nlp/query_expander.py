# backend/nlp/query_expander.py

from typing import Set

from backend.nlp.synonym_index import SynonymIndex, normalize_term


def expand(phrase: str, index: SynonymIndex) -> Set[str]:
    """
    Normalized phrase plus every term the index relates it to.
    Unknown phrases come back as a single normalized term; a phrase that
    normalizes to "" (punctuation only) expands to nothing, since the empty
    string would match every haystack.
    """
    normalized = normalize_term(phrase)
    if not normalized:
        return set()
    return {normalized} | set(index.related(normalized))


def phrase_variants(phrase: str, index: SynonymIndex) -> Set[str]:
    """
    Candidate substrings for the full-text matcher.

    Normalization drops spaces and punctuation, so the raw lowercased phrase
    is kept alongside the expansion for haystacks that still contain them.
    """
    variants = expand(phrase, index)
    variants.add(phrase.lower())
    return variants
