# backend/nlp/__init__.py

from .query_expander import expand, phrase_variants
from .synonym_index import SynonymIndex, get_synonym_index, normalize_term
