"""Shared fixtures for the search core tests."""

import pytest

from backend.nlp.synonym_index import SynonymIndex, load_synonym_table
from backend.search.models import ClinicalTrial


def build_trial(**overrides) -> ClinicalTrial:
    fields = {
        "id": "NCT00000000",
        "title": "Untitled Study",
        "conditions": [],
        "interventions": [],
        "sponsor": "Unknown Sponsor",
        "status": "RECRUITING",
    }
    fields.update(overrides)
    return ClinicalTrial(**fields)


@pytest.fixture
def make_trial():
    return build_trial


@pytest.fixture
def synonym_index() -> SynonymIndex:
    return SynonymIndex.build(load_synonym_table())


@pytest.fixture
def nsclc_trial() -> ClinicalTrial:
    return build_trial(
        id="NCT00000001",
        title="NSCLC Immunotherapy Trial",
        conditions=["Non-Small Cell Lung Cancer"],
        interventions=["Pembrolizumab"],
        sponsor="Merck Sharp & Dohme LLC",
        status="RECRUITING",
        start_date="2021-05-01",
        end_date="2024-12-31",
    )


@pytest.fixture
def diabetes_trial() -> ClinicalTrial:
    return build_trial(
        id="NCT00000002",
        title="Diabetes Study",
        conditions=["Diabetes Mellitus, Type 2"],
        interventions=["Metformin"],
        sponsor="Novo Nordisk A/S",
        status="COMPLETED",
        start_date="2019-03",
        end_date=None,
    )


@pytest.fixture
def trials(nsclc_trial, diabetes_trial):
    return [nsclc_trial, diabetes_trial]
