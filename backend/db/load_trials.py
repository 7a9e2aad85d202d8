# backend/db/load_trials.py
"""
Load a ClinicalTrials.gov v2 JSON export (list of studies) into
ClinicalTrial records for the in-memory search core.
"""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from backend.config import TRIALS_DATA_PATH
from backend.search.models import ClinicalTrial

logger = logging.getLogger(__name__)

STUDY_URL = "https://clinicaltrials.gov/study/{nct_id}"


def normalize_study(study: Dict[str, Any]) -> Optional[ClinicalTrial]:
    """
    Map one raw v2 'study' record to a ClinicalTrial.
    Returns None when the study has no NCT id or no brief title.
    """
    protocol = study.get("protocolSection") or {}

    id_mod = protocol.get("identificationModule") or {}
    status_mod = protocol.get("statusModule") or {}
    design_mod = protocol.get("designModule") or {}
    cond_mod = protocol.get("conditionsModule") or {}
    arms_mod = protocol.get("armsInterventionsModule") or {}
    sponsor_mod = protocol.get("sponsorCollaboratorsModule") or {}
    loc_mod = protocol.get("contactsLocationsModule") or {}

    nct_id = id_mod.get("nctId")
    title = id_mod.get("briefTitle")
    if not nct_id or not title:
        return None

    interventions = [
        intr.get("name")
        for intr in arms_mod.get("interventions") or []
        if intr.get("name")
    ]
    phases = design_mod.get("phases") or []
    locations = [
        loc.get("city")
        for loc in loc_mod.get("locations") or []
        if loc.get("city")
    ]

    return ClinicalTrial(
        id=nct_id,
        url=STUDY_URL.format(nct_id=nct_id),
        title=title,
        conditions=cond_mod.get("conditions") or [],
        interventions=interventions,
        sponsor=(sponsor_mod.get("leadSponsor") or {}).get("name") or "Unknown Sponsor",
        phase=phases[0] if phases else None,
        status=status_mod.get("overallStatus"),
        locations=locations,
        start_date=(status_mod.get("startDateStruct") or {}).get("date"),
        end_date=(status_mod.get("completionDateStruct") or {}).get("date"),
    )


def load_clinical_trials_data(path: str = TRIALS_DATA_PATH) -> Tuple[List[ClinicalTrial], List[str]]:
    """
    Read the export at `path`.

    Returns (trials, statuses) where statuses is the sorted set of distinct
    overallStatus values seen. Studies missing essential info are skipped
    instead of failing the whole load.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw_studies = json.load(f)

    trials: List[ClinicalTrial] = []
    statuses = set()
    skipped = 0

    for study in raw_studies:
        trial = normalize_study(study)
        if trial is None:
            skipped += 1
            continue
        if trial.status:
            statuses.add(trial.status)
        trials.append(trial)

    logger.info(f"Loaded {len(trials)} trials from {path} (skipped {skipped})")
    return trials, sorted(statuses)


@lru_cache(maxsize=1)
def get_trials() -> Tuple[ClinicalTrial, ...]:
    """Process-wide snapshot of the configured dataset."""
    trials, _ = load_clinical_trials_data(TRIALS_DATA_PATH)
    return tuple(trials)
