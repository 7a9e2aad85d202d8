# backend/api/main.py

from typing import List, Sequence
import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from backend.config import API_HOST, API_PORT, LOG_LEVEL
from backend.db.load_trials import get_trials
from backend.db.statuses import STATUSES
from backend.nlp.synonym_index import SynonymIndex, get_synonym_index
from backend.search.models import (
    ClinicalTrial,
    InvalidArgument,
    SearchRequest,
    SearchResponse,
)
from backend.search.pipeline import run_search

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Clinical Trial Search API",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------------
# Response models
# -----------------------------
class StatusesResponse(BaseModel):
    statuses: List[str]


class HealthResponse(BaseModel):
    status: str
    trials: int


# -----------------------------
# Dependencies
# -----------------------------
def load_trials() -> Sequence[ClinicalTrial]:
    try:
        return get_trials()
    except FileNotFoundError as exc:
        logger.error("Trial dataset not found: %s", exc)
        raise HTTPException(status_code=503, detail="Trial dataset not available")


def load_synonym_index() -> SynonymIndex:
    return get_synonym_index()


# -----------------------------
# Routes
# -----------------------------
@app.get("/health", response_model=HealthResponse, tags=["health"])
def health(trials: Sequence[ClinicalTrial] = Depends(load_trials)):
    return {"status": "ok", "trials": len(trials)}


@app.get("/statuses", response_model=StatusesResponse, tags=["search"])
def list_statuses():
    """Closed set of trial statuses for the status filter control."""
    return {"statuses": STATUSES}


@app.post("/search", response_model=SearchResponse, tags=["search"])
def search_trials(
    body: SearchRequest,
    trials: Sequence[ClinicalTrial] = Depends(load_trials),
    synonym_index: SynonymIndex = Depends(load_synonym_index),
):
    """
    Filter, sort and page the trial snapshot.

    - `filters`: free-text phrases matched against title, conditions,
      interventions and sponsor (`matchAll` = AND, otherwise OR)
    - `synonymExpansion`: also match terms from the clinical synonym table
    - structured column filters: title / sponsor substring, exact status,
      start / end date with `>=` or `<=`
    """
    try:
        return run_search(trials, body, synonym_index=synonym_index)
    except InvalidArgument as exc:
        raise HTTPException(status_code=400, detail=str(exc))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=API_HOST, port=API_PORT)
