# backend/search/models.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, validator


class InvalidArgument(ValueError):
    """Request value the search core refuses to guess about (HTTP 400)."""


class SortKey(str, Enum):
    START_DATE = "startDate"
    END_DATE = "endDate"
    TITLE = "title"
    SPONSOR = "sponsor"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Comparison(str, Enum):
    GTE = ">="
    LTE = "<="


class ClinicalTrial(BaseModel):
    id: str
    url: Optional[str] = None
    title: str
    conditions: List[str] = Field(default_factory=list)
    interventions: List[str] = Field(default_factory=list)
    sponsor: str = "Unknown Sponsor"
    phase: Optional[str] = None
    status: Optional[str] = None
    locations: List[str] = Field(default_factory=list)
    start_date: Optional[str] = Field(None, alias="startDate")  # None if not begun / pending
    end_date: Optional[str] = Field(None, alias="endDate")  # None if ongoing / pending

    @validator("conditions", "interventions", "locations", pre=True)
    def _default_empty_list(cls, v):
        return v or []

    class Config:
        populate_by_name = True
        frozen = True


class SearchRequest(BaseModel):
    """
    Free-text phrases plus structured column filters.

    sort_by and the comparisons are kept as plain strings so that unknown
    values reach the pipeline and are rejected as InvalidArgument (HTTP 400)
    rather than failing request validation. A null comparison or sort_dir
    falls back to the default.
    """
    filters: List[str] = Field(default_factory=list)
    match_all: bool = Field(False, alias="matchAll")
    synonym_expansion: bool = Field(False, alias="synonymExpansion")
    page: int = 1
    sort_by: str = Field(SortKey.START_DATE.value, alias="sortBy")
    sort_dir: Optional[str] = Field(SortDirection.ASC.value, alias="sortDir")
    title_filter: Optional[str] = Field("", alias="titleFilter")
    sponsor_filter: Optional[str] = Field("", alias="sponsorFilter")
    status_filter: Optional[str] = Field("", alias="statusFilter")
    start_date_filter: Optional[str] = Field("", alias="startDateFilter")
    start_comparison: Optional[str] = Field(Comparison.GTE.value, alias="startComparison")
    end_date_filter: Optional[str] = Field("", alias="endDateFilter")
    end_comparison: Optional[str] = Field(Comparison.LTE.value, alias="endComparison")

    @validator("filters", pre=True)
    def _default_empty_filters(cls, v):
        return v or []

    class Config:
        populate_by_name = True


class SearchResponse(BaseModel):
    total: int
    results: List[ClinicalTrial]
    page: int
    size: int
