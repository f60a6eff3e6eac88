from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SearchRoute(str, Enum):
    nearby = "NEARBY"
    textsearch = "TEXTSEARCH"


class PriceIntent(str, Enum):
    cheap = "CHEAP"
    mid = "MID"
    expensive = "EXPENSIVE"


class LatLng(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class LocationAnchor(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_location: LatLng | None = None
    city_text: str | None = None
    region_code: str | None = None


class OpenAt(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int | None = Field(default=None, ge=0, le=6, description="0=Sunday, 6=Saturday")
    time_hhmm: str | None = None
    timezone: str | None = None


class OpenBetween(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int | None = Field(default=None, ge=0, le=6)
    start_hhmm: str | None = None
    end_hhmm: str | None = None
    timezone: str | None = None


class SoftFilters(BaseModel):
    """Constraints that narrow an already-fetched pool without a new provider call."""

    model_config = ConfigDict(frozen=True)

    open_now: bool | None = None
    open_at: OpenAt | None = None
    open_between: OpenBetween | None = None
    price_intent: PriceIntent | None = None
    price_level: int | None = Field(default=None, ge=1, le=4)
    min_rating_bucket: str | None = Field(default=None, description='e.g. "R35", "R40", "R45"')
    min_review_count_bucket: str | None = None
    is_kosher: bool | None = None
    is_gluten_free: bool | None = None
    dietary: tuple[str, ...] = ()
    accessible: bool | None = None
    parking: bool | None = None


class SearchContext(BaseModel):
    """Snapshot of the parameters that produced (or would produce) a provider query."""

    model_config = ConfigDict(frozen=True)

    query: str
    route: SearchRoute
    location_anchor: LocationAnchor = Field(default_factory=LocationAnchor)
    radius_meters: float | None = None
    soft_filters: SoftFilters = Field(default_factory=SoftFilters)


class PoolStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_candidates: int
    after_soft_filters: int
    requested_limit: int


class RequeryReason(str, Enum):
    first_request = "first_request"
    no_candidate_pool = "no_candidate_pool"
    query_changed = "query_changed"
    route_changed = "route_changed"
    location_anchor_changed = "location_anchor_changed"
    radius_changed_significantly = "radius_changed_significantly"
    pool_exhausted_after_filters = "pool_exhausted_after_filters"
    soft_filters_only = "soft_filters_only"
    no_changes_detected = "no_changes_detected"


class Changeset(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: bool = False
    route: bool = False
    location: bool = False
    radius: bool = False
    soft_filters: tuple[str, ...] = ()


class RequeryDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    do_google: bool
    reason: RequeryReason
    changeset: Changeset | None = None
