from __future__ import annotations

from pydantic import BaseModel, Field

from ..relax.constraints import HardConstraint, HardConstraintsMetadata
from ..relax.policy import RelaxResult
from ..requery.models import PoolStats, RequeryDecision, SearchContext, SoftFilters


class SearchSessionState(BaseModel):
    previous_context: SearchContext | None = None
    pool_stats: PoolStats | None = None
    turn_count: int = 0
    last_decision: RequeryDecision | None = None


class TurnRequest(BaseModel):
    context: SearchContext
    pool: PoolStats | None = Field(
        default=None,
        description="Pool stats re-computed under the new soft filters; replaces the retained stats",
    )


class TurnResponse(BaseModel):
    decision: RequeryDecision
    turn_count: int
    pool_retained: bool


class PoolResponse(BaseModel):
    status: str
    pool_stats: PoolStats


class RelaxRequest(BaseModel):
    after_soft_filters: int = Field(..., ge=0)
    filters: SoftFilters
    attempt: int = Field(default=0, ge=0)
    cuisine_key: str | None = None
    overrides: list[HardConstraint] = Field(default_factory=list)


class RelaxResponse(BaseModel):
    result: RelaxResult
    hard_constraints: HardConstraintsMetadata
