from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_decision_analytics
from .analytics.store import get_events, record_decision
from .relax.constraints import build_hard_constraints_metadata, detect_hard_constraints
from .relax.policy import relax_if_too_few
from .requery.models import PoolStats
from .session.models import (
    PoolResponse,
    RelaxRequest,
    RelaxResponse,
    SearchSessionState,
    TurnRequest,
    TurnResponse,
)
from .session.tracker import begin_turn, record_pool_stats

logger = logging.getLogger(__name__)

_SESSION_KEY = "search_state"

app = FastAPI(title="Places Search Requery API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "places-search-secret-change-in-production"),
)


def _load_state(request: Request) -> SearchSessionState:
    raw_state = request.session.get(_SESSION_KEY)
    if not raw_state:
        return SearchSessionState()
    try:
        return SearchSessionState.model_validate(raw_state)
    except ValidationError:
        logger.warning("Discarding unreadable search session state", exc_info=True)
        return SearchSessionState()


def _save_state(request: Request, state: SearchSessionState) -> None:
    request.session[_SESSION_KEY] = state.model_dump(mode="json")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Search turn endpoints ────────────────────────────────────────────────


# Unchanged changeset fields are left out of the response
@app.post("/search/turn", response_model=TurnResponse, response_model_exclude_defaults=True)
def search_turn(body: TurnRequest, request: Request) -> TurnResponse:
    # 1. Load the retained context and pool for this session
    state = _load_state(request)

    # 2. Decide refetch vs. local re-filter
    decision, state = begin_turn(state, body.context, body.pool)

    # 3. Record analytics event
    record_decision(decision, body.context, state.turn_count)

    # 4. Save updated state for the next turn
    _save_state(request, state)

    return TurnResponse(
        decision=decision,
        turn_count=state.turn_count,
        pool_retained=state.pool_stats is not None,
    )


@app.post("/search/pool", response_model=PoolResponse)
def search_pool(body: PoolStats, request: Request) -> PoolResponse:
    state = record_pool_stats(_load_state(request), body)
    _save_state(request, state)
    return PoolResponse(status="recorded", pool_stats=body)


@app.post("/search/reset")
def search_reset(request: Request) -> dict[str, str]:
    request.session.pop(_SESSION_KEY, None)
    return {"status": "reset"}


@app.post("/search/relax", response_model=RelaxResponse)
def search_relax(body: RelaxRequest) -> RelaxResponse:
    hard = detect_hard_constraints(body.filters, body.cuisine_key)
    result = relax_if_too_few(
        body.after_soft_filters,
        body.filters,
        attempt=body.attempt,
        hard_constraints=hard,
        overrides=body.overrides,
    )
    return RelaxResponse(result=result, hard_constraints=build_hard_constraints_metadata(hard))


# ── Analytics ────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_decision_analytics(get_events())
