from __future__ import annotations

import logging

from ..requery.config import DEFAULT_REQUERY_CONFIG, RequeryConfig
from ..requery.decision import decide_requery
from ..requery.models import PoolStats, RequeryDecision, SearchContext
from .models import SearchSessionState

logger = logging.getLogger(__name__)


def begin_turn(
    state: SearchSessionState,
    next_context: SearchContext,
    pool: PoolStats | None = None,
    config: RequeryConfig = DEFAULT_REQUERY_CONFIG,
) -> tuple[RequeryDecision, SearchSessionState]:
    """
    Decide how to serve a new turn and return the state for the next one.

    ``pool`` replaces the retained stats when the caller has already re-applied
    the new soft filters to the retained candidates. A refetch makes the pool
    stale, so it is dropped until ``record_pool_stats`` is called again.
    """
    current_pool = pool if pool is not None else state.pool_stats
    decision = decide_requery(state.previous_context, next_context, current_pool, config)

    logger.info(
        "turn %d: do_google=%s reason=%s",
        state.turn_count + 1,
        decision.do_google,
        decision.reason.value,
    )

    new_state = SearchSessionState(
        previous_context=next_context,
        pool_stats=None if decision.do_google else current_pool,
        turn_count=state.turn_count + 1,
        last_decision=decision,
    )
    return decision, new_state


def record_pool_stats(state: SearchSessionState, pool: PoolStats) -> SearchSessionState:
    """Attach stats for the pool produced by a fetch or soft-filter pass."""
    return state.model_copy(update={"pool_stats": pool})
