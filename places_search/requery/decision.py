"""
Decide whether a conversation turn needs a new places-provider call.

Hard changes (query, route, location anchor, radius growth) invalidate the
retained candidate pool and always win over soft-filter changes, even when
both happen in the same turn. Pool exhaustion is only reported once the
structural context is known to be stable.
"""
from __future__ import annotations

import logging

from .classifiers import (
    detect_soft_filter_changes,
    has_location_anchor_changed,
    has_significant_radius_change,
)
from .config import DEFAULT_REQUERY_CONFIG, RequeryConfig
from .models import (
    Changeset,
    PoolStats,
    RequeryDecision,
    RequeryReason,
    SearchContext,
)
from .pool import is_pool_exhausted

logger = logging.getLogger(__name__)


def _refetch(reason: RequeryReason, changeset: Changeset | None = None) -> RequeryDecision:
    return RequeryDecision(do_google=True, reason=reason, changeset=changeset)


def decide_requery(
    previous: SearchContext | None,
    next_context: SearchContext,
    pool: PoolStats | None,
    config: RequeryConfig = DEFAULT_REQUERY_CONFIG,
) -> RequeryDecision:
    """
    Compare two consecutive search contexts and decide how to serve the new one.

    Rules are evaluated in order and the first match wins:

    1. no previous context            -> refetch (first_request)
    2. no pool or an empty pool       -> refetch (no_candidate_pool)
    3. query text changed             -> refetch (query_changed)
    4. route changed                  -> refetch (route_changed)
    5. location anchor moved          -> refetch (location_anchor_changed)
    6. radius grew past the threshold -> refetch (radius_changed_significantly)
    7. pool exhausted by soft filters -> refetch (pool_exhausted_after_filters)
    8. soft filters changed           -> re-filter locally (soft_filters_only)
    9. nothing changed                -> re-filter locally (no_changes_detected)
    """
    if previous is None:
        decision = _refetch(RequeryReason.first_request)
    elif pool is None or pool.total_candidates == 0:
        decision = _refetch(RequeryReason.no_candidate_pool)
    elif previous.query != next_context.query:
        decision = _refetch(RequeryReason.query_changed, Changeset(query=True))
    elif previous.route != next_context.route:
        decision = _refetch(RequeryReason.route_changed, Changeset(route=True))
    elif has_location_anchor_changed(previous, next_context, config):
        decision = _refetch(RequeryReason.location_anchor_changed, Changeset(location=True))
    elif has_significant_radius_change(previous, next_context, config):
        decision = _refetch(RequeryReason.radius_changed_significantly, Changeset(radius=True))
    elif is_pool_exhausted(pool, config):
        decision = _refetch(RequeryReason.pool_exhausted_after_filters)
    else:
        changed = detect_soft_filter_changes(previous, next_context)
        if changed:
            decision = RequeryDecision(
                do_google=False,
                reason=RequeryReason.soft_filters_only,
                changeset=Changeset(soft_filters=changed),
            )
        else:
            decision = RequeryDecision(do_google=False, reason=RequeryReason.no_changes_detected)

    logger.debug("requery decision: do_google=%s reason=%s", decision.do_google, decision.reason.value)
    return decision
