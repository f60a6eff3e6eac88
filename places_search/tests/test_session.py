from __future__ import annotations

from places_search.requery.models import (
    LocationAnchor,
    PoolStats,
    RequeryReason,
    SearchContext,
    SearchRoute,
    SoftFilters,
)
from places_search.session.models import SearchSessionState
from places_search.session.tracker import begin_turn, record_pool_stats

POOL = PoolStats(total_candidates=40, after_soft_filters=12, requested_limit=10)


def _ctx(query: str = "pizza", **soft) -> SearchContext:
    return SearchContext(
        query=query,
        route=SearchRoute.textsearch,
        location_anchor=LocationAnchor(city_text="Tel Aviv", region_code="IL"),
        soft_filters=SoftFilters(**soft),
    )


def test_first_turn_refetches_and_stores_context():
    decision, state = begin_turn(SearchSessionState(), _ctx())
    assert decision.reason == RequeryReason.first_request
    assert state.previous_context == _ctx()
    assert state.pool_stats is None
    assert state.turn_count == 1
    assert state.last_decision == decision


def test_soft_turn_keeps_pool():
    state = record_pool_stats(begin_turn(SearchSessionState(), _ctx())[1], POOL)
    decision, state = begin_turn(state, _ctx(open_now=True))
    assert decision.do_google is False
    assert decision.reason == RequeryReason.soft_filters_only
    assert state.pool_stats == POOL
    assert state.turn_count == 2


def test_refetch_drops_stale_pool():
    state = record_pool_stats(begin_turn(SearchSessionState(), _ctx())[1], POOL)
    decision, state = begin_turn(state, _ctx(query="sushi"))
    assert decision.reason == RequeryReason.query_changed
    assert state.pool_stats is None
    assert state.previous_context.query == "sushi"


def test_supplied_pool_replaces_retained_stats():
    state = record_pool_stats(begin_turn(SearchSessionState(), _ctx())[1], POOL)
    narrowed = PoolStats(total_candidates=40, after_soft_filters=3, requested_limit=10)
    decision, state = begin_turn(state, _ctx(is_gluten_free=True), pool=narrowed)
    assert decision.reason == RequeryReason.pool_exhausted_after_filters
    assert state.pool_stats is None


def test_record_pool_stats_does_not_mutate_input():
    state = SearchSessionState()
    updated = record_pool_stats(state, POOL)
    assert state.pool_stats is None
    assert updated.pool_stats == POOL
