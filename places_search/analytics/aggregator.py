from __future__ import annotations

from collections import Counter
from typing import Any


def compute_decision_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    decisions = [e for e in events if e["type"] == "requery_decision"]
    total = len(decisions)

    refetches = sum(1 for d in decisions if d["do_google"])
    local = total - refetches

    reason_counter: Counter[str] = Counter(d["reason"] for d in decisions)
    top_reasons = [{"reason": r, "count": c} for r, c in reason_counter.most_common()]

    route_counter: Counter[str] = Counter(d.get("route", "unknown") for d in decisions)

    # Which soft filters users toggle most
    filter_counter: Counter[str] = Counter()
    for d in decisions:
        for name in d.get("soft_filters", []) or []:
            filter_counter[name] += 1

    return {
        "total_turns": total,
        "provider_refetches": refetches,
        "local_refilters": local,
        "refetch_rate": round(refetches / total * 100, 1) if total else 0.0,
        "top_reasons": top_reasons,
        "routes": dict(route_counter),
        "soft_filter_changes": dict(filter_counter.most_common()),
    }
