from __future__ import annotations

import os
import time
from collections import deque
from typing import Any

from ..requery.models import RequeryDecision, SearchContext

MAX_EVENTS = int(os.getenv("ANALYTICS_MAX_EVENTS", "10000"))

# Oldest events are dropped once the cap is reached
_events: deque[dict[str, Any]] = deque(maxlen=MAX_EVENTS)


def record_decision(
    decision: RequeryDecision,
    context: SearchContext,
    turn: int,
) -> None:
    changeset = decision.changeset
    _events.append({
        "type": "requery_decision",
        "timestamp": time.time(),
        "turn": turn,
        "route": context.route.value,
        "do_google": decision.do_google,
        "reason": decision.reason.value,
        "soft_filters": list(changeset.soft_filters) if changeset else [],
    })


def get_events() -> list[dict[str, Any]]:
    return list(_events)


def clear_events() -> None:
    _events.clear()
