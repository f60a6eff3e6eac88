from __future__ import annotations

from .config import DEFAULT_REQUERY_CONFIG, RequeryConfig
from .models import PoolStats


def is_pool_exhausted(
    pool: PoolStats,
    config: RequeryConfig = DEFAULT_REQUERY_CONFIG,
) -> bool:
    """Return True when too few candidates survive soft filtering to fill a page."""
    remaining = pool.after_soft_filters

    if remaining < pool.requested_limit and remaining < config.min_pool_size:
        return True

    return remaining == 0
