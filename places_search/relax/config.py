from __future__ import annotations

import os
from dataclasses import dataclass

from ..requery.config import DEFAULT_REQUERY_CONFIG


@dataclass(frozen=True)
class RelaxConfig:
    min_acceptable: int = int(os.getenv("RELAX_MIN_ACCEPTABLE", str(DEFAULT_REQUERY_CONFIG.min_pool_size)))
    max_attempts: int = int(os.getenv("RELAX_MAX_ATTEMPTS", "2"))


DEFAULT_RELAX_CONFIG = RelaxConfig()
