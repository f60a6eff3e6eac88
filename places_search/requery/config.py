from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RequeryConfig:
    default_radius_meters: float = float(os.getenv("REQUERY_DEFAULT_RADIUS_METERS", "5000"))
    location_shift_meters: float = float(os.getenv("REQUERY_LOCATION_SHIFT_METERS", "500"))
    radius_increase_pct: float = float(os.getenv("REQUERY_RADIUS_INCREASE_PCT", "50"))
    min_pool_size: int = int(os.getenv("REQUERY_MIN_POOL_SIZE", "5"))


DEFAULT_REQUERY_CONFIG = RequeryConfig()
