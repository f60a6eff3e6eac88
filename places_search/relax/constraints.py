from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, Field

from ..requery.models import SoftFilters

_MEAT_DAIRY_CUISINES = frozenset({"meat", "dairy"})


class HardConstraint(str, Enum):
    is_kosher = "is_kosher"
    meat_dairy = "meat_dairy"


_REASON_CODES: dict[HardConstraint, str] = {
    HardConstraint.is_kosher: "religious_dietary_requirement",
    HardConstraint.meat_dairy: "kosher_meat_dairy_separation",
}


class HardConstraintsMetadata(BaseModel):
    active: list[HardConstraint] = Field(default_factory=list)
    count: int = 0
    has_kosher: bool = False
    has_meat_dairy: bool = False


def detect_hard_constraints(
    filters: SoftFilters,
    cuisine_key: str | None = None,
) -> list[HardConstraint]:
    active: list[HardConstraint] = []
    if filters.is_kosher is True:
        active.append(HardConstraint.is_kosher)
    if cuisine_key and cuisine_key.strip().lower() in _MEAT_DAIRY_CUISINES:
        active.append(HardConstraint.meat_dairy)
    return active


def is_hard_constraint(
    field: HardConstraint | str,
    active: Iterable[HardConstraint | str],
    overrides: Iterable[HardConstraint | str] = (),
) -> bool:
    """A constraint is hard when it is active and the user has not overridden it."""
    key = HardConstraint(field)
    active_keys = {HardConstraint(a) for a in active}
    override_keys = {HardConstraint(o) for o in overrides}
    return key in active_keys and key not in override_keys


def get_hard_constraint_reason(field: HardConstraint | str) -> str:
    return _REASON_CODES[HardConstraint(field)]


def build_hard_constraints_metadata(
    active: Iterable[HardConstraint | str],
) -> HardConstraintsMetadata:
    keys = [HardConstraint(a) for a in active]
    return HardConstraintsMetadata(
        active=keys,
        count=len(keys),
        has_kosher=HardConstraint.is_kosher in keys,
        has_meat_dairy=HardConstraint.meat_dairy in keys,
    )
