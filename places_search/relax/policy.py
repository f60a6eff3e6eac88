"""
Relax policy for a re-used candidate pool.

When soft filters leave too few candidates, filters are loosened in a fixed
order, one step per attempt:

1. opening hours (open now, then open-at, then open-between)
2. dietary (kosher unless it is a hard constraint, otherwise gluten-free)
3. minimum rating bucket

Radius widening is not part of this policy; it needs a provider refetch.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, Field

from ..requery.models import SoftFilters
from .config import DEFAULT_RELAX_CONFIG, RelaxConfig
from .constraints import (
    HardConstraint,
    get_hard_constraint_reason,
    is_hard_constraint,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RelaxStep(BaseModel):
    step: int
    field: str
    from_value: Any = None
    to_value: Any = None
    reason: str


class RelaxDenied(BaseModel):
    field: str
    reason: str
    reason_code: str


class RelaxResult(BaseModel):
    relaxed: bool
    next_filters: SoftFilters
    steps: list[RelaxStep] = Field(default_factory=list)
    denied: list[RelaxDenied] = Field(default_factory=list)
    attempted_fields: list[str] = Field(default_factory=list)


class RelaxCascadeResult(BaseModel):
    final_filters: SoftFilters
    final_candidates: list[Any] = Field(default_factory=list)
    all_steps: list[RelaxStep] = Field(default_factory=list)
    all_denied: list[RelaxDenied] = Field(default_factory=list)
    attempts: int = 0


def _relax_opening_hours(filters: SoftFilters) -> tuple[str, Any, str] | None:
    if filters.open_now is True:
        return "open_now", True, "too_few_open_now_results"
    if filters.open_at is not None:
        return "open_at", filters.open_at, "too_few_open_at_results"
    if filters.open_between is not None:
        return "open_between", filters.open_between, "too_few_open_between_results"
    return None


def relax_if_too_few(
    candidates_after_filter: int,
    filters: SoftFilters,
    attempt: int = 0,
    hard_constraints: Iterable[HardConstraint | str] = (),
    overrides: Iterable[HardConstraint | str] = (),
    config: RelaxConfig = DEFAULT_RELAX_CONFIG,
) -> RelaxResult:
    """Loosen at most one soft filter when fewer than ``min_acceptable`` candidates remain."""
    if candidates_after_filter >= config.min_acceptable or attempt >= config.max_attempts:
        return RelaxResult(relaxed=False, next_filters=filters)

    hard_constraints = list(hard_constraints)
    overrides = list(overrides)

    steps: list[RelaxStep] = []
    denied: list[RelaxDenied] = []
    attempted: list[str] = []
    updates: dict[str, Any] = {}

    # Step 1: opening hours
    hours = _relax_opening_hours(filters)
    if hours is not None:
        field, current, reason = hours
        attempted.append(field)
        steps.append(RelaxStep(step=1, field=field, from_value=current, to_value=None, reason=reason))
        updates[field] = None

    # Step 2: dietary
    if not updates and filters.is_kosher is True:
        attempted.append("is_kosher")
        if is_hard_constraint(HardConstraint.is_kosher, hard_constraints, overrides):
            denied.append(RelaxDenied(
                field="is_kosher",
                reason="Hard constraint - religious dietary requirement",
                reason_code=get_hard_constraint_reason(HardConstraint.is_kosher),
            ))
        else:
            steps.append(RelaxStep(
                step=2, field="is_kosher", from_value=True, to_value=None,
                reason="too_few_kosher_results",
            ))
            updates["is_kosher"] = None
    elif not updates and filters.is_gluten_free is True:
        attempted.append("is_gluten_free")
        steps.append(RelaxStep(
            step=2, field="is_gluten_free", from_value=True, to_value=None,
            reason="too_few_gluten_free_results",
        ))
        updates["is_gluten_free"] = None

    # Step 3: rating, last resort
    if not updates and filters.min_rating_bucket is not None:
        attempted.append("min_rating_bucket")
        steps.append(RelaxStep(
            step=3, field="min_rating_bucket", from_value=filters.min_rating_bucket,
            to_value=None, reason="too_few_high_rated_results",
        ))
        updates["min_rating_bucket"] = None

    next_filters = filters.model_copy(update=updates) if updates else filters

    if denied:
        logger.info(
            "relaxation denied for hard constraints: %s",
            [d.field for d in denied],
        )

    return RelaxResult(
        relaxed=bool(updates),
        next_filters=next_filters,
        steps=steps,
        denied=denied,
        attempted_fields=attempted,
    )


def apply_relaxation_cascade(
    pool: Sequence[T],
    filters: SoftFilters,
    filter_fn: Callable[[Sequence[T], SoftFilters], list[T]],
    hard_constraints: Iterable[HardConstraint | str] = (),
    overrides: Iterable[HardConstraint | str] = (),
    config: RelaxConfig = DEFAULT_RELAX_CONFIG,
) -> RelaxCascadeResult:
    """Relax and re-filter until enough candidates remain or nothing more can be loosened."""
    hard_constraints = list(hard_constraints)
    overrides = list(overrides)

    current = filters
    candidates = filter_fn(pool, current)
    all_steps: list[RelaxStep] = []
    all_denied: list[RelaxDenied] = []
    attempts = 0

    while len(candidates) < config.min_acceptable and attempts < config.max_attempts:
        result = relax_if_too_few(
            len(candidates), current, attempts, hard_constraints, overrides, config,
        )
        all_denied.extend(result.denied)
        if not result.relaxed:
            break

        current = result.next_filters
        all_steps.extend(result.steps)
        attempts += 1
        candidates = filter_fn(pool, current)

    if all_steps:
        logger.info(
            "relaxed %d soft filter(s): %s -> %d candidates",
            len(all_steps), [s.field for s in all_steps], len(candidates),
        )

    return RelaxCascadeResult(
        final_filters=current,
        final_candidates=list(candidates),
        all_steps=all_steps,
        all_denied=all_denied,
        attempts=attempts,
    )


def can_relax_further(filters: SoftFilters) -> bool:
    """Optimistic check that ignores hard constraints."""
    return (
        filters.open_now is True
        or filters.open_at is not None
        or filters.open_between is not None
        or filters.is_kosher is True
        or filters.is_gluten_free is True
        or filters.min_rating_bucket is not None
    )


def can_relax_further_safe(
    filters: SoftFilters,
    hard_constraints: Iterable[HardConstraint | str],
    overrides: Iterable[HardConstraint | str] = (),
) -> bool:
    if filters.open_now is True or filters.open_at is not None or filters.open_between is not None:
        return True
    if filters.is_kosher is True and not is_hard_constraint(
        HardConstraint.is_kosher, hard_constraints, overrides,
    ):
        return True
    if filters.is_gluten_free is True:
        return True
    return filters.min_rating_bucket is not None
