from __future__ import annotations

from .config import DEFAULT_REQUERY_CONFIG, RequeryConfig
from .geo import distance_between
from .models import SearchContext, SoftFilters

# Order in which changed soft filters are reported in a changeset
SOFT_FILTER_FIELDS: tuple[str, ...] = (
    "open_now",
    "open_at",
    "open_between",
    "price_intent",
    "price_level",
    "min_rating_bucket",
    "min_review_count_bucket",
    "is_kosher",
    "is_gluten_free",
    "dietary",
    "accessible",
    "parking",
)

_SET_VALUED_FIELDS = frozenset({"dietary"})


def has_location_anchor_changed(
    previous: SearchContext,
    next_context: SearchContext,
    config: RequeryConfig = DEFAULT_REQUERY_CONFIG,
) -> bool:
    prev_anchor = previous.location_anchor
    next_anchor = next_context.location_anchor

    prev_loc = prev_anchor.user_location
    next_loc = next_anchor.user_location

    if (prev_loc is None) != (next_loc is None):
        return True

    if prev_loc is not None and next_loc is not None:
        if distance_between(prev_loc, next_loc) > config.location_shift_meters:
            return True

    if prev_anchor.city_text != next_anchor.city_text:
        return True

    return prev_anchor.region_code != next_anchor.region_code


def radius_increase_pct(
    previous: SearchContext,
    next_context: SearchContext,
    config: RequeryConfig = DEFAULT_REQUERY_CONFIG,
) -> float:
    """Percent change from the previous radius to the new one (unset uses the default)."""
    prev_radius = (
        previous.radius_meters
        if previous.radius_meters is not None
        else config.default_radius_meters
    )
    next_radius = (
        next_context.radius_meters
        if next_context.radius_meters is not None
        else config.default_radius_meters
    )

    if prev_radius == 0:
        return float("inf") if next_radius > 0 else 0.0

    return (next_radius - prev_radius) / prev_radius * 100


def has_significant_radius_change(
    previous: SearchContext,
    next_context: SearchContext,
    config: RequeryConfig = DEFAULT_REQUERY_CONFIG,
) -> bool:
    return radius_increase_pct(previous, next_context, config) > config.radius_increase_pct


def _soft_value(filters: SoftFilters, field: str):
    value = getattr(filters, field)
    if field in _SET_VALUED_FIELDS:
        return frozenset(value or ())
    return value


def detect_soft_filter_changes(
    previous: SearchContext,
    next_context: SearchContext,
) -> list[str]:
    """Return the names of soft filters whose value differs between the two contexts.

    Dietary tags compare as sets, so reordering them is not a change.
    Opening-hours filters are models and compare field by field.
    """
    prev_filters = previous.soft_filters
    next_filters = next_context.soft_filters

    return [
        field
        for field in SOFT_FILTER_FIELDS
        if _soft_value(prev_filters, field) != _soft_value(next_filters, field)
    ]
