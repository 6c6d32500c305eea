"""Derived views over an inventory snapshot.

Everything here is a pure function of the items passed in and the current
time. Pass ``now`` explicitly to get stable results around day boundaries.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from .models import FoodItem

EXPIRING_SOON_DAYS = 3

_SECONDS_PER_DAY = 24 * 60 * 60


def _now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def active_items(items: Iterable[FoodItem]) -> list[FoodItem]:
    return [item for item in items if item is not None and not item.is_used]


def used_items(items: Iterable[FoodItem]) -> list[FoodItem]:
    return [item for item in items if item is not None and item.is_used]


def consumed_count(items: Iterable[FoodItem]) -> int:
    return len(used_items(items))


def consumption_percentage(items: Iterable[FoodItem]) -> int:
    """Share of tracked items already used, as a whole percentage.

    Halves round up (1 of 8 is 13%), and an empty collection is 0%.
    """
    items = list(items)
    if not items:
        return 0
    ratio = consumed_count(items) / len(items) * 100
    return math.floor(ratio + 0.5)


def days_until_expiry(item: FoodItem, now: datetime | None = None) -> int:
    """Whole days left before expiry, rounding partial days up."""
    delta = item.expiry_date - _now(now)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def expiring_soon(
    items: Iterable[FoodItem],
    now: datetime | None = None,
    days: int = EXPIRING_SOON_DAYS,
) -> list[FoodItem]:
    """Active items expiring within ``days`` days, overdue ones included.

    Sorted by expiry date, earliest first; ties keep collection order.
    """
    current = _now(now)
    soon = [
        item for item in active_items(items)
        if days_until_expiry(item, current) <= days
    ]
    return sorted(soon, key=lambda item: item.expiry_date)


def expiry_status(item: FoodItem, now: datetime | None = None) -> tuple[str, int]:
    """Classify an item as ``expired``, ``today``, ``tomorrow`` or ``in_days``."""
    remaining = days_until_expiry(item, now)
    if remaining < 0:
        return "expired", remaining
    if remaining == 0:
        return "today", remaining
    if remaining == 1:
        return "tomorrow", remaining
    return "in_days", remaining


@dataclass
class DashboardSummary:
    active_count: int
    total_count: int
    consumed_count: int
    consumption_percentage: int
    expiring_soon: list[FoodItem]


def dashboard_summary(
    items: Iterable[FoodItem],
    now: datetime | None = None,
    days: int = EXPIRING_SOON_DAYS,
) -> DashboardSummary:
    items = [item for item in items if item is not None]
    return DashboardSummary(
        active_count=len(active_items(items)),
        total_count=len(items),
        consumed_count=consumed_count(items),
        consumption_percentage=consumption_percentage(items),
        expiring_soon=expiring_soon(items, now, days),
    )
