"""Turn receipt photos and manual entries into new food items."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

from .ai import AIBackend, ReceiptLine
from .models import FoodCategory, FoodItem, parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_SHELF_LIFE_DAYS = 7


def items_from_receipt(
    lines: Iterable[ReceiptLine],
    now: datetime | None = None,
    default_shelf_life_days: int = DEFAULT_SHELF_LIFE_DAYS,
) -> list[FoodItem]:
    """Create one item per receipt line, expiring after its shelf life."""
    purchased = now or datetime.now(timezone.utc)
    items: list[FoodItem] = []
    for line in lines:
        days = line.shelf_life_days or default_shelf_life_days
        try:
            expiry = purchased + timedelta(days=days)
        except OverflowError:
            logger.warning(
                "Shelf life of %d days for %r out of range, using %d",
                days, line.name, default_shelf_life_days,
            )
            expiry = purchased + timedelta(days=default_shelf_life_days)
        items.append(
            FoodItem(
                name=line.name,
                category=line.category,
                purchase_date=purchased,
                expiry_date=expiry,
                quantity=line.quantity_label,
                current_quantity=line.numeric_quantity,
            )
        )
    return items


def manual_item(
    name: str,
    expiry: Any,
    quantity: int = 1,
    category: Any = FoodCategory.OTHER,
    now: datetime | None = None,
) -> FoodItem:
    """Build an item from the manual entry form.

    Raises:
        ValueError: If the name is blank, the quantity is below 1 or the
            expiry date cannot be parsed.
    """
    name = (name or "").strip()
    if not name:
        raise ValueError("le nom du produit est obligatoire")
    if quantity < 1:
        raise ValueError("la quantité doit être au moins 1")

    return FoodItem(
        name=name,
        category=FoodCategory.coerce(category),
        purchase_date=now or datetime.now(timezone.utc),
        expiry_date=parse_timestamp(expiry),
        quantity=f"{quantity} unit",
        current_quantity=quantity,
    )


class ReceiptScanner:
    """Parse receipt photos with the AI backend."""

    def __init__(
        self,
        backend: AIBackend,
        default_shelf_life_days: int = DEFAULT_SHELF_LIFE_DAYS,
    ) -> None:
        self._backend = backend
        self._default_shelf_life_days = default_shelf_life_days
        self._scanning = False

    @property
    def scanning(self) -> bool:
        return self._scanning

    async def scan(
        self, image_path: str, language: str, now: datetime | None = None
    ) -> list[FoodItem]:
        """Return new items read from the photo, or [] if parsing failed.

        A scan requested while another one is running is ignored.
        """
        if self._scanning:
            logger.warning("Receipt scan already running, %s ignored", image_path)
            return []
        self._scanning = True
        try:
            lines = await self._backend.parse_receipt(image_path, language)
        except Exception:
            logger.exception("Receipt parsing failed for %s", image_path)
            return []
        finally:
            self._scanning = False

        logger.info("Receipt %s: %d products detected", image_path, len(lines))
        return items_from_receipt(lines, now, self._default_shelf_life_days)
