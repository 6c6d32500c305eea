"""Shared fixtures: temporary storage, a fake AI backend and item factory."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from frigozen.ai import AIBackend, ReceiptLine
from frigozen.db import LocalStorage
from frigozen.models import FoodCategory, FoodItem, Recipe

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_item(
    name: str = "Lait",
    days: float = 5,
    quantity: int = 1,
    category: FoodCategory = FoodCategory.DAIRY,
    is_used: bool = False,
    item_id: str | None = None,
) -> FoodItem:
    kwargs = {}
    if item_id is not None:
        kwargs["id"] = item_id
    return FoodItem(
        name=name,
        category=category,
        purchase_date=NOW - timedelta(days=1),
        expiry_date=NOW + timedelta(days=days),
        quantity=f"{quantity} unit",
        current_quantity=quantity,
        is_used=is_used,
        **kwargs,
    )


class FakeBackend(AIBackend):
    """In-memory AI backend recording every call."""

    def __init__(self) -> None:
        super().__init__()
        self.receipt_lines: list[ReceiptLine] = []
        self.translations: dict[str, str] = {}
        self.recipes: list[Recipe] = []
        self.images: dict[str, str | None] = {}
        self.fail_images: set[str] = set()
        self.error: Exception | None = None
        self.calls: list[tuple] = []

    async def parse_receipt(self, image_path, language):
        self.calls.append(("parse_receipt", image_path, language))
        if self.error:
            raise self.error
        return list(self.receipt_lines)

    async def translate_names(self, names, language):
        self.calls.append(("translate_names", list(names), language))
        if not names:
            return {}
        if self.error:
            raise self.error
        return {n: self.translations[n] for n in names if n in self.translations}

    async def suggest_recipes(self, ingredient_names, language):
        self.calls.append(("suggest_recipes", list(ingredient_names), language))
        if self.error:
            raise self.error
        return list(self.recipes)

    async def generate_recipe_image(self, title):
        self.calls.append(("generate_recipe_image", title))
        if title in self.fail_images:
            raise RuntimeError("image model unavailable")
        return self.images.get(title)


@pytest.fixture
def storage(tmp_path):
    """Temporary LocalStorage."""
    s = LocalStorage(db_path=tmp_path / "frigozen.db")
    yield s
    s.close()


@pytest.fixture
def backend():
    return FakeBackend()
