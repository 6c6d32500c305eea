"""Data models for food items, recipes and users."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class FoodCategory(str, Enum):
    FRUITS_VEGGIES = "FRUITS_VEGGIES"
    DAIRY = "DAIRY"
    MEAT_FISH = "MEAT_FISH"
    PANTRY = "PANTRY"
    BEVERAGES = "BEVERAGES"
    FROZEN = "FROZEN"
    OTHER = "OTHER"

    @classmethod
    def coerce(cls, value: Any) -> FoodCategory:
        """Map any value onto the closed category set, defaulting to OTHER."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.OTHER


def new_item_id() -> str:
    return uuid.uuid4().hex[:9]


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Naive values are taken as UTC. ``Z`` suffixes are accepted.

    Raises:
        ValueError: If the value is not a datetime or a parseable string.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"invalid timestamp: {value!r}")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        raise ValueError(f"timestamp out of range: {value!r}") from None


def format_timestamp(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class FoodItem:
    """A tracked perishable unit or group of units."""

    name: str
    category: FoodCategory
    purchase_date: datetime
    expiry_date: datetime
    quantity: str = "1 unit"
    current_quantity: int = 1
    is_used: bool = False
    id: str = field(default_factory=new_item_id)

    def __post_init__(self) -> None:
        self.category = FoodCategory.coerce(self.category)
        self.current_quantity = max(int(self.current_quantity), 0)
        if self.is_used:
            self.current_quantity = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "purchaseDate": format_timestamp(self.purchase_date),
            "expiryDate": format_timestamp(self.expiry_date),
            "quantity": self.quantity,
            "currentQuantity": self.current_quantity,
            "isUsed": self.is_used,
        }

    @classmethod
    def from_dict(cls, data: Any) -> FoodItem:
        """Build an item from its stored JSON form.

        Raises:
            ValueError: If required fields are missing or malformed.
        """
        if not isinstance(data, dict):
            raise ValueError("food item must be an object")
        item_id = data.get("id")
        name = data.get("name")
        if not isinstance(item_id, str) or not item_id:
            raise ValueError("food item is missing an id")
        if not isinstance(name, str) or not name:
            raise ValueError("food item is missing a name")

        current = data.get("currentQuantity", 1)
        if isinstance(current, bool) or not isinstance(current, (int, float)):
            current = 1
        elif not math.isfinite(current):
            current = 1

        return cls(
            id=item_id,
            name=name,
            category=FoodCategory.coerce(data.get("category")),
            purchase_date=parse_timestamp(data.get("purchaseDate")),
            expiry_date=parse_timestamp(data.get("expiryDate")),
            quantity=str(data.get("quantity") or "1 unit"),
            current_quantity=int(current),
            is_used=data.get("isUsed") is True,
        )


@dataclass
class Recipe:
    title: str
    description: str = ""
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    prep_time: str = ""
    difficulty: str = ""
    image_url: str | None = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "prepTime": self.prep_time,
            "difficulty": self.difficulty,
            "imageUrl": self.image_url,
        }


@dataclass
class User:
    name: str
    email: str

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email}
