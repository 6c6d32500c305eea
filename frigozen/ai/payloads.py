"""Validation of raw AI responses before they reach the data model."""

from __future__ import annotations

import json
import math
from typing import Any

from ..models import FoodCategory, Recipe
from . import ReceiptLine

# Longest shelf life accepted from a model; larger values are clamped.
MAX_SHELF_LIFE_DAYS = 3650


def strip_fences(text: str) -> str:
    """Remove markdown code fences wrapped around a JSON payload."""
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def load_json(text: str | None) -> Any:
    """Parse a model's JSON answer.

    Raises:
        ValueError: If the text is not valid JSON.
    """
    cleaned = strip_fences(text or "")
    if not cleaned:
        return None
    return json.loads(cleaned)


def _number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return float(value)


def _text(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [s for s in (_text(v) for v in value) if s]


def coerce_receipt_line(raw: Any) -> ReceiptLine | None:
    if not isinstance(raw, dict):
        return None
    name = _text(raw.get("name"))
    if not name:
        return None

    shelf_life = _number(raw.get("shelfLifeDays"))
    shelf_life_days = None
    if shelf_life is not None and shelf_life > 0:
        shelf_life_days = max(int(min(shelf_life, MAX_SHELF_LIFE_DAYS)), 1)

    numeric = _number(raw.get("numericQuantity"))
    numeric_quantity = max(int(numeric), 0) if numeric is not None else 1

    return ReceiptLine(
        name=name,
        category=FoodCategory.coerce(raw.get("category")),
        shelf_life_days=shelf_life_days,
        quantity_label=_text(raw.get("quantity")) or "1 unit",
        numeric_quantity=numeric_quantity,
    )


def parse_receipt_lines(text: str | None) -> list[ReceiptLine]:
    data = load_json(text)
    if not isinstance(data, list):
        return []
    lines = (coerce_receipt_line(entry) for entry in data)
    return [line for line in lines if line is not None]


def coerce_recipe(raw: Any) -> Recipe | None:
    if not isinstance(raw, dict):
        return None
    title = _text(raw.get("title"))
    if not title:
        return None
    return Recipe(
        title=title,
        description=_text(raw.get("description")),
        ingredients=_text_list(raw.get("ingredients")),
        instructions=_text_list(raw.get("instructions")),
        prep_time=_text(raw.get("prepTime")),
        difficulty=_text(raw.get("difficulty")),
    )


def parse_recipes(text: str | None) -> list[Recipe]:
    data = load_json(text)
    if not isinstance(data, list):
        return []
    recipes = (coerce_recipe(entry) for entry in data)
    return [r for r in recipes if r is not None]


def parse_translation_map(text: str | None) -> dict[str, str]:
    """Keep only string keys mapped to non-empty string translations."""
    data = load_json(text)
    if not isinstance(data, dict):
        return {}
    return {
        key: value.strip()
        for key, value in data.items()
        if isinstance(key, str) and isinstance(value, str) and value.strip()
    }
