"""Display languages and the small label catalogue used by the CLI."""

from __future__ import annotations

from .models import FoodCategory

LANGUAGES = ("fr", "en", "ar")
DEFAULT_LANGUAGE = "fr"

# Names used inside AI prompts
LANGUAGE_NAMES: dict[str, str] = {
    "fr": "Français",
    "en": "English",
    "ar": "Arabic (العربية)",
}

_LABELS: dict[str, dict[str, str]] = {
    "fr": {
        "expired": "Expiré",
        "today": "Expire aujourd'hui",
        "tomorrow": "Expire demain",
        "in_days": "Expire dans {days} j",
        "used": "Consommé",
        "welcome": "Bonjour {name}",
        "subtitle": "{count} produits dans votre frigo",
        "expiring_title": "À consommer vite",
        "stat_consumed": "Consommés",
        "stat_avoided": "Gaspillages évités",
        "empty_fridge": "Votre frigo est vide",
    },
    "en": {
        "expired": "Expired",
        "today": "Expires today",
        "tomorrow": "Expires tomorrow",
        "in_days": "Expires in {days} d",
        "used": "Used",
        "welcome": "Hello {name}",
        "subtitle": "{count} products in your fridge",
        "expiring_title": "Use soon",
        "stat_consumed": "Consumed",
        "stat_avoided": "Waste avoided",
        "empty_fridge": "Your fridge is empty",
    },
    "ar": {
        "expired": "منتهي الصلاحية",
        "today": "ينتهي اليوم",
        "tomorrow": "ينتهي غدًا",
        "in_days": "ينتهي خلال {days} يوم",
        "used": "مستهلك",
        "welcome": "مرحبًا {name}",
        "subtitle": "{count} منتجات في ثلاجتك",
        "expiring_title": "استهلك قريبًا",
        "stat_consumed": "مستهلكة",
        "stat_avoided": "هدر تم تجنبه",
        "empty_fridge": "ثلاجتك فارغة",
    },
}

_CATEGORY_LABELS: dict[str, dict[FoodCategory, str]] = {
    "fr": {
        FoodCategory.FRUITS_VEGGIES: "Fruits & Légumes",
        FoodCategory.DAIRY: "Produits laitiers",
        FoodCategory.MEAT_FISH: "Viande & Poisson",
        FoodCategory.PANTRY: "Épicerie",
        FoodCategory.BEVERAGES: "Boissons",
        FoodCategory.FROZEN: "Surgelés",
        FoodCategory.OTHER: "Autre",
    },
    "en": {
        FoodCategory.FRUITS_VEGGIES: "Fruits & Veggies",
        FoodCategory.DAIRY: "Dairy",
        FoodCategory.MEAT_FISH: "Meat & Fish",
        FoodCategory.PANTRY: "Pantry",
        FoodCategory.BEVERAGES: "Beverages",
        FoodCategory.FROZEN: "Frozen",
        FoodCategory.OTHER: "Other",
    },
    "ar": {
        FoodCategory.FRUITS_VEGGIES: "فواكه وخضروات",
        FoodCategory.DAIRY: "ألبان",
        FoodCategory.MEAT_FISH: "لحوم وأسماك",
        FoodCategory.PANTRY: "مؤن",
        FoodCategory.BEVERAGES: "مشروبات",
        FoodCategory.FROZEN: "مجمدات",
        FoodCategory.OTHER: "أخرى",
    },
}


def normalize_language(value: str | None) -> str:
    if value in LANGUAGES:
        return value
    return DEFAULT_LANGUAGE


def language_name(language: str) -> str:
    return LANGUAGE_NAMES[normalize_language(language)]


def label(language: str, key: str, **kwargs: object) -> str:
    """Look up a label, falling back to French, then to the key itself."""
    catalogue = _LABELS[normalize_language(language)]
    text = catalogue.get(key) or _LABELS[DEFAULT_LANGUAGE].get(key, key)
    return text.format(**kwargs) if kwargs else text


def category_label(language: str, category: FoodCategory) -> str:
    return _CATEGORY_LABELS[normalize_language(language)][FoodCategory.coerce(category)]
