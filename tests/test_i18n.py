"""Tests for labels and language helpers."""

from frigozen.i18n import category_label, label, language_name, normalize_language
from frigozen.models import FoodCategory


def test_normalize_language():
    assert normalize_language("en") == "en"
    assert normalize_language("de") == "fr"
    assert normalize_language(None) == "fr"


def test_language_name():
    assert language_name("en") == "English"
    assert language_name("xx") == "Français"


def test_label_formatting():
    assert label("fr", "in_days", days=3) == "Expire dans 3 j"
    assert label("en", "welcome", name="Sam") == "Hello Sam"


def test_label_unknown_key():
    assert label("en", "nope") == "nope"


def test_category_label():
    assert category_label("en", FoodCategory.DAIRY) == "Dairy"
    assert category_label("fr", "BANANA") == "Autre"
