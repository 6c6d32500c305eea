"""SQLite-backed local storage for settings and the item snapshot."""

from .schema import ensure_schema
from .storage import (
    DARK_MODE_KEY,
    ITEMS_KEY,
    LANGUAGE_KEY,
    THEME_KEY,
    USER_KEY,
    LocalStorage,
)

__all__ = [
    "LocalStorage",
    "ensure_schema",
    "USER_KEY",
    "LANGUAGE_KEY",
    "DARK_MODE_KEY",
    "THEME_KEY",
    "ITEMS_KEY",
]
