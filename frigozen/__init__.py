"""Household food inventory tracker with AI receipt parsing and recipes."""

from .ai import AIBackend, ReceiptLine, create_backend
from .app import FrigozenApp
from .config import FrigozenConfig, load_config
from .db import LocalStorage
from .errors import InvalidDateError
from .inventory import InventoryStore
from .models import FoodCategory, FoodItem, Recipe, User
from .recipes import RecipeWorkflow, placeholder_image_url
from .scanner import ReceiptScanner, items_from_receipt, manual_item
from .state import AppState, View
from .translation import TranslationPass
from .views import (
    active_items,
    consumption_percentage,
    days_until_expiry,
    expiring_soon,
)
from .voice import PlaybackQueue, VoiceSession

__all__ = [
    "FrigozenApp",
    "FrigozenConfig",
    "load_config",
    "LocalStorage",
    "InventoryStore",
    "InvalidDateError",
    "FoodCategory",
    "FoodItem",
    "Recipe",
    "User",
    "AppState",
    "View",
    "AIBackend",
    "ReceiptLine",
    "create_backend",
    "ReceiptScanner",
    "items_from_receipt",
    "manual_item",
    "RecipeWorkflow",
    "placeholder_image_url",
    "TranslationPass",
    "active_items",
    "consumption_percentage",
    "days_until_expiry",
    "expiring_soon",
    "PlaybackQueue",
    "VoiceSession",
]
