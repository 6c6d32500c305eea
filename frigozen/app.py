"""Wires storage, state, inventory and the AI workflows together."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from .ai import AIBackend, create_backend
from .config import FrigozenConfig
from .db import LocalStorage
from .inventory import InventoryStore
from .models import FoodCategory, FoodItem, Recipe
from .recipes import RecipeWorkflow
from .scanner import ReceiptScanner, manual_item
from .state import AppState, View
from .translation import TranslationPass
from .views import DashboardSummary, active_items, dashboard_summary, expiring_soon
from .voice import PlaybackQueue, ScheduledChunk, VoiceSession

logger = logging.getLogger(__name__)


class FrigozenApp:
    """One user session on one device."""

    def __init__(
        self,
        config: FrigozenConfig,
        storage: LocalStorage | None = None,
        backend: AIBackend | None = None,
    ) -> None:
        self.config = config
        self.storage = storage or LocalStorage(config.storage.path)
        self.state = AppState.load(self.storage)
        self.store = InventoryStore.load(self.storage)
        self._backend = backend
        self._translation: TranslationPass | None = None
        self._recipes: RecipeWorkflow | None = None
        self._scanner: ReceiptScanner | None = None

    @property
    def backend(self) -> AIBackend:
        if self._backend is None:
            self._backend = create_backend(self.config)
        return self._backend

    @property
    def translation(self) -> TranslationPass:
        if self._translation is None:
            self._translation = TranslationPass(
                self.store, self.backend, home_language=self.state.language
            )
        return self._translation

    @property
    def recipe_workflow(self) -> RecipeWorkflow:
        if self._recipes is None:
            self._recipes = RecipeWorkflow(
                self.backend,
                placeholder_url=self.config.recipes.placeholder_url,
                generate_images=self.config.recipes.generate_images,
            )
        return self._recipes

    @property
    def scanner(self) -> ReceiptScanner:
        if self._scanner is None:
            self._scanner = ReceiptScanner(
                self.backend, self.config.inventory.default_shelf_life_days
            )
        return self._scanner

    def close(self) -> None:
        self.storage.close()

    def active_items(self) -> list[FoodItem]:
        return active_items(self.store)

    def expiring_soon(self, now: datetime | None = None) -> list[FoodItem]:
        return expiring_soon(self.store, now, self.config.inventory.expiring_soon_days)

    def dashboard(self, now: datetime | None = None) -> DashboardSummary:
        self.state.view = View.DASHBOARD
        return dashboard_summary(
            self.store, now, self.config.inventory.expiring_soon_days
        )

    async def scan_receipt(self, image_path: str) -> list[FoodItem]:
        self.state.view = View.SCAN
        items = await self.scanner.scan(image_path, self.state.language)
        added = self.store.add_items(items)
        if added:
            self.state.view = View.FRIDGE
        return added

    def add_manual(
        self,
        name: str,
        expiry: Any,
        quantity: int = 1,
        category: Any = FoodCategory.OTHER,
    ) -> FoodItem:
        item = manual_item(name, expiry, quantity, category)
        self.store.add_items([item])
        self.state.view = View.FRIDGE
        return item

    def mark_used(self, item_id: str, consume_all: bool = True) -> FoodItem | None:
        return self.store.mark_used(item_id, consume_all)

    def update_expiry(self, item_id: str, new_date: Any) -> FoodItem | None:
        return self.store.update_expiry(item_id, new_date)

    def clear_fridge(self) -> None:
        self.store.clear_all()
        logger.info("Inventory cleared")

    async def change_language(self, language: str, wait: bool = True) -> int:
        """Switch language and translate item names.

        Returns:
            Number of items renamed (0 when not waiting).
        """
        translation = self.translation
        self.state.set_language(language)
        translation.on_language_change(language)
        if not wait:
            return 0
        return await translation.wait()

    async def generate_recipes(self) -> list[Recipe]:
        names = [item.name for item in self.active_items()]
        if not names:
            return self.recipe_workflow.recipes
        self.state.view = View.RECIPES
        return await self.recipe_workflow.generate(names, self.state.language)

    def voice_session(
        self,
        queue: PlaybackQueue | None = None,
        on_interrupt: Callable[[list[ScheduledChunk]], None] | None = None,
    ) -> VoiceSession:
        """Voice chat primed with the active items and the current language."""
        names = [item.name for item in self.active_items()]
        return VoiceSession(names, self.state.language, queue, on_interrupt)
