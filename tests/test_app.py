"""Tests for the application facade."""

from datetime import datetime, timedelta, timezone

import pytest

from frigozen.ai import ReceiptLine
from frigozen.app import FrigozenApp
from frigozen.config import load_config
from frigozen.db import LANGUAGE_KEY
from frigozen.models import FoodCategory, FoodItem, Recipe
from frigozen.state import View
from frigozen.voice import PlaybackQueue


@pytest.fixture
def app(storage, backend):
    return FrigozenApp(load_config(), storage=storage, backend=backend)


class TestInventoryFlow:
    @pytest.mark.asyncio
    async def test_scan_adds_items(self, app, backend):
        backend.receipt_lines = [
            ReceiptLine("Lait", FoodCategory.DAIRY, 5),
            ReceiptLine("Pommes", FoodCategory.FRUITS_VEGGIES, None, "1 kg", 6),
        ]

        added = await app.scan_receipt("/tmp/ticket.jpg")

        assert [i.name for i in added] == ["Lait", "Pommes"]
        assert [i.name for i in app.active_items()] == ["Lait", "Pommes"]
        assert app.state.view is View.FRIDGE

    @pytest.mark.asyncio
    async def test_failed_scan_adds_nothing(self, app, backend):
        backend.error = RuntimeError("service down")

        assert await app.scan_receipt("/tmp/ticket.jpg") == []
        assert len(app.store) == 0
        assert app.state.view is View.SCAN

    def test_manual_entry_and_use(self, app):
        item = app.add_manual("Yaourt", "2030-01-01", 2, "DAIRY")

        app.mark_used(item.id, consume_all=False)
        assert app.store.get(item.id).current_quantity == 1

        app.mark_used(item.id, consume_all=False)
        assert app.store.get(item.id).is_used is True
        assert app.active_items() == []

    def test_state_survives_restart(self, app, storage, backend):
        item = app.add_manual("Yaourt", "2030-01-01")
        app.update_expiry(item.id, "2031-06-01")

        reopened = FrigozenApp(load_config(), storage=storage, backend=backend)
        assert reopened.store.get(item.id).expiry_date.year == 2031

    def test_clear_fridge(self, app):
        app.add_manual("Yaourt", "2030-01-01")
        app.clear_fridge()
        assert len(app.store) == 0

    def test_dashboard_uses_configured_window(self, storage, backend):
        config = load_config()
        config.inventory.expiring_soon_days = 10
        app = FrigozenApp(config, storage=storage, backend=backend)
        now = datetime.now(timezone.utc)
        app.store.add_items([
            FoodItem(
                name="Pain",
                category=FoodCategory.PANTRY,
                purchase_date=now,
                expiry_date=now + timedelta(days=8),
            )
        ])

        summary = app.dashboard(now)

        assert [i.name for i in summary.expiring_soon] == ["Pain"]
        assert app.state.view is View.DASHBOARD


class TestLanguage:
    @pytest.mark.asyncio
    async def test_change_language_translates(self, app, backend, storage):
        app.add_manual("Lait", "2030-01-01")
        backend.translations = {"Lait": "Milk"}

        renamed = await app.change_language("en")

        assert renamed == 1
        assert app.store.names() == ["Milk"]
        assert storage.get(LANGUAGE_KEY) == "en"

    @pytest.mark.asyncio
    async def test_same_language_does_nothing(self, app, backend):
        app.add_manual("Lait", "2030-01-01")

        assert await app.change_language("fr") == 0
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_unknown_language_rejected(self, app):
        with pytest.raises(ValueError):
            await app.change_language("de")


class TestRecipes:
    @pytest.mark.asyncio
    async def test_empty_fridge(self, app, backend):
        assert await app.generate_recipes() == []
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_uses_active_item_names(self, app, backend):
        used = app.add_manual("Jambon", "2030-01-01")
        app.mark_used(used.id)
        app.add_manual("Oeufs", "2030-01-01")
        backend.recipes = [Recipe(title="Omelette")]

        recipes = await app.generate_recipes()

        assert [r.title for r in recipes] == ["Omelette"]
        assert ("suggest_recipes", ["Oeufs"], "fr") in backend.calls
        assert app.state.view is View.RECIPES


class TestVoice:
    def test_session_uses_active_items_and_language(self, app):
        used = app.add_manual("Jambon", "2030-01-01")
        app.mark_used(used.id)
        app.add_manual("Oeufs", "2030-01-01")
        app.state.set_language("en")

        session = app.voice_session()

        assert "Oeufs" in session.system_instruction
        assert "Jambon" not in session.system_instruction
        assert "English" in session.system_instruction

    def test_session_with_custom_queue(self, app):
        queue = PlaybackQueue(sample_rate=16000)
        assert app.voice_session(queue=queue).queue is queue


def test_scanner_shared_between_scans(app):
    assert app.scanner is app.scanner
