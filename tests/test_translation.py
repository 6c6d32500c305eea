"""Tests for item name translation on language change."""

import asyncio

import pytest

from conftest import make_item
from frigozen.inventory import InventoryStore
from frigozen.translation import TranslationPass


@pytest.fixture
def store():
    return InventoryStore([make_item(name="Lait"), make_item(name="Pain")])


def _gated_translate(backend, gated_language):
    """Replace translate_names with one that waits on an event for one language."""
    gate = asyncio.Event()

    async def translate(names, language):
        backend.calls.append(("translate_names", list(names), language))
        if language == gated_language:
            await gate.wait()
        return {n: f"{n}-{language}" for n in names}

    backend.translate_names = translate
    return gate


class TestTranslationPass:
    @pytest.mark.asyncio
    async def test_first_language_is_home(self, store, backend):
        translation = TranslationPass(store, backend)
        assert translation.on_language_change("fr") is None
        assert translation.applied_language == "fr"
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_unchanged_language_issues_nothing(self, store, backend):
        translation = TranslationPass(store, backend, home_language="fr")
        assert translation.on_language_change("fr") is None
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_renames_items(self, store, backend):
        backend.translations = {"Lait": "Milk", "Pain": "Bread"}
        translation = TranslationPass(store, backend, home_language="fr")

        task = translation.on_language_change("en")
        assert translation.pending_language == "en"
        renamed = await translation.wait()

        assert task is not None
        assert renamed == 2
        assert sorted(store.names()) == ["Bread", "Milk"]
        assert translation.applied_language == "en"
        assert translation.pending_language is None

    @pytest.mark.asyncio
    async def test_partial_mapping(self, store, backend):
        backend.translations = {"Lait": "Milk"}
        translation = TranslationPass(store, backend, home_language="fr")

        translation.on_language_change("en")
        assert await translation.wait() == 1
        assert sorted(store.names()) == ["Milk", "Pain"]

    @pytest.mark.asyncio
    async def test_item_added_during_translation_is_kept(self, store, backend):
        gate = _gated_translate(backend, "en")
        translation = TranslationPass(store, backend, home_language="fr")

        translation.on_language_change("en")
        await asyncio.sleep(0)
        store.add_items([make_item(name="Beurre")])
        gate.set()
        await translation.wait()

        assert sorted(store.names()) == ["Beurre", "Lait-en", "Pain-en"]
        assert backend.calls[0][1] == ["Lait", "Pain"]

    @pytest.mark.asyncio
    async def test_same_pending_language_reuses_task(self, store, backend):
        gate = _gated_translate(backend, "en")
        translation = TranslationPass(store, backend, home_language="fr")

        first = translation.on_language_change("en")
        second = translation.on_language_change("en")
        assert first is second

        gate.set()
        await translation.wait()
        assert len(backend.calls) == 1

    @pytest.mark.asyncio
    async def test_newer_language_supersedes(self, store, backend):
        _gated_translate(backend, "en")
        translation = TranslationPass(store, backend, home_language="fr")

        first = translation.on_language_change("en")
        await asyncio.sleep(0)
        translation.on_language_change("ar")
        renamed = await translation.wait()

        with pytest.raises(asyncio.CancelledError):
            await first
        assert renamed == 2
        assert sorted(store.names()) == ["Lait-ar", "Pain-ar"]
        assert translation.applied_language == "ar"

    @pytest.mark.asyncio
    async def test_failure_leaves_names(self, store, backend):
        backend.error = RuntimeError("quota")
        translation = TranslationPass(store, backend, home_language="fr")

        translation.on_language_change("en")
        assert await translation.wait() == 0
        assert sorted(store.names()) == ["Lait", "Pain"]
        assert translation.applied_language == "fr"

    @pytest.mark.asyncio
    async def test_empty_store(self, backend):
        translation = TranslationPass(InventoryStore(), backend, home_language="fr")
        assert translation.on_language_change("en") is None
        assert translation.applied_language == "en"
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_wait_without_pending(self, store, backend):
        translation = TranslationPass(store, backend, home_language="fr")
        assert await translation.wait() == 0
