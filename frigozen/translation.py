"""Rename inventory items when the display language changes.

Item names are read when the request is issued and the returned mapping is
applied to whatever the store holds when the answer arrives, so items added
in between are left alone. A newer language change cancels an older
request that has not finished yet.
"""

from __future__ import annotations

import asyncio
import logging

from .ai import AIBackend
from .inventory import InventoryStore

logger = logging.getLogger(__name__)


class TranslationPass:
    def __init__(
        self,
        store: InventoryStore,
        backend: AIBackend,
        home_language: str | None = None,
    ) -> None:
        self._store = store
        self._backend = backend
        self._applied = home_language
        self._task: asyncio.Task | None = None
        self._task_language: str | None = None

    @property
    def applied_language(self) -> str | None:
        return self._applied

    @property
    def pending_language(self) -> str | None:
        return self._task_language if self._task is not None else None

    def on_language_change(self, language: str) -> asyncio.Task | None:
        """Start translating item names into ``language`` if needed.

        The first language seen is the starting point and triggers nothing.
        Must be called from a running event loop.

        Returns:
            The task doing the translation, or None when nothing was issued.
        """
        if self._applied is None:
            self._applied = language
            return None

        if self._task is not None:
            if self._task_language == language:
                return self._task
            logger.debug("Superseding translation to %s", self._task_language)
            self._task.cancel()
            self._clear_task()

        if language == self._applied:
            return None

        names = list(dict.fromkeys(self._store.names()))
        if not names:
            self._applied = language
            return None

        task = asyncio.get_running_loop().create_task(self._translate(language, names))
        self._task = task
        self._task_language = language
        task.add_done_callback(self._on_done)
        return task

    async def wait(self) -> int:
        """Wait for the pending translation. Returns the number of renamed items."""
        task = self._task
        if task is None:
            return 0
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled():
                return 0
            raise

    async def _translate(self, language: str, names: list[str]) -> int:
        try:
            mapping = await self._backend.translate_names(names, language)
        except Exception:
            logger.exception("Translation to %s failed, names unchanged", language)
            return 0

        renamed = self._store.bulk_rename(mapping)
        self._applied = language
        logger.info("Translated %d/%d items to %s", renamed, len(names), language)
        return renamed

    def _on_done(self, task: asyncio.Task) -> None:
        if task is self._task:
            self._clear_task()

    def _clear_task(self) -> None:
        self._task = None
        self._task_language = None
