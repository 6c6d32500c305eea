"""AI service backend base class, data types, and factory."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from ..models import FoodCategory, Recipe

if TYPE_CHECKING:
    from ..config import FrigozenConfig

T = TypeVar("T")


@dataclass
class ReceiptLine:
    """One product read off a receipt, already validated."""

    name: str
    category: FoodCategory
    shelf_life_days: int | None  # None when the model gave nothing usable
    quantity_label: str = "1 unit"
    numeric_quantity: int = 1


class AIBackend(ABC):
    """Abstract base for the generative AI service.

    Every response is untrusted: implementations pass raw model output
    through :mod:`frigozen.ai.payloads` before returning it.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    async def _call(self, coro: Awaitable[T]) -> T:
        if self._timeout:
            return await asyncio.wait_for(coro, self._timeout)
        return await coro

    @abstractmethod
    async def parse_receipt(self, image_path: str, language: str) -> list[ReceiptLine]:
        """Extract purchased food products from a receipt photo."""
        ...

    @abstractmethod
    async def translate_names(self, names: list[str], language: str) -> dict[str, str]:
        """Translate ingredient names, keyed by the exact original name.

        Empty input returns an empty mapping without calling the service.
        """
        ...

    @abstractmethod
    async def suggest_recipes(
        self, ingredient_names: list[str], language: str
    ) -> list[Recipe]:
        """Suggest recipes (without images) from the given ingredients."""
        ...

    @abstractmethod
    async def generate_recipe_image(self, title: str) -> str | None:
        """Return a data URL picturing the dish, or None."""
        ...


def create_backend(config: FrigozenConfig) -> AIBackend:
    """Create an AI backend based on configuration."""
    backend_name = config.ai.backend
    timeout = config.ai.timeout_seconds

    match backend_name:
        case "gemini":
            from .gemini import GeminiBackend

            return GeminiBackend(
                api_key=config.ai.gemini.api_key,
                model=config.ai.gemini.model,
                image_model=config.ai.gemini.image_model,
                timeout=timeout,
            )
        case "claude":
            from .claude import ClaudeBackend

            return ClaudeBackend(
                api_key=config.ai.claude.api_key,
                model=config.ai.claude.model,
                timeout=timeout,
            )
        case _:
            raise ValueError(
                f"Backend IA inconnu : {backend_name!r} "
                f"(choisir parmi gemini / claude)"
            )
