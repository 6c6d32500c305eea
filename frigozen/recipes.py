"""Recipe suggestions from current inventory, with generated pictures."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from urllib.parse import quote

from .ai import AIBackend
from .models import Recipe

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_URL = "https://picsum.photos/seed/{seed}/800/450"


def placeholder_image_url(title: str, template: str = DEFAULT_PLACEHOLDER_URL) -> str:
    """Deterministic stand-in picture for a recipe title."""
    return template.format(seed=quote(title, safe=""))


class RecipeWorkflow:
    """Holds the latest recipe suggestions.

    Only one generation runs at a time: a request made while another is
    pending is ignored and the current list is returned unchanged.
    """

    def __init__(
        self,
        backend: AIBackend,
        placeholder_url: str = DEFAULT_PLACEHOLDER_URL,
        generate_images: bool = True,
    ) -> None:
        self._backend = backend
        self._placeholder_url = placeholder_url
        self._generate_images = generate_images
        self._recipes: list[Recipe] = []
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def recipes(self) -> list[Recipe]:
        return list(self._recipes)

    async def generate(self, ingredient_names: list[str], language: str) -> list[Recipe]:
        if not ingredient_names:
            return self.recipes
        if self._busy:
            logger.warning("Recipe generation already running, request ignored")
            return self.recipes

        self._busy = True
        try:
            suggested = await self._backend.suggest_recipes(ingredient_names, language)
            with_images = await asyncio.gather(
                *(self._attach_image(r) for r in suggested)
            )
            self._recipes = list(with_images)
        except Exception:
            logger.exception("Recipe suggestion failed")
        finally:
            self._busy = False
        return self.recipes

    async def _attach_image(self, recipe: Recipe) -> Recipe:
        image_url: str | None = None
        if self._generate_images:
            try:
                image_url = await self._backend.generate_recipe_image(recipe.title)
            except Exception:
                logger.warning("Image generation failed for %r", recipe.title, exc_info=True)
        return replace(
            recipe,
            image_url=image_url or placeholder_image_url(recipe.title, self._placeholder_url),
        )
