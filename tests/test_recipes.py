"""Tests for the recipe suggestion workflow."""

import asyncio

import pytest

from frigozen.models import Recipe
from frigozen.recipes import RecipeWorkflow, placeholder_image_url


def test_placeholder_url_encodes_title():
    url = placeholder_image_url("Soupe à l'oignon")
    assert url == "https://picsum.photos/seed/Soupe%20%C3%A0%20l%27oignon/800/450"


def test_placeholder_custom_template():
    assert placeholder_image_url("Tarte", "https://img/{seed}.png") == "https://img/Tarte.png"


class TestRecipeWorkflow:
    @pytest.mark.asyncio
    async def test_images_attached(self, backend):
        backend.recipes = [Recipe(title="Omelette"), Recipe(title="Salade")]
        backend.images = {"Omelette": "data:image/png;base64,AAA"}
        workflow = RecipeWorkflow(backend)

        recipes = await workflow.generate(["oeufs"], "fr")

        assert [r.title for r in recipes] == ["Omelette", "Salade"]
        assert recipes[0].image_url == "data:image/png;base64,AAA"
        assert recipes[1].image_url == placeholder_image_url("Salade")
        assert workflow.busy is False

    @pytest.mark.asyncio
    async def test_image_failure_uses_placeholder(self, backend):
        backend.recipes = [Recipe(title="Omelette")]
        backend.fail_images = {"Omelette"}
        workflow = RecipeWorkflow(backend)

        [recipe] = await workflow.generate(["oeufs"], "fr")

        assert recipe.image_url == placeholder_image_url("Omelette")

    @pytest.mark.asyncio
    async def test_images_disabled(self, backend):
        backend.recipes = [Recipe(title="Omelette")]
        workflow = RecipeWorkflow(backend, generate_images=False)

        [recipe] = await workflow.generate(["oeufs"], "fr")

        assert recipe.image_url == placeholder_image_url("Omelette")
        assert not any(c[0] == "generate_recipe_image" for c in backend.calls)

    @pytest.mark.asyncio
    async def test_empty_ingredients_skips_service(self, backend):
        workflow = RecipeWorkflow(backend)
        assert await workflow.generate([], "fr") == []
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_list(self, backend):
        backend.recipes = [Recipe(title="Omelette")]
        workflow = RecipeWorkflow(backend)
        await workflow.generate(["oeufs"], "fr")

        backend.error = RuntimeError("quota")
        recipes = await workflow.generate(["oeufs"], "fr")

        assert [r.title for r in recipes] == ["Omelette"]
        assert workflow.busy is False

    @pytest.mark.asyncio
    async def test_concurrent_request_ignored(self, backend):
        release = asyncio.Event()
        original = backend.suggest_recipes

        async def slow_suggest(names, language):
            await release.wait()
            return await original(names, language)

        backend.suggest_recipes = slow_suggest
        backend.recipes = [Recipe(title="Omelette")]
        workflow = RecipeWorkflow(backend)

        first = asyncio.create_task(workflow.generate(["oeufs"], "fr"))
        await asyncio.sleep(0)
        assert workflow.busy is True

        second = await workflow.generate(["oeufs"], "fr")
        assert second == []

        release.set()
        assert [r.title for r in await first] == ["Omelette"]
        suggest_calls = [c for c in backend.calls if c[0] == "suggest_recipes"]
        assert len(suggest_calls) == 1
