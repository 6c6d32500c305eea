"""Claude API backend. Text and vision only, no image generation."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from ..models import Recipe
from . import AIBackend, ReceiptLine
from .payloads import parse_receipt_lines, parse_recipes, parse_translation_map
from .prompts import receipt_prompt, recipes_prompt, translate_prompt


class ClaudeBackend(AIBackend):
    """Talk to Anthropic's Claude through the anthropic SDK."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "claude-sonnet-4-5-20250929",
        timeout: float | None = None,
    ) -> None:
        super().__init__(timeout)
        self._api_key = api_key
        self._model = model

    async def _complete(self, content: list[dict]) -> str:
        if not self._api_key:
            raise ValueError(
                "Clé API Anthropic non configurée. "
                "Vérifiez le fichier de configuration ou la variable ANTHROPIC_API_KEY."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        response = await self._call(
            client.messages.create(
                model=self._model,
                max_tokens=4096,
                messages=[{"role": "user", "content": content}],
            )
        )
        return response.content[0].text

    async def parse_receipt(self, image_path: str, language: str) -> list[ReceiptLine]:
        data = Path(image_path).read_bytes()
        media_type = mimetypes.guess_type(image_path)[0] or "image/jpeg"
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": media_type,
                    "data": base64.standard_b64encode(data).decode(),
                },
            },
            {"type": "text", "text": receipt_prompt(language)},
        ]
        return parse_receipt_lines(await self._complete(content))

    async def translate_names(self, names: list[str], language: str) -> dict[str, str]:
        if not names:
            return {}
        text = await self._complete(
            [{"type": "text", "text": translate_prompt(names, language)}]
        )
        return parse_translation_map(text)

    async def suggest_recipes(
        self, ingredient_names: list[str], language: str
    ) -> list[Recipe]:
        text = await self._complete(
            [{"type": "text", "text": recipes_prompt(ingredient_names, language)}]
        )
        return parse_recipes(text)

    async def generate_recipe_image(self, title: str) -> str | None:
        return None
