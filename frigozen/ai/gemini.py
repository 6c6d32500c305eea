"""Gemini API backend for receipt parsing, translation and recipes."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from ..models import Recipe
from . import AIBackend, ReceiptLine
from .payloads import parse_receipt_lines, parse_recipes, parse_translation_map
from .prompts import image_prompt, receipt_prompt, recipes_prompt, translate_prompt

_JSON_CONFIG = {"response_mime_type": "application/json"}
_IMAGE_MODALITIES = ["TEXT", "IMAGE"]


class GeminiBackend(AIBackend):
    """Talk to Google Gemini.

    Text and vision calls go through google-generativeai; dish pictures go
    through the google-genai client, which can request image output.
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.0-flash",
        image_model: str = "gemini-2.5-flash-image",
        timeout: float | None = None,
    ) -> None:
        super().__init__(timeout)
        self._api_key = api_key
        self._model = model
        self._image_model = image_model

    def _require_key(self) -> None:
        if not self._api_key:
            raise ValueError(
                "Clé API Gemini non configurée. "
                "Vérifiez le fichier de configuration ou la variable GEMINI_API_KEY."
            )

    def _genai(self):
        self._require_key()
        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        return genai

    async def _generate_json(self, contents) -> str:
        genai = self._genai()
        model = genai.GenerativeModel(self._model, generation_config=_JSON_CONFIG)
        response = await self._call(model.generate_content_async(contents))
        return response.text

    async def parse_receipt(self, image_path: str, language: str) -> list[ReceiptLine]:
        data = Path(image_path).read_bytes()
        mime_type = mimetypes.guess_type(image_path)[0] or "image/jpeg"
        parts = [
            {"mime_type": mime_type, "data": data},
            receipt_prompt(language),
        ]
        return parse_receipt_lines(await self._generate_json(parts))

    async def translate_names(self, names: list[str], language: str) -> dict[str, str]:
        if not names:
            return {}
        text = await self._generate_json(translate_prompt(names, language))
        return parse_translation_map(text)

    async def suggest_recipes(
        self, ingredient_names: list[str], language: str
    ) -> list[Recipe]:
        text = await self._generate_json(recipes_prompt(ingredient_names, language))
        return parse_recipes(text)

    def _image_client(self):
        """google-genai client; the image model needs the IMAGE response modality."""
        self._require_key()

        try:
            from google import genai
        except ImportError:
            raise ImportError(
                "google-genai SDK is required for recipe images: pip install google-genai"
            ) from None

        return genai, genai.Client(api_key=self._api_key)

    async def generate_recipe_image(self, title: str) -> str | None:
        genai, client = self._image_client()
        config = genai.types.GenerateContentConfig(
            response_modalities=_IMAGE_MODALITIES
        )
        response = await self._call(
            client.aio.models.generate_content(
                model=self._image_model,
                contents=image_prompt(title),
                config=config,
            )
        )

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return None
        for part in candidates[0].content.parts or []:
            blob = getattr(part, "inline_data", None)
            if blob is None or not blob.data:
                continue
            data = blob.data
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode()
            mime_type = blob.mime_type or "image/png"
            return f"data:{mime_type};base64,{data}"
        return None
