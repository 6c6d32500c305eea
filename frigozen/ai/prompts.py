"""Prompt templates shared by the AI backends."""

from __future__ import annotations

from ..i18n import language_name
from ..models import FoodCategory

_CATEGORIES = ", ".join(c.value for c in FoodCategory)

_RECEIPT_PROMPT = """\
Analyse ce ticket de caisse et extrais la liste des produits alimentaires achetés.
Réponds strictement en langue : {language}.

Réponds uniquement avec un tableau JSON (aucun autre texte) :
[
  {{"name": "nom du produit", "category": "CATÉGORIE", "shelfLifeDays": 7,
    "quantity": "1 unit", "numericQuantity": 1}}
]

La catégorie doit être choisie parmi : {categories}.
shelfLifeDays est la durée de conservation estimée en jours.
numericQuantity est le nombre d'unités achetées.
"""

_TRANSLATE_PROMPT = """\
Translate exactly these food ingredient names into {language}.
Return a JSON object where keys are the original names and values are the translations.
Return only the JSON object.
Names: {names}
"""

_RECIPES_PROMPT = """\
Ton rôle : chef expert anti-gaspi.

INGRÉDIENTS DISPONIBLES :
{ingredients}

CONSIGNE DE LANGUE :
- Tu dois répondre exclusivement en langue : {language}.
- Tous les champs du JSON (titre, description, ingrédients, instructions, temps,
  difficulté) doivent être rédigés dans cette langue.

FORMAT DE SORTIE : réponds uniquement avec un tableau JSON valide :
[
  {{"title": "...", "description": "...", "ingredients": ["..."],
    "instructions": ["..."], "prepTime": "...", "difficulty": "..."}}
]
"""

_IMAGE_PROMPT = (
    "High-quality close up of {title}, gourmet food photography, "
    "soft lighting, 4k, 16:9."
)


def receipt_prompt(language: str) -> str:
    return _RECEIPT_PROMPT.format(
        language=language_name(language), categories=_CATEGORIES
    )


def translate_prompt(names: list[str], language: str) -> str:
    return _TRANSLATE_PROMPT.format(
        language=language_name(language), names=", ".join(names)
    )


def recipes_prompt(ingredient_names: list[str], language: str) -> str:
    return _RECIPES_PROMPT.format(
        ingredients=", ".join(ingredient_names), language=language_name(language)
    )


def image_prompt(title: str) -> str:
    return _IMAGE_PROMPT.format(title=title)
