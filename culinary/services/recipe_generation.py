from __future__ import annotations

import json
import logging
from typing import Optional

from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from culinary.app.domain.models import SearchFilters, SearchMode
from culinary.services.errors import GenerationError, RateLimitedError
from culinary.services.gemini_client import GeminiClient, is_rate_limited_error
from culinary.services.types import RecipeRecord

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.4

RECIPE_REQUIRED_FIELDS = [
    "title",
    "description",
    "prepTime",
    "cookTime",
    "servings",
    "ingredients",
    "instructions",
    "nutrition",
    "difficulty",
    "cuisine",
    "rating",
    "reviewCount",
]

RECIPE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "title": types.Schema(type=types.Type.STRING, description="Name of the dish"),
        "description": types.Schema(
            type=types.Type.STRING,
            description="A short, appetizing description of the dish",
        ),
        "prepTime": types.Schema(type=types.Type.STRING, description="Preparation time (e.g., '15 mins')"),
        "cookTime": types.Schema(type=types.Type.STRING, description="Cooking time (e.g., '45 mins')"),
        "servings": types.Schema(type=types.Type.INTEGER, description="Number of servings"),
        "difficulty": types.Schema(type=types.Type.STRING, description="Difficulty level (Easy, Medium, Hard)"),
        "cuisine": types.Schema(type=types.Type.STRING, description="Type of cuisine (Italian, Indian, etc.)"),
        "rating": types.Schema(
            type=types.Type.NUMBER,
            description="An estimated average rating for this dish from 1.0 to 5.0 (e.g. 4.8)",
        ),
        "reviewCount": types.Schema(
            type=types.Type.INTEGER,
            description="An estimated number of reviews for this popular dish",
        ),
        "ingredients": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "item": types.Schema(type=types.Type.STRING),
                    "amount": types.Schema(type=types.Type.STRING),
                    "notes": types.Schema(type=types.Type.STRING, nullable=True),
                },
                required=["item", "amount"],
            ),
        ),
        "instructions": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "stepNumber": types.Schema(type=types.Type.INTEGER),
                    "instruction": types.Schema(type=types.Type.STRING),
                    "tip": types.Schema(type=types.Type.STRING, nullable=True),
                },
                required=["stepNumber", "instruction"],
            ),
        ),
        "nutrition": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "calories": types.Schema(type=types.Type.INTEGER),
                "protein": types.Schema(type=types.Type.STRING),
                "carbs": types.Schema(type=types.Type.STRING),
                "fat": types.Schema(type=types.Type.STRING),
            },
            required=["calories", "protein", "carbs", "fat"],
        ),
    },
    required=RECIPE_REQUIRED_FIELDS,
)


def _filter_sentences(filters: Optional[SearchFilters]) -> list[str]:
    if filters is None:
        return []
    sentences: list[str] = []
    if filters.has_difficulty:
        sentences.append(f"Difficulty level must be: {filters.difficulty}.")
    if filters.dietary:
        sentences.append(f"Dietary requirements: Must be {', '.join(filters.dietary)}.")
    return sentences


def build_recipe_prompt(
    query: str,
    mode: SearchMode | str = SearchMode.DISH,
    filters: Optional[SearchFilters] = None,
) -> str:
    constraints = _filter_sentences(filters)

    if SearchMode(mode) == SearchMode.INGREDIENTS:
        sections = [
            f"I have the following ingredients: {query}.",
            "Please suggest a creative and delicious dish I can cook using these "
            "(assuming basic pantry staples like oil, salt, pepper, flour are available).",
            *constraints,
            "Create a detailed recipe for that dish. Name the dish creatively.",
        ]
    else:
        sections = [
            f"Create a detailed and delicious recipe for: {query}.",
            *constraints,
            "Ensure the instructions are clear and easy to follow.",
        ]
    return " ".join(sections)


def parse_recipe(text: str | None) -> RecipeRecord:
    """Turn the model's JSON text into a RecipeRecord or raise GenerationError."""
    if not text or not text.strip():
        raise GenerationError("No content generated")
    try:
        payload = json.loads(text)
    except ValueError as error:
        raise GenerationError(f"Model returned invalid JSON: {error}") from error
    if not isinstance(payload, dict):
        raise GenerationError("Model returned JSON that is not an object")
    try:
        return RecipeRecord.model_validate(payload)
    except ValidationError as error:
        raise GenerationError(f"Model returned a non-conforming recipe: {error.error_count()} error(s)") from error


class RecipeGenerationClient:
    def __init__(self, gemini: GeminiClient, temperature: float = DEFAULT_TEMPERATURE) -> None:
        self._gemini = gemini
        self.temperature = temperature

    async def generate(
        self,
        query: str,
        mode: SearchMode | str = SearchMode.DISH,
        filters: Optional[SearchFilters] = None,
    ) -> RecipeRecord:
        prompt = build_recipe_prompt(query, mode, filters)
        try:
            text = await self._gemini.generate_json(prompt, RECIPE_SCHEMA, self.temperature)
        except genai_errors.APIError as err:
            if is_rate_limited_error(err):
                raise RateLimitedError(
                    "Gemini API limit reached. Please try again in a few moments."
                ) from err
            logger.error("Error generating recipe: %s", err)
            raise GenerationError(f"Recipe request failed: {err}") from err
        except Exception as err:
            logger.error("Recipe request did not complete: %s", err)
            raise GenerationError(f"Recipe request failed: {err}") from err

        recipe = parse_recipe(text)
        logger.info("Generated recipe %r for query=%r (mode=%s)", recipe.title, query, SearchMode(mode).value)
        return recipe
