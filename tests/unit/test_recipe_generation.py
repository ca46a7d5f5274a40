from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from google.genai import errors as genai_errors
from google.genai import types

from culinary.app.domain.models import SearchFilters, SearchMode
from culinary.services.errors import GenerationError, RateLimitedError
from culinary.services.recipe_generation import (
    RECIPE_REQUIRED_FIELDS,
    RECIPE_SCHEMA,
    RecipeGenerationClient,
    build_recipe_prompt,
    parse_recipe,
)
from culinary.services.types import RecipeRecord

RECIPE_PAYLOAD = {
    "title": "Shakshuka",
    "description": "Eggs poached in spiced tomato sauce",
    "prepTime": "10 mins",
    "cookTime": "20 mins",
    "servings": 2,
    "difficulty": "Easy",
    "cuisine": "Middle Eastern",
    "ingredients": [
        {"item": "Eggs", "amount": "4"},
        {"item": "Tomatoes", "amount": "400 g", "notes": "canned is fine"},
    ],
    "instructions": [
        {"stepNumber": 1, "instruction": "Simmer the sauce."},
        {"stepNumber": 2, "instruction": "Crack in the eggs.", "tip": "Cover the pan"},
    ],
    "nutrition": {"calories": 320, "protein": "18g", "carbs": "20g", "fat": "19g"},
    "rating": 4.7,
    "reviewCount": 830,
}


class FakeAPIError(genai_errors.APIError):
    def __init__(self, code: int, message: str) -> None:
        Exception.__init__(self, f"{code} {message}")
        self.code = code


class GeminiStub:
    def __init__(self, text: str | None = None, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[tuple[str, types.Schema, float]] = []

    async def generate_json(self, prompt: str, response_schema: types.Schema, temperature: float = 0.4) -> str | None:
        self.calls.append((prompt, response_schema, temperature))
        if self.error is not None:
            raise self.error
        return self.text


class TestBuildRecipePrompt:
    def test_dish_mode(self) -> None:
        prompt = build_recipe_prompt("Classic Tiramisu")

        assert prompt.startswith("Create a detailed and delicious recipe for: Classic Tiramisu.")
        assert prompt.endswith("Ensure the instructions are clear and easy to follow.")
        assert "Difficulty" not in prompt
        assert "Dietary" not in prompt

    def test_ingredients_mode(self) -> None:
        prompt = build_recipe_prompt("2 Eggs, Rice", mode="ingredients")

        assert prompt.startswith("I have the following ingredients: 2 Eggs, Rice.")
        assert "basic pantry staples like oil, salt, pepper, flour" in prompt
        assert prompt.endswith("Name the dish creatively.")

    def test_filters_are_added(self) -> None:
        filters = SearchFilters(difficulty="Hard", dietary=["Vegan", "Gluten-Free"])

        prompt = build_recipe_prompt("Curry", SearchMode.DISH, filters)

        assert "Difficulty level must be: Hard." in prompt
        assert "Dietary requirements: Must be Vegan, Gluten-Free." in prompt

    def test_any_difficulty_is_ignored(self) -> None:
        prompt = build_recipe_prompt("Curry", SearchMode.DISH, SearchFilters(difficulty="Any"))

        assert "Difficulty" not in prompt

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_recipe_prompt("Curry", mode="breakfast")


class TestRecipeSchema:
    def test_required_top_level_fields(self) -> None:
        assert RECIPE_SCHEMA.required == RECIPE_REQUIRED_FIELDS
        assert set(RECIPE_REQUIRED_FIELDS) == set(RecipeRecord.model_fields)

    def test_nested_required_fields(self) -> None:
        properties = RECIPE_SCHEMA.properties

        assert properties["ingredients"].items.required == ["item", "amount"]
        assert properties["instructions"].items.required == ["stepNumber", "instruction"]
        assert properties["nutrition"].required == ["calories", "protein", "carbs", "fat"]


class TestParseRecipe:
    def test_parses_valid_payload(self) -> None:
        recipe = parse_recipe(json.dumps(RECIPE_PAYLOAD))

        assert recipe.title == "Shakshuka"
        assert recipe.ingredients[1].notes == "canned is fine"
        assert recipe.instructions[0].tip is None
        assert recipe.nutrition.calories == 320

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_content(self, text: str | None) -> None:
        with pytest.raises(GenerationError, match="No content generated"):
            parse_recipe(text)

    def test_invalid_json(self) -> None:
        with pytest.raises(GenerationError, match="invalid JSON"):
            parse_recipe("{title: nope")

    def test_json_array_rejected(self) -> None:
        with pytest.raises(GenerationError):
            parse_recipe("[]")

    def test_missing_required_field(self) -> None:
        payload = dict(RECIPE_PAYLOAD)
        del payload["nutrition"]

        with pytest.raises(GenerationError, match="non-conforming"):
            parse_recipe(json.dumps(payload))

    def test_rating_is_clamped(self) -> None:
        payload = dict(RECIPE_PAYLOAD, rating=7.5)

        assert parse_recipe(json.dumps(payload)).rating == 5.0

    def test_recipe_is_immutable(self) -> None:
        recipe = parse_recipe(json.dumps(RECIPE_PAYLOAD))

        with pytest.raises(Exception):
            recipe.title = "Changed"  # type: ignore[misc]


class TestRecipeGenerationClient:
    def test_generate_sends_prompt_schema_and_temperature(self) -> None:
        gemini = GeminiStub(text=json.dumps(RECIPE_PAYLOAD))
        client = RecipeGenerationClient(gemini, temperature=0.4)  # type: ignore[arg-type]

        recipe = asyncio.run(client.generate("Shakshuka", "dish", SearchFilters(difficulty="Easy")))

        assert recipe.title == "Shakshuka"
        prompt, schema, temperature = gemini.calls[0]
        assert "Shakshuka" in prompt
        assert "Difficulty level must be: Easy." in prompt
        assert schema is RECIPE_SCHEMA
        assert temperature == 0.4

    def test_empty_response_raises_generation_error(self) -> None:
        client = RecipeGenerationClient(GeminiStub(text=None))  # type: ignore[arg-type]

        with pytest.raises(GenerationError):
            asyncio.run(client.generate("Shakshuka"))

    def test_rate_limit_raises_rate_limited_error(self) -> None:
        gemini = GeminiStub(error=FakeAPIError(429, "RESOURCE_EXHAUSTED"))
        client = RecipeGenerationClient(gemini)  # type: ignore[arg-type]

        with pytest.raises(RateLimitedError):
            asyncio.run(client.generate("Shakshuka"))

    def test_api_error_raises_generation_error(self) -> None:
        gemini = GeminiStub(error=FakeAPIError(500, "INTERNAL"))
        client = RecipeGenerationClient(gemini)  # type: ignore[arg-type]

        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(client.generate("Shakshuka"))

        assert not isinstance(exc_info.value, RateLimitedError)

    def test_transport_error_raises_generation_error(self) -> None:
        gemini = GeminiStub(error=httpx.ConnectError("connection refused"))
        client = RecipeGenerationClient(gemini)  # type: ignore[arg-type]

        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(client.generate("pasta"))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert not isinstance(exc_info.value, RateLimitedError)
