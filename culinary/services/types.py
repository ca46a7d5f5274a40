# culinary/services/types.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

VideoSource = Literal["YouTube", "Web"]


class Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: str
    amount: str
    notes: Optional[str] = None


class InstructionStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    stepNumber: int
    instruction: str
    tip: Optional[str] = None


class NutritionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    calories: int
    protein: str
    carbs: str
    fat: str


class RecipeRecord(BaseModel):
    """Structured recipe as returned by the model. Rating and review count are estimates."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    prepTime: str
    cookTime: str
    servings: int
    difficulty: str
    cuisine: str
    ingredients: list[Ingredient]
    instructions: list[InstructionStep]
    nutrition: NutritionInfo
    rating: float
    reviewCount: int

    @field_validator("rating")
    @classmethod
    def _clamp_rating(cls, value: float) -> float:
        return min(5.0, max(1.0, value))


class VideoResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    uri: str
    source: VideoSource


class SavedSession(BaseModel):
    id: str
    timestamp: int  # epoch milliseconds
    query: str
    recipe: RecipeRecord
    videos: list[VideoResult] = Field(default_factory=list)
    userRating: Optional[int] = Field(default=None, ge=1, le=5)
