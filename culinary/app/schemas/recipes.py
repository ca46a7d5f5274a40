from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from culinary.app.domain.models import DietaryRestriction, Difficulty
from culinary.services.types import RecipeRecord, VideoResult


class IngredientInputSchema(BaseModel):
    item: str
    amount: str = ""
    unit: str = ""


class SearchFiltersSchema(BaseModel):
    difficulty: Difficulty = "Any"
    dietary: list[DietaryRestriction] = Field(default_factory=list)


class SearchRequest(BaseModel):
    query: str = ""
    mode: Literal["dish", "ingredients"] = "dish"
    filters: Optional[SearchFiltersSchema] = None
    ingredients: list[IngredientInputSchema] = Field(default_factory=list)


class SearchResponse(BaseModel):
    status: Literal["IDLE", "LOADING", "SUCCESS", "ERROR"]
    query: str = ""
    recipe: Optional[RecipeRecord] = None
    videos: list[VideoResult] = Field(default_factory=list)
    savedId: Optional[str] = None
    historySaved: bool = False
    videosDegraded: bool = False
    error: Optional[str] = None


class ImageRequest(BaseModel):
    description: str = Field(..., min_length=1)


class ImageResponse(BaseModel):
    image: Optional[str] = None
    placeholder: str
    degraded: bool = False


class RecipeDetailResponse(BaseModel):
    id: str
    query: str
    createdAt: datetime
    recipe: RecipeRecord
    videos: list[VideoResult] = Field(default_factory=list)
    userRating: Optional[int] = None
    embedVideoId: Optional[str] = None
    stars: int
    placeholderImage: str


class RecommendedDish(BaseModel):
    name: str
    image: str


class SuggestionsResponse(BaseModel):
    recommended: list[RecommendedDish]
    commonIngredients: list[str]


class StatusResponse(BaseModel):
    online: bool
