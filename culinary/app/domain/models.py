# culinary/app/domain/models.py
"""
Domain models for the search flow and its view states.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Literal, Optional, TypeVar

from culinary.services.types import RecipeRecord, SavedSession, VideoResult

T = TypeVar("T")

DIFFICULTY_ANY = "Any"
Difficulty = Literal["Any", "Easy", "Medium", "Hard"]
DietaryRestriction = Literal["Vegetarian", "Vegan", "Gluten-Free", "Dairy-Free"]


class LoadingState(str, Enum):
    """View state of the search screen."""
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class SearchMode(str, Enum):
    DISH = "dish"
    INGREDIENTS = "ingredients"


@dataclass
class SearchFilters:
    """Optional constraints appended to the generation prompt."""
    difficulty: Difficulty = DIFFICULTY_ANY
    dietary: list[DietaryRestriction] = field(default_factory=list)

    @property
    def has_difficulty(self) -> bool:
        return bool(self.difficulty) and self.difficulty != DIFFICULTY_ANY


@dataclass
class IngredientInput:
    """One pantry entry typed by the user in ingredients mode."""
    item: str
    amount: str = ""
    unit: str = ""

    def to_query_part(self) -> str:
        return " ".join(part.strip() for part in (self.amount, self.unit, self.item) if part.strip())


@dataclass
class LookupResult(Generic[T]):
    """
    Result of a lookup that never fails outward.
    `degraded` is True when `value` is a fallback produced by a swallowed error.
    """
    value: T
    degraded: bool = False
    reason: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "LookupResult[T]":
        return cls(value=value)

    @classmethod
    def degrade(cls, value: T, reason: str) -> "LookupResult[T]":
        return cls(value=value, degraded=True, reason=reason)


@dataclass
class SearchOutcome:
    """Everything the presentation layer needs to render one search."""
    status: LoadingState
    query: str = ""
    recipe: Optional[RecipeRecord] = None
    videos: list[VideoResult] = field(default_factory=list)
    saved: Optional[SavedSession] = None
    history_saved: bool = False
    videos_degraded: bool = False
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == LoadingState.SUCCESS
