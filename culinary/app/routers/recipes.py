# culinary/app/routers/recipes.py
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from culinary.app.deps import get_connectivity, get_history_store, get_image_client, get_search_service
from culinary.app.domain.models import IngredientInput, SearchFilters, SearchOutcome
from culinary.app.domain.suggestions import COMMON_INGREDIENTS, RECOMMENDED_DISHES
from culinary.app.schemas.recipes import (
    ImageRequest,
    ImageResponse,
    RecipeDetailResponse,
    RecommendedDish,
    SearchRequest,
    SearchResponse,
    StatusResponse,
    SuggestionsResponse,
)
from culinary.app.services.history_service import HistoryStore
from culinary.services.connectivity import ConnectivityProbe
from culinary.services.ids import youtube_video_id
from culinary.services.image_lookup import ImageLookupClient, placeholder_image_url
from culinary.services.search import SearchService
from culinary.services.types import SavedSession

log = logging.getLogger("recipes")
router = APIRouter(tags=["recipes"])


def _outcome_to_response(outcome: SearchOutcome) -> SearchResponse:
    return SearchResponse(
        status=outcome.status.value,
        query=outcome.query,
        recipe=outcome.recipe,
        videos=outcome.videos,
        savedId=outcome.saved.id if outcome.saved else None,
        historySaved=outcome.history_saved,
        videosDegraded=outcome.videos_degraded,
        error=outcome.error,
    )


def _star_count(rating: float) -> int:
    # round half up, like the star widget
    return int(rating + 0.5)


def _session_to_detail(session: SavedSession) -> RecipeDetailResponse:
    embed_id = None
    for video in session.videos:
        if video.source != "YouTube":
            continue
        embed_id = youtube_video_id(video.uri)
        if embed_id:
            break

    return RecipeDetailResponse(
        id=session.id,
        query=session.query,
        createdAt=datetime.fromtimestamp(session.timestamp / 1000, tz=timezone.utc),
        recipe=session.recipe,
        videos=session.videos,
        userRating=session.userRating,
        embedVideoId=embed_id,
        stars=_star_count(session.recipe.rating),
        placeholderImage=placeholder_image_url(session.recipe.title),
    )


@router.get("/status", response_model=StatusResponse)
async def get_status(connectivity: ConnectivityProbe = Depends(get_connectivity)) -> StatusResponse:
    return StatusResponse(online=await connectivity.is_online())


@router.post("/recipes/search", response_model=SearchResponse)
async def search_recipes(
    payload: SearchRequest,
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    filters = None
    if payload.filters is not None:
        filters = SearchFilters(
            difficulty=payload.filters.difficulty,
            dietary=list(payload.filters.dietary),
        )
    ingredients = [
        IngredientInput(item=entry.item, amount=entry.amount, unit=entry.unit)
        for entry in payload.ingredients
    ]

    outcome = await service.search(
        query=payload.query,
        mode=payload.mode,
        filters=filters,
        ingredients=ingredients,
    )
    log.info("Search %r finished with status=%s", outcome.query, outcome.status.value)
    return _outcome_to_response(outcome)


@router.post("/recipes/image", response_model=ImageResponse)
async def generate_image(
    payload: ImageRequest,
    images: ImageLookupClient = Depends(get_image_client),
) -> ImageResponse:
    result = await images.generate_result(payload.description)
    return ImageResponse(
        image=result.value,
        placeholder=placeholder_image_url(payload.description),
        degraded=result.degraded,
    )


@router.get("/recipes/suggestions", response_model=SuggestionsResponse)
def get_suggestions() -> SuggestionsResponse:
    return SuggestionsResponse(
        recommended=[RecommendedDish(**dish) for dish in RECOMMENDED_DISHES],
        commonIngredients=list(COMMON_INGREDIENTS),
    )


@router.get("/recipes/{session_id}", response_model=RecipeDetailResponse)
def get_saved_recipe(
    session_id: str,
    history: HistoryStore = Depends(get_history_store),
) -> RecipeDetailResponse:
    session = history.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Saved recipe not found")
    return _session_to_detail(session)
