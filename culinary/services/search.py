from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from starlette.concurrency import run_in_threadpool

from culinary.app.domain.errors import PersistenceError
from culinary.app.domain.models import (
    IngredientInput,
    LoadingState,
    SearchFilters,
    SearchMode,
    SearchOutcome,
)
from culinary.app.services.history_service import HistoryStore
from culinary.services.connectivity import ConnectivityProbe
from culinary.services.errors import OfflineError
from culinary.services.recipe_generation import RecipeGenerationClient
from culinary.services.video_lookup import VideoLookupClient

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate recipe. Please try again."


def build_ingredient_query(ingredients: Sequence[IngredientInput]) -> str:
    parts = [entry.to_query_part() for entry in ingredients if entry.item.strip()]
    return ", ".join(parts)


def video_query_for(query: str, mode: SearchMode) -> str:
    if mode == SearchMode.INGREDIENTS:
        return f"recipe using {query}"
    return query


class SearchService:
    def __init__(
        self,
        recipes: RecipeGenerationClient,
        videos: VideoLookupClient,
        history: HistoryStore,
        connectivity: ConnectivityProbe,
    ) -> None:
        self._recipes = recipes
        self._videos = videos
        self._history = history
        self._connectivity = connectivity

    async def search(
        self,
        query: str = "",
        mode: SearchMode | str = SearchMode.DISH,
        filters: Optional[SearchFilters] = None,
        ingredients: Optional[Sequence[IngredientInput]] = None,
    ) -> SearchOutcome:
        """
        Run one search end to end:
        1. Resolve the query (ingredient list wins in ingredients mode).
        2. Short-circuit when offline.
        3. Generate the recipe and look up videos concurrently.
        4. Save the session to history without letting a storage failure hide the recipe.
        """
        # 1. Query
        mode = SearchMode(mode)
        search_query = query
        if mode == SearchMode.INGREDIENTS and ingredients:
            search_query = build_ingredient_query(ingredients)

        if not search_query.strip():
            return SearchOutcome(status=LoadingState.IDLE)

        # 2. Network
        if not await self._connectivity.is_online():
            offline = OfflineError()
            logger.info("Search for %r blocked: offline", search_query)
            return SearchOutcome(status=LoadingState.ERROR, query=search_query, error=str(offline))

        # 3. Recipe + videos in parallel
        recipe_task = self._recipes.generate(search_query, mode, filters)
        videos_task = self._videos.find_result(video_query_for(search_query, mode))
        try:
            recipe, video_lookup = await asyncio.gather(recipe_task, videos_task)
        except Exception:
            logger.exception("Error generating recipe for %r", search_query)
            return SearchOutcome(
                status=LoadingState.ERROR,
                query=search_query,
                error=GENERATION_FAILED_MESSAGE,
            )

        outcome = SearchOutcome(
            status=LoadingState.SUCCESS,
            query=search_query,
            recipe=recipe,
            videos=video_lookup.value,
            videos_degraded=video_lookup.degraded,
        )

        # 4. History
        try:
            outcome.saved = await run_in_threadpool(
                self._history.append,
                search_query,
                recipe,
                video_lookup.value,
            )
            outcome.history_saved = True
        except PersistenceError as error:
            logger.warning("Recipe shown but history not updated: %s", error)

        return outcome
