from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from culinary.app.deps import get_history_store
from culinary.app.domain.errors import PersistenceError
from culinary.app.schemas.history import RatingRequest
from culinary.app.services.history_service import HistoryStore
from culinary.services.types import SavedSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=list[SavedSession], response_model_exclude_none=True)
def list_history(history: HistoryStore = Depends(get_history_store)) -> list[SavedSession]:
    return history.list()


@router.put("/{session_id}/rating", response_model=list[SavedSession], response_model_exclude_none=True)
def rate_session(
    session_id: str,
    payload: RatingRequest,
    history: HistoryStore = Depends(get_history_store),
) -> list[SavedSession]:
    try:
        return history.set_rating(session_id, payload.rating)
    except PersistenceError as exc:
        logger.warning("Rating for %s not saved: %s", session_id, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Could not save rating: {exc.reason}",
        )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_history(history: HistoryStore = Depends(get_history_store)) -> Response:
    history.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
