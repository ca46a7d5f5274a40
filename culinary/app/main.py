# culinary/app/main.py
from __future__ import annotations
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from culinary import __version__
from culinary.app.config import settings
from culinary.app.routers.history import router as history_router
from culinary.app.routers.recipes import router as recipes_router
from culinary.services.errors import GeminiConfigurationError

# Plain stdout logging (works for dev and containers)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title="CulinaryAI API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recipes_router)
app.include_router(history_router)


@app.exception_handler(GeminiConfigurationError)
async def gemini_not_configured(request: Request, exc: GeminiConfigurationError) -> JSONResponse:
    logging.getLogger(__name__).error("Gemini is not configured: %s", exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"ok": True}
