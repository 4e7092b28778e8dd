import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.logging_config import setup_logging
from routers import (
    auth as auth_router,
    history as history_router,
    languages as languages_router,
    learning as learning_router,
    lessons as lessons_router,
    profile as profile_router,
    wordbook as wordbook_router,
    words as words_router,
)
from routers.auth import security
from services.gemini_service import GeminiClient
from services.lesson_service import LessonCatalog

logger = logging.getLogger(__name__)


def build_generator() -> GeminiClient | None:
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; AI features are disabled")
        return None
    return GeminiClient(
        settings.GEMINI_API_KEY,
        settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        timeout=settings.GEMINI_TIMEOUT_SECONDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # tests install their own generator before startup
    if getattr(app.state, "generator", None) is None:
        app.state.generator = build_generator()
    yield
    generator = app.state.generator
    if isinstance(generator, GeminiClient):
        await generator.aclose()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="Lingo with Tea", lifespan=lifespan)
    app.state.generator = None
    app.state.lesson_catalog = LessonCatalog()
    security.handle_errors(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router.router)
    app.include_router(languages_router.router)
    app.include_router(profile_router.router)
    app.include_router(words_router.router)
    app.include_router(wordbook_router.router)
    app.include_router(history_router.router)
    app.include_router(learning_router.router)
    app.include_router(lessons_router.router)

    @app.get("/status")
    async def status():
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", reload=True, host="127.0.0.1", port=8000)
