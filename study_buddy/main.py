import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from study_buddy.clock import Clock, make_clock
from study_buddy.config import get_settings
from study_buddy.db.factory import make_store
from study_buddy.db.interfaces import KeyValueStore
from study_buddy.middlewares import request_logging_middleware
from study_buddy.repositories.flashcards import FlashcardsRepository
from study_buddy.routers import flashcards, ping, stats, study
from study_buddy.services.flashcards import FlashcardService
from study_buddy.services.generation.base import CardGenerator
from study_buddy.services.generation.factory import make_card_generator
from study_buddy.services.stats import StatsTracker
from study_buddy.services.study import StudyService

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    store: KeyValueStore | None = None,
    generator: CardGenerator | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Build the API; store, generator and clock default to the configured ones."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan for the API.
        """
        logger.info("Starting Study Buddy API...")
        app.state.settings = get_settings()

        kv_store = store or make_store()
        app_clock = clock or make_clock()

        repo = FlashcardsRepository(kv_store)
        cards = await repo.load()
        logger.info(f"Loaded {len(cards)} flashcards")

        tracker = StatsTracker(kv_store, repo, clock=app_clock)
        await tracker.refresh()

        app.state.flashcard_service = FlashcardService(
            repo=repo,
            generator=generator or make_card_generator(),
            stats=tracker,
        )
        app.state.study_service = StudyService(repo, tracker, clock=app_clock)
        app.state.stats_tracker = tracker
        logger.info("API ready")
        yield

        close = getattr(kv_store, "close", None)
        if close is not None:
            await close()
        logger.info("API shutdown complete")

    app = FastAPI(
        title="Study Buddy",
        description="Flashcard generation and study sessions.",
        version=get_settings().app_version,
        lifespan=lifespan,
    )
    app.middleware("http")(request_logging_middleware)

    app.include_router(ping.router, prefix="/api/v1")
    app.include_router(flashcards.router, prefix="/api/v1")
    app.include_router(study.router, prefix="/api/v1")
    app.include_router(stats.router, prefix="/api/v1")
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, port=8000, host="0.0.0.0")
