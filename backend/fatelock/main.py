import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .data.catalog import validate_catalog
from .routers import api_router
from .services.dice import make_rng
from .services.progression import ProgressionEngine
from .state import set_engine_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    validate_catalog()
    engine = ProgressionEngine(
        rng=make_rng(settings.rng_seed),
        starting_keys=settings.starting_keys,
        pity_limit=settings.pity_limit,
    )
    set_engine_provider(lambda: engine)
    logger.info(
        "Progression engine ready (starting keys: %d, seeded: %s)",
        settings.starting_keys,
        settings.rng_seed is not None,
    )

    yield


app = FastAPI(
    title="Fate-Locked Progression API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.get("/", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Simple health-check endpoint."""

    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("fatelock.main:app", host="0.0.0.0", port=8000, reload=True)
