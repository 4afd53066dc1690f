import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import settings
from src.routers.health import router as health_router
from src.routers.places import router as places_router
from src.routers.reviews import router as reviews_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
LOGGER = logging.getLogger("review_scraper_api")


@asynccontextmanager
async def lifespan(_: FastAPI):
    LOGGER.info(
        "Starting %s env=%s execution=%s",
        settings.app_name,
        settings.app_env,
        settings.resolve_execution_environment().value,
    )
    try:
        yield
    finally:
        LOGGER.info("Shutting down %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="API for scraping publicly visible Google Maps reviews of a business.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(places_router)
app.include_router(reviews_router)
