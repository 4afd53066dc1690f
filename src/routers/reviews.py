from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.config import ScraperConfig, settings
from src.models.review import ScrapeRequest
from src.scraper.errors import ScraperError
from src.services.review_service import ReviewScrapeService

router = APIRouter(prefix="/api")


def get_review_service() -> ReviewScrapeService:
    return ReviewScrapeService(ScraperConfig.from_settings(settings))


@router.post("/scrape-reviews", tags=["Reviews"])
async def scrape_reviews(
    payload: ScrapeRequest | None = None,
    service: ReviewScrapeService = Depends(get_review_service),
) -> JSONResponse:
    body = payload or ScrapeRequest()
    try:
        result = await service.scrape(body)
    except ValueError as exc:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": str(exc)})
    except ScraperError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(exc) or "Scraping failed"},
        )

    headers = {"X-Reviews-Source": "fallback" if result.synthetic else "scraped"}
    if result.strategy:
        headers["X-Reviews-Strategy"] = result.strategy
    return JSONResponse(status_code=status.HTTP_200_OK, content=result.reviews_payload(), headers=headers)
