import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.config import ExecutionEnvironment, ScraperConfig, settings
from src.models.review import ScrapeRequest
from src.scraper.errors import ScraperError
from src.services.review_service import ReviewScrapeService


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Smoke test for the Google Maps review scraping pipeline."
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--link", help="Google Maps URL of the business.")
    target.add_argument("--place-id", help="Google place id of the business.")
    parser.add_argument(
        "--execution-env",
        choices=[env.value for env in ExecutionEnvironment],
        default=None,
        help="Override the detected execution environment.",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window (default: headless).",
    )
    parser.add_argument(
        "--max-reviews",
        type=int,
        default=settings.scraper_max_reviews,
        help=f"Maximum number of reviews to extract (default: {settings.scraper_max_reviews}).",
    )
    return parser.parse_args()


async def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    config = ScraperConfig.from_settings(settings)
    overrides: dict = {"headless": not args.headed, "max_reviews": max(1, args.max_reviews)}
    if args.execution_env:
        overrides["execution_environment"] = ExecutionEnvironment(args.execution_env)
    config = dataclasses.replace(config, **overrides)

    service = ReviewScrapeService(config)
    request = ScrapeRequest(link=args.link, place_id=args.place_id)

    try:
        result = await service.scrape(request)
    except ScraperError as exc:
        print(f"FAILED - {exc}")
        return 1

    print(f"URL: {result.target_url}")
    print(f"States: {' -> '.join(result.states)}")
    print(f"Strategy: {result.strategy or '(none)'}")
    print(f"Synthetic fallback: {result.synthetic}")
    print(f"Reviews: {len(result.reviews)}")
    print(json.dumps(result.reviews_payload(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
