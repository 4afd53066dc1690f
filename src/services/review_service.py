from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from src.config import ScraperConfig
from src.models.review import ExtractionResult, ScrapeRequest, ScrapeResult
from src.scraper.browser import BrowserSession, launch_session
from src.scraper.errors import BrowserLaunchError, ScrapePipelineError
from src.scraper.fallback import fallback_reviews
from src.scraper.google_maps import GoogleMapsReviewScraper

LOGGER = logging.getLogger("review_service")


class PipelineState(str, Enum):
    LAUNCHING = "launching"
    NAVIGATING = "navigating"
    CONSENT_CHECK = "consent_check"
    REVEALING = "revealing"
    EXTRACTING = "extracting"
    FOUND = "found"
    EMPTY = "empty"
    FALLBACK = "fallback"
    TORN_DOWN = "torn_down"
    FAILED = "failed"


@dataclass(frozen=True)
class StepOutcome:
    name: str
    completed: bool
    value: Any = None
    detail: str | None = None


class ReviewScrapeService:
    def __init__(
        self,
        config: ScraperConfig,
        *,
        launcher: Callable[[ScraperConfig], Awaitable[BrowserSession]] = launch_session,
        scraper_factory: Callable[..., GoogleMapsReviewScraper] = GoogleMapsReviewScraper,
    ) -> None:
        self._config = config
        self._launcher = launcher
        self._scraper_factory = scraper_factory

    def resolve_target_url(self, request: ScrapeRequest) -> str:
        return request.resolve_target_url(self._config.place_url_template)

    async def scrape(self, request: ScrapeRequest) -> ScrapeResult:
        # Validation happens before any browser is started.
        target_url = self.resolve_target_url(request)
        states: list[PipelineState] = []

        self._enter(states, PipelineState.LAUNCHING, target_url)
        try:
            session = await self._launcher(self._config)
        except BrowserLaunchError:
            self._enter(states, PipelineState.FAILED, target_url)
            raise
        except Exception as exc:
            self._enter(states, PipelineState.FAILED, target_url)
            raise BrowserLaunchError(f"Failed to launch browser: {exc}") from exc

        try:
            extraction = await self._run_pipeline(session, target_url, states)
        except Exception as exc:
            LOGGER.exception("Scrape pipeline failed for url=%s", target_url)
            self._enter(states, PipelineState.FAILED, target_url)
            raise ScrapePipelineError(f"Scraping failed: {exc}", states=states) from exc
        finally:
            await self._teardown(session)
            self._enter(states, PipelineState.TORN_DOWN, target_url)

        if extraction.is_empty:
            return ScrapeResult(
                target_url=target_url,
                reviews=fallback_reviews(),
                synthetic=True,
                strategy=None,
                states=[state.value for state in states],
            )

        return ScrapeResult(
            target_url=target_url,
            reviews=extraction.reviews,
            synthetic=False,
            strategy=extraction.strategy,
            states=[state.value for state in states],
        )

    async def _run_pipeline(
        self,
        session: BrowserSession,
        target_url: str,
        states: list[PipelineState],
    ) -> ExtractionResult:
        if session.page is None:
            raise ScrapePipelineError("Browser session has no page.")
        scraper = self._scraper_factory(session.page, self._config)

        self._enter(states, PipelineState.NAVIGATING, target_url)
        navigation = await self._run_step("navigate", lambda: scraper.navigate(target_url))
        if not navigation.completed:
            LOGGER.warning(
                "Navigation to url=%s failed (%s), extracting from current page state.",
                target_url,
                navigation.detail,
            )
        await scraper.wait_for_settle()

        self._enter(states, PipelineState.CONSENT_CHECK, target_url)
        consent = await self._run_step("dismiss_consent", scraper.dismiss_consent)
        if consent.completed and consent.value:
            LOGGER.info("Consent dialog dismissed for url=%s", target_url)

        self._enter(states, PipelineState.REVEALING, target_url)
        reveal = await self._run_step("open_reviews", scraper.open_reviews)
        if not (reveal.completed and reveal.value):
            LOGGER.info("Reviews entrypoint not activated for url=%s, relying on scroll only.", target_url)
        scroll = await self._run_step("scroll_reviews", scraper.scroll_reviews)
        if not scroll.completed:
            LOGGER.info("Scrolling skipped for url=%s", target_url)

        self._enter(states, PipelineState.EXTRACTING, target_url)
        extraction = await scraper.extract_reviews()

        if extraction.is_empty:
            self._enter(states, PipelineState.EMPTY, target_url)
            self._enter(states, PipelineState.FALLBACK, target_url)
        else:
            self._enter(states, PipelineState.FOUND, target_url)
            LOGGER.info(
                "Extracted %s reviews with strategy=%s from url=%s",
                len(extraction.reviews),
                extraction.strategy,
                target_url,
            )
        return extraction

    async def _run_step(self, name: str, action: Callable[[], Awaitable[Any]]) -> StepOutcome:
        try:
            value = await action()
        except Exception as exc:
            LOGGER.debug("Step %s skipped: %s", name, exc)
            return StepOutcome(name=name, completed=False, detail=str(exc))

        LOGGER.debug("Step %s completed: %s", name, value)
        return StepOutcome(name=name, completed=True, value=value)

    async def _teardown(self, session: BrowserSession) -> None:
        try:
            await session.close()
        except Exception:
            LOGGER.warning("Browser teardown failed.", exc_info=True)

    def _enter(self, states: list[PipelineState], state: PipelineState, target_url: str) -> None:
        states.append(state)
        LOGGER.info("Pipeline state=%s url=%s", state.value, target_url)
