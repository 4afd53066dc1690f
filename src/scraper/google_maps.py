from __future__ import annotations

import logging
import re
import unicodedata
from typing import Any, Sequence

from playwright.async_api import Locator, Page

from src.config import ScraperConfig, clamp_max_reviews
from src.models.review import ExtractionResult, ReviewRecord
from src.scraper.selectors import (
    CONSENT_TEXT_TERMS,
    REVIEW_STRATEGIES,
    SELECTOR_PATTERNS,
    SelectorStrategy,
)

LOGGER = logging.getLogger("google_maps_scraper")

_RATING_REGEX = re.compile(r"(\d+(?:[.,]\d+)?)")

_SCROLL_REVIEWS_SCRIPT = """
(payload) => {
    const selectors = payload.selectors;
    const step = payload.stepPx;

    let card = null;
    for (const selector of selectors) {
        card = document.querySelector(selector);
        if (card) break;
    }

    let parent = card ? card.parentElement : null;
    while (parent) {
        const style = window.getComputedStyle(parent);
        const overflowY = style.overflowY;
        const canScroll = parent.scrollHeight > parent.clientHeight + 20;
        if ((overflowY === "auto" || overflowY === "scroll") && canScroll) {
            const before = parent.scrollTop;
            parent.scrollBy(0, step);
            return {found: true, scrolled: parent.scrollTop > before, target: "feed"};
        }
        parent = parent.parentElement;
    }

    const before = window.scrollY;
    window.scrollBy(0, step);
    return {found: Boolean(card), scrolled: window.scrollY > before, target: "window"};
}
"""


class GoogleMapsReviewScraper:
    """Drives one Google Maps page through the review extraction steps.

    Every public step raises on failure; deciding which failures are
    tolerable is left to the caller.
    """

    def __init__(
        self,
        page: Page,
        config: ScraperConfig,
        *,
        strategies: Sequence[SelectorStrategy] = REVIEW_STRATEGIES,
    ) -> None:
        self._page = page
        self._config = config
        self._strategies = tuple(strategies)
        self._max_reviews = clamp_max_reviews(config.max_reviews)

    async def navigate(self, url: str) -> None:
        await self._page.goto(
            url,
            wait_until="networkidle",
            timeout=self._config.navigation_timeout_ms,
        )

    async def wait_for_settle(self) -> None:
        await self._page.wait_for_timeout(self._config.settle_delay_ms)

    async def dismiss_consent(self) -> bool:
        button = await self._first_visible_from_patterns("CONSENT_BUTTON")
        if button is None:
            button = await self._first_visible_by_text(CONSENT_TEXT_TERMS)
        if button is None:
            return False

        await self._click(button)
        await self._page.wait_for_timeout(self._config.consent_delay_ms)
        return True

    async def open_reviews(self) -> bool:
        button = await self._first_visible_from_patterns("REVIEWS_ENTRYPOINT")
        if button is None:
            return False

        await self._click(button)
        await self._page.wait_for_timeout(self._config.reveal_delay_ms)
        return True

    async def scroll_reviews(self) -> int:
        steps_done = 0
        for step in range(max(0, self._config.scroll_steps)):
            try:
                await self._scroll_reviews_feed_step(self._config.scroll_step_px)
                steps_done += 1
            except Exception as exc:
                LOGGER.debug("Scroll step %s failed: %s", step + 1, exc)
            await self._page.wait_for_timeout(self._config.scroll_delay_ms)
        return steps_done

    async def extract_reviews(self) -> ExtractionResult:
        for strategy in self._strategies:
            containers = self._page.locator(strategy.container)
            try:
                total = await containers.count()
            except Exception:
                LOGGER.debug("Container lookup failed for strategy=%s", strategy.name, exc_info=True)
                continue

            if total <= 0:
                continue

            LOGGER.info(
                "Strategy %s v%s matched %s containers.",
                strategy.name,
                strategy.version,
                total,
            )
            reviews = [
                await self._extract_card(containers.nth(idx), strategy)
                for idx in range(min(total, self._max_reviews))
            ]
            return ExtractionResult(strategy=strategy.name, reviews=reviews)

        return ExtractionResult()

    async def _extract_card(self, card: Locator, strategy: SelectorStrategy) -> ReviewRecord:
        author = await self._text_from_locator(card.locator(strategy.author).first)
        rating = await self._rating_from_locator(card.locator(strategy.rating).first)
        text = await self._text_from_locator(card.locator(strategy.text).first)
        date = await self._text_from_locator(card.locator(strategy.date).first)
        photo_url = await self._attribute_from_locator(card.locator("img").first, "src")

        return ReviewRecord(
            name=author,
            rating=rating,
            text=text,
            date=date,
            photo_url=photo_url,
        )

    async def _rating_from_locator(self, locator: Locator) -> float:
        label = await self._attribute_from_locator(locator, "aria-label")
        rating = self._parse_rating(label)
        if rating is None:
            rating = self._parse_rating(await self._text_from_locator(locator))
        return rating if rating is not None else 0.0

    async def _scroll_reviews_feed_step(self, step_px: int) -> dict[str, Any]:
        result = await self._page.evaluate(
            _SCROLL_REVIEWS_SCRIPT,
            {"selectors": list(SELECTOR_PATTERNS["REVIEW_CARDS"]), "stepPx": max(1, step_px)},
        )
        return result if isinstance(result, dict) else {}

    async def _click(self, locator: Locator) -> None:
        try:
            await locator.scroll_into_view_if_needed()
        except Exception:
            pass
        await locator.click()

    async def _first_visible_from_patterns(self, key: str) -> Locator | None:
        for selector in SELECTOR_PATTERNS[key]:
            locator = self._page.locator(selector).first
            try:
                if await locator.count() > 0 and await locator.is_visible():
                    return locator
            except Exception:
                continue

        return None

    async def _first_visible_by_text(self, terms: tuple[str, ...]) -> Locator | None:
        regex = re.compile("|".join(re.escape(term) for term in terms), re.IGNORECASE)

        # Consent dialogs are often rendered inside an iframe.
        scopes: list[Any] = [self._page, *self._page.frames]
        for scope in scopes:
            candidate_groups: list[Locator] = [
                scope.get_by_role("button", name=regex),
                scope.locator("button, [role='button'], input[type='submit']").filter(has_text=regex),
            ]
            for candidates in candidate_groups:
                try:
                    total = await candidates.count()
                except Exception:
                    continue

                for idx in range(min(total, 6)):
                    candidate = candidates.nth(idx)
                    try:
                        if await candidate.is_visible():
                            return candidate
                    except Exception:
                        continue

        return None

    async def _text_from_locator(self, locator: Locator) -> str | None:
        try:
            if await locator.count() <= 0:
                return None
        except Exception:
            return None

        text: str | None = None
        try:
            text = await locator.inner_text()
        except Exception:
            try:
                text = await locator.text_content()
            except Exception:
                text = None

        return self._clean_text(text)

    async def _attribute_from_locator(self, locator: Locator, attribute: str) -> str | None:
        try:
            if await locator.count() <= 0:
                return None
            value = await locator.get_attribute(attribute)
        except Exception:
            return None
        return self._clean_text(value)

    def _parse_rating(self, value: str | None) -> float | None:
        if not value:
            return None

        # Takes the first number in the label, so "stars: 5 of 5" gives 5.
        match = _RATING_REGEX.search(self._normalize_text(value))
        if not match:
            return None

        try:
            rating = float(match.group(1).replace(",", "."))
        except ValueError:
            return None

        if 0.0 <= rating <= 5.0:
            return rating

        return None

    def _clean_text(self, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = re.sub(r"\s+", " ", value).strip()
        return cleaned or None

    def _normalize_text(self, value: str) -> str:
        normalized = unicodedata.normalize("NFKD", value or "")
        normalized = "".join(char for char in normalized if not unicodedata.combining(char))
        normalized = normalized.lower()
        normalized = re.sub(r"\s+", " ", normalized).strip()
        return normalized
