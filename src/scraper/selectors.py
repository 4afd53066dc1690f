from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class SelectorStrategy:
    """Locators for one known review layout. Applied as a unit, never mixed."""

    name: str
    version: int
    container: str
    author: str
    rating: str
    text: str
    date: str


# Ordered by priority. A new layout variant is supported by appending a record
# here; the extractor walks this tuple and adopts the first strategy whose
# container locator matches anything on the page.
REVIEW_STRATEGIES: Final[tuple[SelectorStrategy, ...]] = (
    SelectorStrategy(
        name="maps_place_panel",
        version=1,
        container="div.jftiEf",
        author=".d4r55",
        rating="span[role='img']",
        text=".wiI7pd",
        date=".rsqaWe",
    ),
    SelectorStrategy(
        name="search_local_reviews",
        version=1,
        container="div.gws-localreviews__google-review",
        author=".TSUbDb",
        rating="g-review-stars span",
        text=".Jtu6Td",
        date=".dehysf",
    ),
    SelectorStrategy(
        name="maps_review_id_cards",
        version=2,
        container="div[data-review-id][jsaction*='review']",
        author="div[class*='d4r55'], button[data-href*='/contrib/'] div",
        rating="[role='img'][aria-label*='star' i], [role='img'][aria-label*='estrella' i]",
        text="span.wiI7pd, div.MyEned span",
        date="span.rsqaWe, span.xRkPPb",
    ),
)

# Heuristic selector groups for interactive page elements.
# Match on attributes and roles, not on generated class names.
SELECTOR_PATTERNS: Final[dict[str, tuple[str, ...]]] = {
    "CONSENT_BUTTON": (
        "button[aria-label*='consent' i]",
        "button[aria-label*='accept' i]",
        "button[aria-label*='aceptar' i]",
        "button[aria-label*='agree' i]",
        "button[jsname='higCR']",
        "form[action*='consent'] button[type='submit']",
    ),
    "REVIEWS_ENTRYPOINT": (
        "button[role='tab'][aria-label*='review' i]",
        "button[role='tab'][aria-label*='rese' i]",
        "button[jsaction*='reviewChart.moreReviews']",
        "button[aria-label*='more review' i]",
        "button[aria-label*='más rese' i]",
        "a[href*='lrd='][role='button']",
        "a[data-async-trigger='reviewDialog']",
        "span.hqzQac a",
    ),
    "REVIEW_CARDS": tuple(strategy.container for strategy in REVIEW_STRATEGIES),
}

CONSENT_TEXT_TERMS: Final[tuple[str, ...]] = (
    "accept all",
    "aceptar todo",
    "i agree",
    "estoy de acuerdo",
    "tout accepter",
    "alle akzeptieren",
)
