"""In-memory stand-ins for the parts of the Playwright page API the scraper uses."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FakeElement:
    text: str | None = None
    attrs: dict[str, str] = field(default_factory=dict)
    children: dict[str, list["FakeElement"]] = field(default_factory=dict)
    visible: bool = True
    click_error: Exception | None = None
    clicks: int = 0


class FakeLocator:
    def __init__(self, elements: list[FakeElement], count_error: Exception | None = None) -> None:
        self._elements = list(elements)
        self._count_error = count_error

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._elements[:1], self._count_error)

    def nth(self, index: int) -> "FakeLocator":
        if 0 <= index < len(self._elements):
            return FakeLocator([self._elements[index]])
        return FakeLocator([])

    def locator(self, selector: str) -> "FakeLocator":
        found: list[FakeElement] = []
        for element in self._elements:
            found.extend(element.children.get(selector, []))
        return FakeLocator(found)

    def filter(self, has_text: Any = None) -> "FakeLocator":
        if has_text is None:
            return self
        pattern = has_text if isinstance(has_text, re.Pattern) else re.compile(re.escape(str(has_text)))
        return FakeLocator([el for el in self._elements if el.text and pattern.search(el.text)])

    async def count(self) -> int:
        if self._count_error is not None:
            raise self._count_error
        return len(self._elements)

    def _require(self) -> FakeElement:
        if not self._elements:
            raise RuntimeError("No element matches locator.")
        return self._elements[0]

    async def inner_text(self) -> str:
        element = self._require()
        if element.text is None:
            raise RuntimeError("Element has no text.")
        return element.text

    async def text_content(self) -> str | None:
        return self._require().text

    async def get_attribute(self, name: str) -> str | None:
        return self._require().attrs.get(name)

    async def is_visible(self) -> bool:
        return bool(self._elements) and self._elements[0].visible

    async def scroll_into_view_if_needed(self) -> None:
        self._require()

    async def click(self) -> None:
        element = self._require()
        if element.click_error is not None:
            raise element.click_error
        element.clicks += 1


class FakePage:
    def __init__(
        self,
        selectors: dict[str, list[FakeElement]] | None = None,
        *,
        role_buttons: list[FakeElement] | None = None,
        goto_error: Exception | None = None,
        evaluate_error: Exception | None = None,
        evaluate_failures: int = 0,
        count_errors: dict[str, Exception] | None = None,
    ) -> None:
        self.selectors = selectors or {}
        self.role_buttons = role_buttons or []
        self.goto_error = goto_error
        self.evaluate_error = evaluate_error
        self.evaluate_failures = evaluate_failures
        self.evaluate_calls = 0
        self.count_errors = count_errors or {}
        self.frames: list[Any] = []
        self.visited: list[tuple[str, str, int]] = []
        self.waits: list[int] = []
        self.evaluations: list[dict[str, Any]] = []

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self.selectors.get(selector, []), self.count_errors.get(selector))

    def get_by_role(self, role: str, name: Any = None) -> FakeLocator:
        return FakeLocator(self.role_buttons).filter(has_text=name)

    async def goto(self, url: str, wait_until: str = "load", timeout: int = 0) -> None:
        self.visited.append((url, wait_until, timeout))
        if self.goto_error is not None:
            raise self.goto_error

    async def wait_for_timeout(self, timeout: int) -> None:
        self.waits.append(timeout)

    async def evaluate(self, script: str, payload: Any = None) -> Any:
        self.evaluate_calls += 1
        if self.evaluate_error is not None:
            raise self.evaluate_error
        if self.evaluate_calls <= self.evaluate_failures:
            raise RuntimeError("Execution context was destroyed")
        self.evaluations.append(payload)
        return {"found": False, "scrolled": True, "target": "window"}


class FakeSession:
    def __init__(self, page: FakePage, close_error: Exception | None = None) -> None:
        self.page = page
        self.close_error = close_error
        self.close_calls = 0

    async def close(self) -> None:
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


def maps_card(
    name: str | None = "Alice",
    rating_label: str | None = "4 stars",
    text: str | None = "Lovely spot",
    date: str | None = "2 weeks ago",
    photo: str | None = None,
) -> FakeElement:
    """A review card laid out like the Maps place panel."""
    children: dict[str, list[FakeElement]] = {}
    if name is not None:
        children[".d4r55"] = [FakeElement(text=name)]
    if rating_label is not None:
        children["span[role='img']"] = [FakeElement(text="", attrs={"aria-label": rating_label})]
    if text is not None:
        children[".wiI7pd"] = [FakeElement(text=text)]
    if date is not None:
        children[".rsqaWe"] = [FakeElement(text=date)]
    if photo is not None:
        children["img"] = [FakeElement(attrs={"src": photo})]
    return FakeElement(children=children)


def search_card(name: str, rating_text: str, text: str, date: str) -> FakeElement:
    """A review card laid out like the search results local reviews widget."""
    return FakeElement(
        children={
            ".TSUbDb": [FakeElement(text=name)],
            "g-review-stars span": [FakeElement(text=rating_text)],
            ".Jtu6Td": [FakeElement(text=text)],
            ".dehysf": [FakeElement(text=date)],
        }
    )
