"""
In-memory stand-ins for the Playwright page and a controllable clock.

Only the slice of the Playwright API used by the Page Objects is modelled.
Elements can be scheduled to appear or disappear at a given fake time so
polling behavior is tested without real sleeps.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set


BASE_URL = "https://books.example.test"


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def sleep_sync(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class StaleElementError(Exception):
    """Mimics a query hitting a node detached by a re-render."""


@dataclass
class FakeElement:
    text: str = ""
    selectors: Set[str] = field(default_factory=set)
    visible: bool = True
    attributes: Dict[str, str] = field(default_factory=dict)
    appears_at: float = 0.0
    disappears_at: Optional[float] = None
    value: str = ""

    def present(self, now: float) -> bool:
        if now < self.appears_at:
            return False
        return self.disappears_at is None or now < self.disappears_at


class FakeLocator:
    def __init__(self, page: "FakePage", matcher, label: str, first_only: bool = False):
        self._page = page
        self._matcher = matcher
        self.label = label
        self._first_only = first_only

    def _matches(self) -> List[FakeElement]:
        self._page.query_count += 1
        if self._page.stale_queries > 0:
            self._page.stale_queries -= 1
            raise StaleElementError(f"Element detached while querying {self.label}")
        now = self._page.clock.monotonic()
        found = [el for el in self._page.elements if el.present(now) and self._matcher(el)]
        return found[:1] if self._first_only else found

    def _single(self) -> FakeElement:
        found = self._matches()
        if not found:
            raise TimeoutError(f"No element matches {self.label}")
        return found[0]

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._page, self._matcher, self.label, first_only=True)

    def locator(self, selector: str) -> "FakeLocator":
        return self._page.locator(f"{self.label} {selector}")

    async def count(self) -> int:
        return len(self._matches())

    async def is_visible(self) -> bool:
        found = self._matches()
        return bool(found) and found[0].visible

    async def all_inner_texts(self) -> List[str]:
        return [el.text for el in self._matches()]

    async def evaluate_all(self, expression: str, arg=None):
        # Only the first-match attribute read is modelled
        found = self._matches()
        return found[0].attributes.get(arg) if found else None

    async def clear(self) -> None:
        self._single().value = ""

    async def fill(self, value: str) -> None:
        self._single().value = value

    async def press_sequentially(self, text: str) -> None:
        element = self._single()
        element.value += text

    async def click(self) -> None:
        self._page.clicked.append(self._single())


class FakePage:
    """Minimal async page holding a flat list of elements."""

    def __init__(self, clock: Optional[FakeClock] = None, url: str = "about:blank"):
        self.clock = clock or FakeClock()
        self.url = url
        self.elements: List[FakeElement] = []
        self.clicked: List[FakeElement] = []
        self.visited: List[str] = []
        self.screenshots: List[str] = []
        self.query_count = 0
        self.stale_queries = 0

    def add(self, text: str = "", *selectors: str, **kwargs) -> FakeElement:
        element = FakeElement(text=text, selectors=set(selectors), **kwargs)
        self.elements.append(element)
        return element

    def get_by_text(self, text) -> FakeLocator:
        if isinstance(text, re.Pattern):
            return FakeLocator(self, lambda el: bool(text.search(el.text)), f"text=/{text.pattern}/")
        needle = text.lower()
        return FakeLocator(self, lambda el: needle in el.text.lower(), f"text={text!r}")

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, lambda el: selector in el.selectors, selector)

    async def goto(self, url: str, wait_until: str = "load") -> None:
        self.visited.append(url)
        self.url = url

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        return None

    async def wait_for_url(self, pattern: str, timeout: Optional[int] = None) -> None:
        return None

    async def screenshot(self, path: str, full_page: bool = False) -> bytes:
        self.screenshots.append(path)
        with open(path, "wb") as f:
            f.write(b"\x89PNG\r\n\x1a\n")
        return b""
