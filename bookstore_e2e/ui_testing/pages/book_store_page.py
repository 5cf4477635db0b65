"""
================================================================================
Book Store Page Object (Async / Playwright)
================================================================================

Covers the book list (search + results table) and the book detail view.

Assertions prefer visible text over CSS classes so small markup changes do not
break the suite. The detail view's ISBN check is an explicit two-variant
policy (labeled ISBN, or a bare 10-13 digit number) decided from one
successful count of the label.

================================================================================
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

import allure
from loguru import logger

from bookstore_e2e.common.config_loader import get_config
from bookstore_e2e.ui_testing.framework.conditions import (
    describe_text,
    selector_exists,
    selector_visible,
    snapshot,
    text_visible,
)
from bookstore_e2e.ui_testing.framework.page_base import PageBase
from bookstore_e2e.ui_testing.framework.polling import AmbiguousFallback, TimeoutExceeded


ISBN_LABEL_PATTERN = re.compile(r"ISBN\b|ISBN:", re.IGNORECASE)
ISBN_DIGITS_PATTERN = re.compile(r"\d{10,13}")


class IsbnCheck(Enum):
    """Which ISBN evidence the detail view is asserted on."""
    LABELED_ISBN = "labeled_isbn"
    NUMERIC_FALLBACK = "numeric_fallback"


def select_isbn_check(labeled_count: int) -> IsbnCheck:
    """Labeled ISBN when the label matched at least once, otherwise the digit fallback."""
    if labeled_count > 0:
        return IsbnCheck.LABELED_ISBN
    return IsbnCheck.NUMERIC_FALLBACK


class BookStorePage(PageBase):
    """Book Store list and detail page object (async)."""

    URL_PATH = "/books"
    PAGE_TITLE = "Book Store"

    SEARCH_INPUT = "#searchBox"
    BOOKS_TABLE = ".ReactTable"

    @allure.step("Open Book Store")
    async def open(self) -> "BookStorePage":
        """Navigate to the book list."""
        await self.navigate()
        await self.wait_for_page_load()
        return self

    @allure.step("Validate Book Store title")
    async def validate_title(self) -> None:
        await self.should(text_visible(self.page, self.PAGE_TITLE))

    @allure.step("Validate Book Store screen elements")
    async def validate_elements_screen(self) -> None:
        """Title text plus the search input and results table."""
        await self.should(text_visible(self.page, self.PAGE_TITLE))
        await self.should(selector_visible(self.page, self.SEARCH_INPUT))
        await self.should(selector_exists(self.page, self.BOOKS_TABLE))

    @allure.step("Search for book: {name}")
    async def input_name_book(self, name: str) -> None:
        """Clear the search input and type ``name``."""
        state = await self.should(selector_visible(self.page, self.SEARCH_INPUT))
        search = state.locator.first
        await search.clear()
        await search.press_sequentially(name)
        logger.debug(f"Searched for book: {name}")

    @allure.step("Validate book listed: {name}")
    async def validate_name_book(self, name: str) -> None:
        await self.should(text_visible(self.page, name))

    @allure.step("Open first book in results")
    async def click_in_link_name_book(self) -> None:
        """Click the first link inside the results table."""
        link_selector = f"{self.BOOKS_TABLE} a"
        state = await self.should(selector_exists(self.page, link_selector))
        await state.locator.first.click()

    async def detect_isbn_check(self) -> IsbnCheck:
        """
        Count the ISBN label matches and choose which evidence to assert on.

        Any successful count decides the branch; only a failing query is
        retried, within the poller budget.
        """
        target = describe_text(ISBN_LABEL_PATTERN)
        state = await self.poller.until(
            lambda: snapshot(self.page.get_by_text(ISBN_LABEL_PATTERN), target),
            lambda _state: True,
            f"{target} count",
        )
        check = select_isbn_check(state.count)
        logger.debug(f"ISBN label matches: {state.count} -> {check.value}")
        return check

    @allure.step("Validate book detail: {title}")
    async def validate_detail_book(self, title: str, timeout: Optional[int] = None) -> IsbnCheck:
        """
        Validate the detail view of ``title``.

        Checks, in order: the title is visible (detail budget, 10s by default),
        "Author" is visible, then exactly one of the ISBN label or a bare
        10-13 digit number is visible.

        Returns:
            The ISBN variant that was asserted

        Raises:
            TimeoutExceeded: If the title or "Author" never becomes visible
            AmbiguousFallback: If neither ISBN variant is present
        """
        detail_timeout = (
            timeout if timeout is not None
            else get_config("polling.detail_timeout", 10000)
        )
        await self.should(text_visible(self.page, title, timeout=detail_timeout))
        await self.should(text_visible(self.page, "Author"))

        check = await self.detect_isbn_check()
        if check is IsbnCheck.LABELED_ISBN:
            await self.should(text_visible(self.page, ISBN_LABEL_PATTERN))
            return check

        try:
            await self.should(text_visible(self.page, ISBN_DIGITS_PATTERN))
        except TimeoutExceeded as e:
            raise AmbiguousFallback(
                f"No ISBN evidence on detail view of {title!r}: "
                f"no {describe_text(ISBN_LABEL_PATTERN)} label and "
                f"no {describe_text(ISBN_DIGITS_PATTERN)} number visible",
                primary=describe_text(ISBN_LABEL_PATTERN),
                fallback=describe_text(ISBN_DIGITS_PATTERN),
            ) from e
        return check


__all__ = [
    "BookStorePage",
    "ISBN_DIGITS_PATTERN",
    "ISBN_LABEL_PATTERN",
    "IsbnCheck",
    "select_isbn_check",
]
