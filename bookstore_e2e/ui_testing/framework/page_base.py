"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation relative to the configured base URL
    - Polling assertions (``should``) with configured defaults
    - Timestamped screenshots attached to Allure
    - Failure capture for the test teardown hook

Page Objects are cheap, short-lived values: fixtures build a fresh one per
test around that test's Playwright page.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import allure
from loguru import logger
from playwright.async_api import Page

from bookstore_e2e.common.config_loader import get_config

from .conditions import TextMatcher, text_visible
from .data_generator import take_screenshot
from .polling import Condition, PollingAssertion


DEFAULT_BASE_URL = "https://demoqa.com"


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class BookStorePage(BasePage):
            URL_PATH = "/books"

            async def validate_title(self):
                await self.should(text_visible(self.page, "Book Store"))
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        poller: Optional[PollingAssertion] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (defaults to ui.base_url)
            poller: PollingAssertion to use (defaults to configured budgets)
        """
        self.page = page
        if not base_url:
            base_url = get_config("ui.base_url", DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip("/")
        self.poller = poller or PollingAssertion(
            timeout=get_config("polling.timeout", 4000),
            interval=get_config("polling.interval", 100),
        )

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    async def navigate(self, wait_for: str = "domcontentloaded") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    async def navigate_to(self, path: str, wait_for: str = "domcontentloaded") -> None:
        """Navigate to a path relative to the base URL."""
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            await self.page.goto(full_url, wait_until=wait_for)

    async def wait_for_page_load(
        self,
        state: str = "domcontentloaded",
        timeout: int = 15000,
    ) -> None:
        """
        Wait for the page to reach a stable load state.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
            timeout: Timeout in milliseconds
        """
        await self.page.wait_for_load_state(state, timeout=timeout)

    # =========================================================================
    # Assertions
    # =========================================================================

    async def should(self, condition: Condition) -> Any:
        """
        Poll ``condition`` until it holds.

        Returns:
            The observed state that satisfied the condition

        Raises:
            TimeoutExceeded: If the condition never held within its budget
        """
        return await self.poller.check(condition)

    async def should_see_text(self, text: TextMatcher, timeout: Optional[int] = None) -> Any:
        """Shortcut for ``should(text_visible(page, text, timeout))``."""
        return await self.should(text_visible(self.page, text, timeout=timeout))

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Save the current view under a timestamped name and optionally attach it.

        Args:
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        directory = Path(get_config("screenshots.dir", "reports/screenshots"))
        filepath = await take_screenshot(self.page, directory, full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=filepath.stem,
                attachment_type=allure.attachment_type.PNG,
            )
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Screenshot
            - Current URL
        """
        with allure.step(f"Capture failure details: {test_name}"):
            await self.screenshot(full_page=True, attach_to_allure=True)
            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )


__all__ = [
    "BasePage",
    "PageBase",
]

# Page Objects in this suite subclass the PageBase name
PageBase = BasePage
