"""
================================================================================
Home Page Object (Async / Playwright)
================================================================================

Landing page for a signed-in user (the Profile view).

================================================================================
"""

from __future__ import annotations

import allure

from bookstore_e2e.ui_testing.framework.conditions import text_visible
from bookstore_e2e.ui_testing.framework.page_base import PageBase


class HomePage(PageBase):
    """Signed-in landing page object (async)."""

    URL_PATH = "/profile"
    PAGE_TITLE = "Profile"

    @allure.step("Open profile")
    async def open(self) -> "HomePage":
        await self.navigate()
        await self.wait_for_page_load()
        return self

    @allure.step("Validate welcome message")
    async def validate_welcome_message(self) -> None:
        """The "Profile" heading is visible after login."""
        await self.should(text_visible(self.page, self.PAGE_TITLE))
