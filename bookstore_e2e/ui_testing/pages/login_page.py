"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Sign-in form of the Book Store application. Tests use it to reach the
Profile view checked by HomePage.

Credentials default to the ``ui.username`` / ``ui.password`` settings, which
the environment overrides through UI_USERNAME / UI_PASSWORD.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from bookstore_e2e.common.config_loader import get_config
from bookstore_e2e.ui_testing.framework.conditions import selector_visible
from bookstore_e2e.ui_testing.framework.page_base import PageBase
from bookstore_e2e.ui_testing.framework.polling import TimeoutExceeded


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = "/login"
    PAGE_TITLE = "Login"

    USERNAME_INPUT = "#userName"
    PASSWORD_INPUT = "#password"
    LOGIN_BUTTON = "#login"

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        await self.navigate()
        await self.wait_for_page_load()
        return self

    @allure.step("Verify login form is displayed")
    async def verify_form_displayed(self) -> bool:
        """True when the username, password and login controls are all visible."""
        try:
            for selector in (self.USERNAME_INPUT, self.PASSWORD_INPUT, self.LOGIN_BUTTON):
                await self.should(selector_visible(self.page, selector, timeout=2000))
        except TimeoutExceeded as e:
            logger.warning(f"Login form incomplete: {e.description}")
            return False
        return True

    @allure.step("Login (username={username})")
    async def login(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        wait_profile: bool = True,
    ) -> None:
        """
        Fill the form and submit.

        Args:
            username: Defaults to the ``ui.username`` setting
            password: Defaults to the ``ui.password`` setting
            wait_profile: Wait for the post-login redirect to /profile
        """
        if username is None:
            username = get_config("ui.username", "demo_user")
        if password is None:
            password = get_config("ui.password", "demo_password")

        user_state = await self.should(selector_visible(self.page, self.USERNAME_INPUT))
        await user_state.locator.first.fill(username)
        pass_state = await self.should(selector_visible(self.page, self.PASSWORD_INPUT))
        await pass_state.locator.first.fill(password)
        button_state = await self.should(selector_visible(self.page, self.LOGIN_BUTTON))
        await button_state.locator.first.click()

        if wait_profile:
            await self.page.wait_for_url("**/profile**", timeout=15000)

    async def assert_login_page_loaded(self) -> None:
        """Hard assertion helper used by tests."""
        assert await self.verify_form_displayed(), "Login form should be visible"
