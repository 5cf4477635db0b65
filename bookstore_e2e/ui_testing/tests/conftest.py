"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser management, page objects, and test setup/teardown.

Key Features:
- Browser and page lifecycle management (fresh context per test)
- Page Object fixtures, constructed per test
- Screenshot and URL capture on failure

These tests drive a real browser against ``ui.base_url`` and are skipped
unless ``--run-ui`` is given or RUN_UI_TESTS=1 is set.

================================================================================
"""

from typing import AsyncGenerator

import pytest
from loguru import logger
from playwright.async_api import BrowserContext, Page

from bookstore_e2e.common.config_loader import get_config
from bookstore_e2e.ui_testing.framework.browser_manager import BrowserManager
from bookstore_e2e.ui_testing.framework.page_base import BasePage
from bookstore_e2e.ui_testing.pages.book_store_page import BookStorePage
from bookstore_e2e.ui_testing.pages.home_page import HomePage
from bookstore_e2e.ui_testing.pages.login_page import LoginPage


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager(request) -> AsyncGenerator[BrowserManager, None]:
    """Browser manager for one test, configured from options and config."""
    browser_type = request.config.getoption("--ui-browser") or get_config("browser.name", "chromium")
    headless = get_config("browser.headless", True) and not request.config.getoption("--ui-headed")

    async with BrowserManager(headless=headless, browser_type=browser_type) as manager:
        yield manager


@pytest.fixture
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """Isolated browser context for one test."""
    context = await browser_manager.new_context()
    yield context
    await context.close()


@pytest.fixture
async def page(request, context: BrowserContext) -> AsyncGenerator[Page, None]:
    """
    Page for one test.

    On a failed test call, saves a screenshot and the current URL to Allure
    before the page is closed.
    """
    page = await context.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            await BasePage(page).capture_failure(request.node.name)
        except Exception as e:
            logger.warning(f"Failed to capture failure details: {e}")
    await page.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def book_store_page(page: Page) -> BookStorePage:
    return BookStorePage(page)


@pytest.fixture
def home_page(page: Page) -> HomePage:
    return HomePage(page)


@pytest.fixture
def login_page(page: Page) -> LoginPage:
    return LoginPage(page)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase report on the item for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """Common test data for UI tests."""
    return {
        "book": {
            "title": "Git Pocket Guide",
            "search": "Git",
        },
        "user": {
            "username": get_config("ui.username", "demo_user"),
            "password": get_config("ui.password", "demo_password"),
        },
    }
