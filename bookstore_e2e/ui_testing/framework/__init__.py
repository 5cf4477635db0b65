"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the Book Store suite.

Components:
    - polling: Retry-until-satisfied assertions (PollingAssertion)
    - conditions: Condition factories over a Playwright page
    - data_generator: Randomized fixture values and screenshot timestamps
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .polling import (
    AmbiguousFallback,
    Condition,
    PollingAssertion,
    PollingAssertionError,
    TimeoutExceeded,
)
from .data_generator import DataGenerator, screenshot_timestamp
from .page_base import BasePage
from .browser_manager import BrowserManager

__all__ = [
    "AmbiguousFallback",
    "BasePage",
    "BrowserManager",
    "Condition",
    "DataGenerator",
    "PollingAssertion",
    "PollingAssertionError",
    "TimeoutExceeded",
    "screenshot_timestamp",
]
