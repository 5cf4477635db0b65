"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the Book Store application.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods built on PollingAssertion

Author: Automation Team
License: MIT
================================================================================
"""

from .book_store_page import BookStorePage, IsbnCheck, select_isbn_check
from .home_page import HomePage
from .login_page import LoginPage

__all__ = [
    "BookStorePage",
    "HomePage",
    "IsbnCheck",
    "LoginPage",
    "select_isbn_check",
]
