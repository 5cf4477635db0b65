"""
================================================================================
Root Pytest Configuration
================================================================================

Project-wide markers and command line options.

Browser tests under ``bookstore_e2e/ui_testing/tests`` need a browser and
network access to the target application, so they only run with
``--run-ui`` or RUN_UI_TESTS=1. Unit tests always run.

================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from bookstore_e2e.common.log_setup import init_logger


def pytest_addoption(parser):
    group = parser.getgroup("bookstore", "Book Store UI suite")
    group.addoption(
        "--run-ui",
        action="store_true",
        default=False,
        help="Run browser-backed UI tests",
    )
    group.addoption(
        "--ui-browser",
        action="store",
        default=None,
        choices=["chromium", "firefox", "webkit"],
        help="Browser for UI tests (default: browser.name setting)",
    )
    group.addoption(
        "--ui-headed",
        action="store_true",
        default=False,
        help="Run the browser in headed mode",
    )


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests that need no browser"
    )
    config.addinivalue_line(
        "markers", "ui: Browser-backed UI tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to authentication"
    )

    init_logger()


def pytest_collection_modifyitems(config, items):
    """
    Tag tests by directory and skip browser tests unless requested.
    """
    run_ui = config.getoption("--run-ui") or os.environ.get("RUN_UI_TESTS") == "1"
    skip_ui = pytest.mark.skip(reason="browser UI tests need --run-ui or RUN_UI_TESTS=1")

    for item in items:
        path = str(item.path)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            if not run_ui:
                item.add_marker(skip_ui)

        if f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    return [
        "",
        "=" * 60,
        "Book Store UI Test Suite",
        "=" * 60,
        "",
    ]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
