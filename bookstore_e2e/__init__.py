"""
Book Store end-to-end UI test suite.

This package is importable so that:
  - Page Objects and framework helpers can be shared across test modules
  - the programmatic runner (`run_tests.py`) can locate test paths
  - unit tests can exercise the framework without a browser

All defaults point at the public demo application and contain no secrets.
"""

__version__ = "1.0.0"
