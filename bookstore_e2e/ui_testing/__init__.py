"""Playwright UI suite for the Book Store application."""
