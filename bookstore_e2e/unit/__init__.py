"""Unit tests for the UI framework, run without a browser."""
