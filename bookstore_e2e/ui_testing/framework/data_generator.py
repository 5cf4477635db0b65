"""
================================================================================
Test Data Generator
================================================================================

Randomized values for UI form fixtures and timestamped artifact names.

Features:
- Phone numbers, passwords and alphanumeric codes from a seedable RNG
- Filesystem-safe timestamps for screenshot names
- Module-level helpers backed by a shared default generator

Nothing here guarantees uniqueness; collisions within a single run are merely
unlikely.

================================================================================
"""

from __future__ import annotations

import math
import random
import string
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from bookstore_e2e.common.log_setup import ensure_directory


MAX_PHONE_NUMBER = 99999999999
PASSWORD_LENGTH = 7
DEFAULT_CODE_LENGTH = 6

BASE36_DIGITS = string.digits + string.ascii_lowercase

# Standard 62-character alphabet used by default.
CODE_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

# Alphabet of the fixtures recorded by the earlier suite: "T" repeated where
# "Y" belongs and no lowercase "j". Pass it explicitly to reproduce old codes.
LEGACY_CODE_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXTZabcdefghiklmnopqrstuvwxyz"

SCREENSHOT_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

# A double carries ~10.3 base-36 digits of precision
_MAX_FRACTION_DIGITS = 11


def base36_fraction(value: float, max_digits: int = _MAX_FRACTION_DIGITS) -> str:
    """
    Base-36 digits after the radix point of ``value`` in ``[0, 1)``.

    Trailing zeros are not emitted, so short expansions are possible for
    values like 0.5 ("i").
    """
    if not 0 <= value < 1:
        raise ValueError(f"Expected a fraction in [0, 1), got {value}")

    digits = []
    fraction = value
    while fraction > 0 and len(digits) < max_digits:
        fraction *= 36
        digit = int(fraction)
        digits.append(BASE36_DIGITS[digit])
        fraction -= digit
    return "".join(digits)


class DataGenerator:
    """
    Generator for synthetic UI test values.

    Usage:
        generator = DataGenerator(seed=42)
        phone = generator.random_phone_number()
        code = generator.random_code(10)
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Args:
            seed: Seed for a private RNG, for reproducible values
            rng: Explicit RNG to draw from (takes precedence over ``seed``)
        """
        self._rng = rng or random.Random(seed)

    def random_phone_number(self) -> int:
        """Integer in ``[1, 99999999999]``, no formatting."""
        return min(math.floor(self._rng.random() * MAX_PHONE_NUMBER + 1), MAX_PHONE_NUMBER)

    def random_password(self) -> str:
        """
        Exactly 7 characters from ``[0-9a-z]``.

        Taken from the end of the base-36 expansion of a random fraction;
        draws whose expansion is shorter than 7 digits are re-rolled.
        """
        while True:
            digits = base36_fraction(self._rng.random())
            if len(digits) >= PASSWORD_LENGTH:
                return digits[-PASSWORD_LENGTH:]
            logger.debug(f"Re-rolling short base-36 draw: {digits!r}")

    def random_code(
        self,
        length: int = DEFAULT_CODE_LENGTH,
        alphabet: str = CODE_ALPHABET,
    ) -> str:
        """
        ``length`` characters drawn uniformly, with replacement, from ``alphabet``.

        Raises:
            ValueError: If ``length`` is negative or ``alphabet`` is empty
        """
        if length < 0:
            raise ValueError(f"Code length must be non-negative, got {length}")
        if not alphabet:
            raise ValueError("Code alphabet must not be empty")
        return "".join(
            alphabet[math.floor(self._rng.random() * len(alphabet))]
            for _ in range(length)
        )


def screenshot_timestamp(now: Optional[datetime] = None) -> str:
    """
    Local time as ``YYYY-MM-DD_HH-mm-ss``.

    Zero-padded and free of colons and spaces, so it is safe as a filename.
    """
    return (now or datetime.now()).strftime(SCREENSHOT_TIMESTAMP_FORMAT)


async def take_screenshot(
    page,
    directory: Union[str, Path],
    now: Optional[datetime] = None,
    full_page: bool = False,
) -> Path:
    """
    Save the current view of ``page`` as ``<timestamp>.png`` under ``directory``.

    Returns:
        Path to the saved screenshot
    """
    target_dir = ensure_directory(directory)
    filepath = target_dir / f"{screenshot_timestamp(now)}.png"
    await page.screenshot(path=str(filepath), full_page=full_page)
    logger.debug(f"Screenshot saved: {filepath}")
    return filepath


# ================================================================================
# Convenience Functions
# ================================================================================

_default_generator = DataGenerator()


def random_phone_number() -> int:
    """Quick helper backed by the shared generator."""
    return _default_generator.random_phone_number()


def random_password() -> str:
    """Quick helper backed by the shared generator."""
    return _default_generator.random_password()


def random_code(length: int = DEFAULT_CODE_LENGTH, alphabet: str = CODE_ALPHABET) -> str:
    """Quick helper backed by the shared generator."""
    return _default_generator.random_code(length, alphabet)


__all__ = [
    "CODE_ALPHABET",
    "DataGenerator",
    "LEGACY_CODE_ALPHABET",
    "base36_fraction",
    "random_code",
    "random_password",
    "random_phone_number",
    "screenshot_timestamp",
    "take_screenshot",
]
